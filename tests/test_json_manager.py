import json

import pytest

from workout_map.main import setup_session_store
from workout_map.storage.json_manager import InMemoryStorage, JSONStorageManager


@pytest.fixture
def manager(tmp_path, config):
    return JSONStorageManager(str(tmp_path / "data"), config=config)


def test_read_absent_key_returns_none(manager):
    assert manager.read("workouts") is None


def test_write_then_read(manager):
    manager.write("workouts", [{"id": "a", "distance_km": 5.0}])
    assert manager.read("workouts") == [{"id": "a", "distance_km": 5.0}]
    assert json.loads(manager.read_raw("workouts")) == [{"id": "a", "distance_km": 5.0}]


def test_write_leaves_no_temp_files(manager):
    manager.write("workouts", [])
    manager.write("workouts", [1, 2, 3])
    leftovers = [p.name for p in manager.data_dir.iterdir() if p.name.endswith(".tmp")]
    assert leftovers == []


def test_malformed_file_raises_value_error(manager):
    manager.path_for("workouts").write_text("[{broken", encoding="utf-8")
    with pytest.raises(ValueError):
        manager.read("workouts")


def test_remove(manager):
    manager.write("workouts", [])
    manager.remove("workouts")
    assert manager.read("workouts") is None
    # removing again is harmless
    manager.remove("workouts")


@pytest.mark.parametrize("key", ["", "../escape", "nested/key"])
def test_invalid_keys_rejected(manager, key):
    with pytest.raises(ValueError):
        manager.path_for(key)


def test_backups_are_pruned(tmp_path, config):
    config.update_storage_settings(max_backup_files=2)
    manager = JSONStorageManager(str(tmp_path), config=config)
    for i in range(5):
        manager.write("workouts", list(range(i)))

    backups = list(manager.backup_dir.glob("workouts_*.json"))
    assert len(backups) == 2
    assert manager.read("workouts") == [0, 1, 2, 3]


def test_backups_disabled(tmp_path, config):
    config.update_storage_settings(backup_enabled=False)
    manager = JSONStorageManager(str(tmp_path), config=config)
    manager.write("workouts", [1])
    manager.write("workouts", [2])
    assert manager.get_storage_stats()['backup_count'] == 0


def test_storage_stats(manager):
    manager.write("workouts", [1, 2])
    stats = manager.get_storage_stats()
    assert stats['keys'] == ["workouts"]
    assert stats['storage_size_mb'] > 0


def test_in_memory_storage_returns_plain_copies():
    storage = InMemoryStorage()
    value = [{"coords": (1.0, 2.0)}]
    storage.write("workouts", value)

    loaded = storage.read("workouts")
    assert loaded == [{"coords": [1.0, 2.0]}]
    assert loaded is not value


def test_file_backed_store_survives_restart(tmp_path, config):
    data_dir = str(tmp_path / "history")
    store = setup_session_store(data_dir, config=config)
    store.on_position((10.0, 20.0))
    store.begin_placement((10, 20))
    record = store.create_workout("running", 5, 25, 180)

    restarted = setup_session_store(data_dir, config=config)
    assert [r.id for r in restarted.records] == [record.id]
    assert restarted.records[0].derived_metric == 5.0

    restarted.reset()
    assert len(setup_session_store(data_dir, config=config)) == 0
