"""
JSON storage manager for the workout map system.
Handles persistence of workout history snapshots as JSON documents.
"""
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import os
import shutil
import tempfile

from ..utils.config import WorkoutMapConfig, get_config

logger = logging.getLogger(__name__)


class JSONStorageManager:
    """
    Key/value storage backed by one JSON file per key, with backup functionality.
    """

    def __init__(self, data_dir: Optional[str] = None,
                 config: Optional[WorkoutMapConfig] = None):
        self.config = config or get_config()
        self.data_dir = Path(data_dir) if data_dir else Path(self.config.storage.data_dir)
        self.data_dir.mkdir(exist_ok=True, parents=True)

        # Backup directory
        self.backup_dir = self.data_dir / "backups"
        if self.config.storage.backup_enabled:
            self.backup_dir.mkdir(exist_ok=True)

        logger.info(f"📁 JSON storage initialized: {self.data_dir}")

    def path_for(self, key: str) -> Path:
        if not key or Path(key).name != key:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def write(self, key: str, value: Any) -> None:
        """
        Replace the value stored under ``key``.

        The file is written to a temporary sibling and moved into place, so
        readers never see a half-written snapshot.
        """
        path = self.path_for(key)
        payload = json.dumps(value)

        if self.config.storage.backup_enabled and path.exists():
            self._create_backup(path, key)

        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, path)
        except OSError as e:
            logger.error(f"❌ Error writing {path}: {e}")
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug(f"✅ Stored {key} ({len(payload)} bytes)")

    def read(self, key: str) -> Optional[Any]:
        """
        Load the value stored under ``key``.

        Returns:
            The decoded value, or None if nothing is stored

        Raises:
            ValueError: if the stored file is not valid JSON
        """
        path = self.path_for(key)
        if not path.exists():
            logger.info(f"📄 No stored data for {key}")
            return None

        text = path.read_text(encoding="utf-8")
        return json.loads(text)

    def read_raw(self, key: str) -> Optional[str]:
        """Return the stored JSON text unchanged."""
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
            logger.info(f"🗑️ Removed stored data for {key}")

    def get_storage_stats(self) -> Dict[str, Any]:
        """Get statistics about stored data."""
        stats = {
            'keys': [],
            'storage_size_mb': 0,
            'backup_count': 0
        }

        for path in sorted(self.data_dir.glob("*.json")):
            stats['keys'].append(path.stem)
            stats['storage_size_mb'] += path.stat().st_size / (1024 * 1024)

        if self.backup_dir.exists():
            stats['backup_count'] = len(list(self.backup_dir.glob("*.json")))

        return stats

    def _create_backup(self, file_path: Path, key: str):
        """Create a backup of the specified file."""
        try:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            backup_path = self.backup_dir / f"{key}_{timestamp}.json"

            self.backup_dir.mkdir(exist_ok=True)
            shutil.copy2(file_path, backup_path)

            # Clean up old backups
            self._cleanup_old_backups(key)

        except OSError as e:
            logger.warning(f"⚠️ Could not create backup: {e}")

    def _cleanup_old_backups(self, key: str):
        """Remove old backup files, keeping only the most recent ones."""
        try:
            backup_files = sorted(
                self.backup_dir.glob(f"{key}_*.json"),
                key=lambda p: p.name,
                reverse=True
            )

            # Keep only the most recent backups
            max_backups = self.config.storage.max_backup_files
            for old_backup in backup_files[max_backups:]:
                old_backup.unlink()

        except OSError as e:
            logger.warning(f"⚠️ Could not cleanup old backups: {e}")


class InMemoryStorage:
    """
    Storage that keeps JSON text in a dict.

    Values go through the same JSON encoding as the file backend, so what
    comes back from ``read`` is plain data, never the objects that were
    written.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def write(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def read(self, key: str) -> Optional[Any]:
        text = self._data.get(key)
        if text is None:
            return None
        return json.loads(text)

    def read_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data
