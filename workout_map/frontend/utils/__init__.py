"""Helpers for formatting values for display."""

from .data_formatter import DataFormatter

__all__ = ["DataFormatter"]
