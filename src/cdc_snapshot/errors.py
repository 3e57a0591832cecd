from __future__ import annotations
from typing import Sequence


class SnapshotError(Exception):
    """Base exception for cdc_snapshot errors."""


class ConfigError(SnapshotError):
    """Connection settings could not be resolved."""


class UnknownTablesError(SnapshotError):

    def __init__(self, tables: Sequence[str]):
        self.tables = list(tables)
        super().__init__(f"unknown tables: {', '.join(self.tables)}")
