"""
Signal records and the writer that inserts them into the signaling table.

A row in the signaling table is read by the capture connector as a command.
Only ``execute-snapshot`` is produced here.
"""
from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass
from typing import Sequence

from sqlalchemy import text
from sqlalchemy.engine import Engine

from cdc_snapshot.errors import ConfigError

EXECUTE_SNAPSHOT = 'execute-snapshot'
DATA_COLLECTIONS = 'data-collections'


def build_payload(tables: Sequence[str]) -> str:
    return json.dumps({DATA_COLLECTIONS: list(tables)})


@dataclass(frozen=True)
class SignalRecord:
    id: str
    type: str
    data: str

    @classmethod
    def execute_snapshot(cls, tables: Sequence[str]) -> SignalRecord:
        return cls(id=str(uuid.uuid4()), type=EXECUTE_SNAPSHOT, data=build_payload(tables))


def quote_table(engine: Engine, name: str) -> str:
    """Quote a possibly schema-qualified table name for the engine's dialect."""
    parts = name.split('.')
    if any(not p for p in parts):
        raise ConfigError(f'Invalid signaling table name: {name!r}')
    preparer = engine.dialect.identifier_preparer
    return '.'.join(preparer.quote(p) for p in parts)


class SignalWriter:

    def __init__(self, engine: Engine, table: str):
        self.engine = engine
        self.table = table
        self.quoted_table = quote_table(engine, table)
        self.logger = logging.getLogger(__name__)

    def write(self, record: SignalRecord) -> SignalRecord:
        sql = text(f"INSERT INTO {self.quoted_table} VALUES (:id, :type, :data)")
        with self.engine.begin() as conn:
            conn.execute(sql, {'id': record.id, 'type': record.type, 'data': record.data})

        self.logger.info(f"Signal {record.id} written to {self.table}: {record.data}")
        return record
