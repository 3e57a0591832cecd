import logging
from typing import Optional, Sequence

from sqlalchemy.engine import Engine

from cdc_snapshot.catalog import CatalogReader
from cdc_snapshot.errors import UnknownTablesError
from cdc_snapshot.signaling import SignalRecord, SignalWriter
from cdc_snapshot.validators import not_empty, partition_known


class SnapshotRequester:
    """Validates table names against the catalog, then writes one snapshot signal.

    Nothing is written unless every requested table exists.
    """

    def __init__(self, engine: Engine, signal_table: str,
                 catalog: Optional[CatalogReader] = None,
                 writer: Optional[SignalWriter] = None):
        self.engine = engine
        self.catalog = catalog or CatalogReader(engine)
        self.writer = writer or SignalWriter(engine, signal_table)
        self.logger = logging.getLogger(__name__)

    def request(self, tables: Sequence[str]) -> SignalRecord:
        not_empty(tables, 'tables')

        known = self.catalog.list_tables()
        present, absent = partition_known(tables, known)
        if absent:
            self.logger.debug(f"Unknown tables: {absent}")
            raise UnknownTablesError(absent)

        self.logger.debug(f"All {len(present)} tables found in catalog")
        return self.writer.write(SignalRecord.execute_snapshot(tables))
