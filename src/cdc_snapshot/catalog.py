import logging
from typing import Set

import pandas as pd
from sqlalchemy import text
from sqlalchemy.engine import Engine


class CatalogReader:

    QUERY = (
        "SELECT CONCAT(table_schema, '.', table_name) AS qualified_name "
        "FROM information_schema.tables"
    )

    def __init__(self, engine: Engine):
        self.engine = engine
        self.logger = logging.getLogger(__name__)

    def list_tables(self) -> Set[str]:
        """Every ``schema.table`` name currently in the catalog."""
        df = pd.read_sql(text(self.QUERY), self.engine)
        tables = set(df.iloc[:, 0])
        self.logger.debug(f"Catalog holds {len(tables)} tables")
        return tables
