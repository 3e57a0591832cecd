import json

import pytest

from cdc_snapshot.errors import UnknownTablesError
from cdc_snapshot.snapshot_requester import SnapshotRequester


class StubCatalog:
    def __init__(self, tables):
        self.tables = set(tables)
        self.calls = 0

    def list_tables(self):
        self.calls += 1
        return self.tables


def make_requester(engine, tables):
    return SnapshotRequester(engine, "signaling", catalog=StubCatalog(tables))


def test_known_tables_write_one_signal(engine, signal_rows):
    rec = make_requester(engine, {"db.users", "db.orders"}).request(["db.users"])
    rows = signal_rows()
    assert len(rows) == 1
    assert rows[0] == (rec.id, "execute-snapshot", '{"data-collections": ["db.users"]}')


def test_payload_keeps_supplied_order(engine, signal_rows):
    make_requester(engine, {"db.a", "db.b", "db.c"}).request(["db.c", "db.a", "db.b"])
    assert json.loads(signal_rows()[0][2]) == {"data-collections": ["db.c", "db.a", "db.b"]}


def test_unknown_table_writes_nothing(engine, signal_rows):
    with pytest.raises(UnknownTablesError) as exc:
        make_requester(engine, {"db.users"}).request(["db.users", "db.ghost"])
    assert exc.value.tables == ["db.ghost"]
    assert signal_rows() == []


def test_every_unknown_table_reported(engine, signal_rows):
    with pytest.raises(UnknownTablesError) as exc:
        make_requester(engine, {"db.users"}).request(["db.x", "db.users", "db.y"])
    assert exc.value.tables == ["db.x", "db.y"]
    assert "db.x, db.y" in str(exc.value)
    assert signal_rows() == []


def test_not_idempotent(engine, signal_rows):
    requester = make_requester(engine, {"db.users"})
    first = requester.request(["db.users"])
    second = requester.request(["db.users"])
    assert first.id != second.id
    assert len(signal_rows()) == 2


def test_catalog_read_once_per_request(engine):
    catalog = StubCatalog({"db.a", "db.b"})
    SnapshotRequester(engine, "signaling", catalog=catalog).request(["db.a", "db.b"])
    assert catalog.calls == 1


def test_empty_request_rejected(engine):
    catalog = StubCatalog({"db.a"})
    with pytest.raises(AssertionError):
        SnapshotRequester(engine, "signaling", catalog=catalog).request([])
    assert catalog.calls == 0
