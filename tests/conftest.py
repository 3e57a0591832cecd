import pytest
from sqlalchemy import create_engine, text

from cdc_snapshot.config_manager import ENV_PREFIX, OPTIONAL_KEYS, REQUIRED_KEYS


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(f"sqlite:///{tmp_path / 'signals.db'}")
    with eng.begin() as conn:
        conn.execute(text("CREATE TABLE signaling (id TEXT PRIMARY KEY, type TEXT, data TEXT)"))
    yield eng
    eng.dispose()


@pytest.fixture
def signal_rows(engine):
    def fetch():
        with engine.connect() as conn:
            return conn.execute(text("SELECT id, type, data FROM signaling")).fetchall()
    return fetch


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in REQUIRED_KEYS + OPTIONAL_KEYS:
        monkeypatch.delenv(ENV_PREFIX + key.upper(), raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path
