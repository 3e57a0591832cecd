import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine

from cdc_snapshot.errors import ConfigError
from cdc_snapshot.validators import missing_keys


APP_NAME = 'cdc-snapshot'
ENV_PREFIX = 'CDC_SNAPSHOT_'
DEFAULT_DRIVER = 'mysql+pymysql'
REQUIRED_KEYS = ['hostname', 'username', 'password', 'database', 'table']
OPTIONAL_KEYS = ['port', 'driver']


def default_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    environ = os.environ if environ is None else environ
    home = environ.get('HOME')
    if not home:
        raise ConfigError(
            'HOME is not set; cannot locate ~/.config/%s/config '
            '(set HOME or pass --config PATH)' % APP_NAME
        )
    return Path(home) / '.config' / APP_NAME / 'config'


@dataclass(frozen=True)
class ConnectionConfig:
    hostname: str
    username: str
    password: str = field(repr=False)
    database: str
    table: str
    port: Optional[int] = None
    driver: str = DEFAULT_DRIVER

    def url(self) -> URL:
        return URL.create(
            self.driver,
            username=self.username,
            password=self.password,
            host=self.hostname,
            port=self.port,
            database=self.database,
        )


class ConfigManager:
    """Resolves connection settings: config file < environment < CLI flags."""

    def __init__(self, config_path: Optional[Path] = None,
                 overrides: Optional[Mapping[str, Any]] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.logger = logging.getLogger(__name__)
        self.environ = os.environ if environ is None else environ
        self.explicit_path = config_path is not None

        if config_path is None:
            config_path = default_config_path(self.environ)

        self.config_path = Path(config_path)
        self.overrides = dict(overrides or {})
        self.config = self._build()

    def _load_file(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            if self.explicit_path:
                raise ConfigError(f'Config file not found: {self.config_path}')
            self.logger.debug(f'No config file at {self.config_path}')
            return {}

        try:
            with self.config_path.open(encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f'Could not parse {self.config_path}: {e}') from e
        except OSError as e:
            raise ConfigError(f'Could not read {self.config_path}: {e}') from e

        if not isinstance(data, dict):
            raise ConfigError(f'{self.config_path} must contain a JSON object')

        self.logger.debug(f'Loaded config from {self.config_path}')
        return data

    def _from_env(self) -> Dict[str, str]:
        values = {}
        for key in REQUIRED_KEYS + OPTIONAL_KEYS:
            value = self.environ.get(ENV_PREFIX + key.upper())
            if value:
                values[key] = value
                self.logger.debug(f'{key} overridden by {ENV_PREFIX}{key.upper()}')
        return values

    def _build(self) -> ConnectionConfig:
        merged: Dict[str, Any] = {}
        merged.update(self._load_file())
        merged.update(self._from_env())
        merged.update({k: v for k, v in self.overrides.items() if v is not None})

        missing = missing_keys(merged, REQUIRED_KEYS)
        if missing:
            raise ConfigError(
                f"Missing connection settings: {', '.join(missing)}. "
                f"Set them in {self.config_path}, as {ENV_PREFIX}<KEY> "
                f"environment variables, or with command-line flags"
            )

        port = merged.get('port')
        if port in (None, ''):
            port = None
        else:
            try:
                port = int(port)
            except (TypeError, ValueError):
                raise ConfigError(f'port must be an integer, got {port!r}') from None

        known = {f.name for f in fields(ConnectionConfig)}
        unknown = sorted(set(merged) - known)
        if unknown:
            self.logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

        values = {k: str(merged[k]) for k in REQUIRED_KEYS}
        return ConnectionConfig(
            port=port,
            driver=str(merged.get('driver') or DEFAULT_DRIVER),
            **values,
        )

    def get_engine(self) -> Engine:
        self.logger.debug(
            f'Connecting to {self.config.driver}://{self.config.username}@'
            f'{self.config.hostname}/{self.config.database}'
        )
        return create_engine(self.config.url())
