import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from cdc_snapshot import __version__
from cdc_snapshot.config_manager import APP_NAME, ConfigManager
from cdc_snapshot.errors import ConfigError, UnknownTablesError
from cdc_snapshot.logging_setup import setup_logger
from cdc_snapshot.snapshot_requester import SnapshotRequester


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description='Request ad-hoc snapshots by writing to the CDC signaling table',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('-c', '--config', type=Path,
                        help=f'Config file (default: ~/.config/{APP_NAME}/config)')

    conn = parser.add_argument_group('connection overrides')
    conn.add_argument('-H', '--hostname', help='Database host')
    conn.add_argument('-u', '--username', help='Database user')
    conn.add_argument('-p', '--password', help='Database password')
    conn.add_argument('-d', '--database', help='Database name')
    conn.add_argument('-t', '--table', help='Signaling table, optionally schema-qualified')
    conn.add_argument('--port', help='Database port')
    conn.add_argument('--driver', help='SQLAlchemy driver, e.g. mysql+pymysql or postgresql+psycopg2')

    sub = parser.add_subparsers(dest='command')
    snap = sub.add_parser('snapshot', help='execute a snapshot for the given tables')
    snap.add_argument('tables', nargs='*', metavar='TABLE', help='schema.table to snapshot')
    snap.set_defaults(print_command_help=snap.print_help)
    return parser


def run_snapshot(manager: ConfigManager, tables: List[str]) -> int:
    print(f"Executing snapshot for {tables}")

    engine = manager.get_engine()
    try:
        requester = SnapshotRequester(engine, manager.config.table)
        record = requester.request(tables)
    except UnknownTablesError as e:
        print("Error executing snapshot!", file=sys.stderr)
        print(f"  unknown tables: {e.tables}", file=sys.stderr)
        return 1
    finally:
        engine.dispose()

    print(f"Signal {record.id} written to {manager.config.table}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logger(verbose=args.verbose, level=os.getenv('LOG_LEVEL', 'WARNING'))
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.command != 'snapshot':
        parser.print_help(sys.stderr)
        return 2

    if not args.tables:
        args.print_command_help(sys.stderr)
        return 2

    overrides = {
        'hostname': args.hostname,
        'username': args.username,
        'password': args.password,
        'database': args.database,
        'table': args.table,
        'port': args.port,
        'driver': args.driver,
    }

    try:
        manager = ConfigManager(args.config, overrides)
        return run_snapshot(manager, args.tables)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
