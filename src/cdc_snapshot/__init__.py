"""Trigger ad-hoc CDC snapshots through the connector's signaling table."""

__version__ = '0.3.0'
