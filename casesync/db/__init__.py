"""Persistence for case data.

Exposes engine construction helpers and the `CaseDataStore`, which owns the
persisted `AppData` aggregate.
"""

from casesync.db.base import build_engine, get_engine, get_sessionmaker, session_scope
from casesync.db.case_store import DEFAULT_STORE_KEY, CaseDataStore

__all__ = [
    "build_engine",
    "get_engine",
    "get_sessionmaker",
    "session_scope",
    "DEFAULT_STORE_KEY",
    "CaseDataStore",
]
