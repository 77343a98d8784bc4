"""Case Data Store: the persisted `AppData` aggregate and the synced flag.

Both values live in one key/value table. Each `save` writes inside a single
transaction, so a crash can never leave the tasks updated without the
matching symptom-onset date or synced flag. After `clear()` the store
refuses every operation except `exists()` and `load()` until it is loaded
again.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from casesync.db.base import session_scope
from casesync.db.models import StoreEntry
from casesync.errors import StoreClearedError, StoreCorruptedError
from casesync.models.app_data import AppData

logger = logging.getLogger(__name__)

DEFAULT_STORE_KEY = "appData"


class CaseDataStore:
    def __init__(self, engine: Engine, *, key: str = DEFAULT_STORE_KEY):
        self._engine = engine
        self._key = key
        self._synced_key = f"{key}.isSynced"
        self._cleared = False

    def _require_active(self) -> None:
        if self._cleared:
            raise StoreClearedError("case store was cleared; load() it before further use")

    @staticmethod
    def _put(session: Session, key: str, value: str) -> None:
        entry = session.get(StoreEntry, key)
        if entry is None:
            session.add(StoreEntry(key=key, value=value))
        else:
            entry.value = value

    def exists(self) -> bool:
        with session_scope(self._engine) as session:
            return session.get(StoreEntry, self._key) is not None

    def load(self) -> AppData:
        """Return the stored AppData, or an empty one when nothing is stored."""
        self._cleared = False
        with session_scope(self._engine) as session:
            entry = session.get(StoreEntry, self._key)
            raw = entry.value if entry is not None else None
        if raw is None:
            return AppData.empty()
        try:
            return AppData.model_validate_json(raw)
        except ValidationError as e:
            logger.error("case_store_corrupted key=%s", self._key, exc_info=True)
            raise StoreCorruptedError(f"stored case data under {self._key!r} is unreadable") from e

    def save(self, app_data: AppData, *, is_synced: bool | None = None) -> None:
        """Persist `app_data` and optionally the synced flag in one transaction."""
        self._require_active()
        blob = app_data.model_dump_json(by_alias=True)
        with session_scope(self._engine) as session:
            self._put(session, self._key, blob)
            if is_synced is not None:
                self._put(session, self._synced_key, "true" if is_synced else "false")
        logger.debug("case_store_saved key=%s tasks=%d", self._key, len(app_data.tasks))

    def is_synced(self) -> bool:
        self._require_active()
        with session_scope(self._engine) as session:
            entry = session.get(StoreEntry, self._synced_key)
            return True if entry is None else entry.value == "true"

    def set_synced(self, value: bool) -> None:
        self._require_active()
        with session_scope(self._engine) as session:
            self._put(session, self._synced_key, "true" if value else "false")

    def clear(self) -> None:
        with session_scope(self._engine) as session:
            session.execute(
                delete(StoreEntry).where(StoreEntry.key.in_([self._key, self._synced_key]))
            )
        self._cleared = True
        logger.info("case_store_cleared key=%s", self._key)

    def keys(self) -> list[str]:
        """Stored keys belonging to this store (diagnostics)."""
        with session_scope(self._engine) as session:
            rows = session.execute(
                select(StoreEntry.key).where(StoreEntry.key.in_([self._key, self._synced_key]))
            ).scalars().all()
        return sorted(rows)


__all__ = ["DEFAULT_STORE_KEY", "CaseDataStore"]
