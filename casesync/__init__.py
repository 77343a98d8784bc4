"""casesync: contact-tracing case synchronization engine.

Keeps a locally persisted case (tasks, questionnaires, symptom-onset date)
consistent with the backend questionnaire schema, reconciles answer edits and
tracks whether local changes still need uploading. `create_case_manager`
wires the store, backend client and pairing provider from configuration.
"""

from __future__ import annotations

from casesync.config import AppConfig, load_config
from casesync.db.base import get_engine
from casesync.db.case_store import CaseDataStore
from casesync.http.backend import BackendClient
from casesync.http.pairing import PairingProvider, StaticPairingProvider
from casesync.logic.case_manager import CaseManager
from casesync.logging_setup import configure_logging


def create_case_manager(
    config: AppConfig | None = None,
    pairing: PairingProvider | None = None,
) -> CaseManager:
    """Build a `CaseManager` from `config` (loaded from file/env by default)."""
    configure_logging()
    cfg = config or load_config()
    store = CaseDataStore(get_engine(cfg.storage.database_url), key=cfg.storage.store_key)
    backend = BackendClient(cfg.backend.base_url, timeout=cfg.backend.timeout_seconds)
    return CaseManager(store, backend, pairing or StaticPairingProvider(cfg.case_token))


__all__ = ["create_case_manager", "CaseManager"]
