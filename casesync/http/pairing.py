"""Pairing provider: supplies the case token once the device is paired."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from casesync.errors import NotPairedError

logger = logging.getLogger(__name__)


class PairingProvider(Protocol):
    def case_token(self) -> str:
        """Return the case token; raise `NotPairedError` when not paired."""


class StaticPairingProvider:
    """Holds a case token in memory (configured token or explicit pairing)."""

    def __init__(self, token: Optional[str] = None):
        self._token = token or None

    @property
    def is_paired(self) -> bool:
        return self._token is not None

    def pair(self, token: str) -> None:
        if not token or not token.strip():
            raise ValueError("case token must be a non-empty string")
        self._token = token.strip()
        logger.info("pairing_completed")

    def unpair(self) -> None:
        self._token = None
        logger.info("pairing_removed")

    def case_token(self) -> str:
        if self._token is None:
            raise NotPairedError("device is not paired")
        return self._token


__all__ = ["PairingProvider", "StaticPairingProvider"]
