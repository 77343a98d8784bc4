"""Backend transport and pairing collaborators."""

from casesync.http.backend import BackendClient, CaseBackend
from casesync.http.pairing import PairingProvider, StaticPairingProvider

__all__ = ["BackendClient", "CaseBackend", "PairingProvider", "StaticPairingProvider"]
