"""Case event listeners.

Listeners are held through weak references so registering does not keep an
observer alive. Dead references are pruned on each notification pass;
delivery follows registration order.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, List, Protocol

logger = logging.getLogger(__name__)

TASKS_UPDATED = "case.tasks_updated"
SYNC_STATE_UPDATED = "case.sync_state_updated"


class CaseManagerListener(Protocol):
    def case_manager_did_update_tasks(self, case_manager: Any) -> None:
        """Called after the managed tasks changed."""

    def case_manager_did_update_sync_state(self, case_manager: Any) -> None:
        """Called after the synced flag changed."""


_HANDLERS = {
    TASKS_UPDATED: "case_manager_did_update_tasks",
    SYNC_STATE_UPDATED: "case_manager_did_update_sync_state",
}


class ListenerRegistry:
    def __init__(self) -> None:
        self._refs: List[weakref.ReferenceType] = []

    def add(self, listener: CaseManagerListener) -> None:
        self._refs.append(weakref.ref(listener))

    def __len__(self) -> int:
        return sum(1 for ref in self._refs if ref() is not None)

    def publish(self, event_type: str, case_manager: Any) -> None:
        """Deliver `event_type` to every live listener, in registration order."""
        method_name = _HANDLERS[event_type]
        live: List[weakref.ReferenceType] = []
        listeners = []
        for ref in self._refs:
            listener = ref()
            if listener is None:
                continue
            live.append(ref)
            listeners.append(listener)
        self._refs = live
        logger.debug("case_event type=%s listeners=%d", event_type, len(listeners))
        for listener in listeners:
            getattr(listener, method_name)(case_manager)


__all__ = [
    "TASKS_UPDATED",
    "SYNC_STATE_UPDATED",
    "CaseManagerListener",
    "ListenerRegistry",
]
