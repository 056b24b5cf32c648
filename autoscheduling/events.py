"""Minimal in-process event bus for engine notifications."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List

from autoscheduling.logger import get_logger

logger = get_logger(__name__)

SCHEDULE_GENERATED = "schedule_generated"

Handler = Callable[[Dict[str, Any]], None]


class EventBus:
    """Synchronous publish/subscribe keyed by event name."""

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, event: str, handler: Handler) -> None:
        self._handlers[event].append(handler)

    def unsubscribe(self, event: str, handler: Handler) -> None:
        if handler in self._handlers.get(event, []):
            self._handlers[event].remove(handler)

    def emit(self, event: str, payload: Dict[str, Any]) -> int:
        """
        Deliver ``payload`` to every handler of ``event`` in subscription order.

        A failing handler is logged and skipped; notification problems never
        reach the publisher.

        Returns:
            Number of handlers that ran without raising
        """
        delivered = 0
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(payload)
                delivered += 1
            except Exception:  # noqa: BLE001
                logger.exception("Handler %r failed for event %s", handler, event)
        return delivered
