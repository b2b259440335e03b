"""In-process publish/subscribe bus.

Handlers run synchronously in registration order. Each handler call is
isolated: an exception is logged and the remaining handlers still run.
"""

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class EventBus:
    """Named-topic publish/subscribe without unsubscribe."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, topic: str, handler: Handler) -> None:
        """Register ``handler`` for ``topic``."""
        self._handlers[topic].append(handler)

    def emit(self, topic: str, payload: Any = None) -> int:
        """Deliver ``payload`` to every handler of ``topic``.

        Returns:
            Number of handlers that raised.
        """
        failures = 0
        for handler in list(self._handlers.get(topic, ())):
            try:
                handler(payload)
            except Exception as e:
                failures += 1
                logger.error(
                    f"Handler {getattr(handler, '__name__', handler)!r} "
                    f"failed on '{topic}': {e}",
                    exc_info=True,
                )
        return failures

    def handler_count(self, topic: str) -> int:
        return len(self._handlers.get(topic, ()))
