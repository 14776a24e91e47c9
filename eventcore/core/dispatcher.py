from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .registry import ListenerRegistry

if TYPE_CHECKING:
    from ..observability.prometheus import DispatchMetrics

logger = logging.getLogger("eventcore.dispatcher")


class Dispatcher:
    """Deliver events to the listeners a registry considers interested.

    Delivery is synchronous and happens in the calling thread, outside the
    registry lock. With ``isolate_errors`` enabled a raising listener is logged
    and the remaining listeners still run; otherwise the exception propagates
    out of :meth:`publish` and later listeners are skipped.
    """

    def __init__(
        self,
        registry: ListenerRegistry,
        isolate_errors: bool = True,
        metrics: DispatchMetrics | None = None,
    ) -> None:
        self.registry = registry
        self.isolate_errors = isolate_errors
        self.metrics = metrics

    def publish(self, event: Any) -> None:
        if event is None:
            logger.warning("Null event published; nothing dispatched")
            if self.metrics is not None:
                self.metrics.null_events.inc()
            return

        event_class = type(event)
        event_type = event_class.__name__
        listeners = self.registry.matching_listeners(event_class)
        if self.metrics is not None:
            self.metrics.published.labels(event_type=event_type).inc()
        if not listeners:
            logger.debug("Publishing %s with no interested listeners", event_type)
            return

        logger.debug("Publishing %s to %d listeners", event_type, len(listeners))
        for listener in listeners:
            try:
                listener.handle_event(event)
            except Exception:
                if self.metrics is not None:
                    self.metrics.failures.labels(event_type=event_type).inc()
                if not self.isolate_errors:
                    raise
                logger.exception("Listener %r failed handling %s", listener, event_type)
                continue
            if self.metrics is not None:
                self.metrics.invocations.labels(event_type=event_type).inc()
