from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..observability.prometheus import DispatchMetrics
from .dispatcher import Dispatcher
from .listener import EventListener
from .registry import ListenerRegistry

if TYPE_CHECKING:
    from ..config.loader import EventCoreSettings

logger = logging.getLogger("eventcore")


class EventManager:
    """Owns one listener registry and the dispatcher reading from it.

    Any event passed to :meth:`publish` is handed to every listener whose
    declared event classes include the event's class or one of its bases, and
    to every listener that declared no classes at all.
    """

    def __init__(
        self,
        registry: ListenerRegistry | None = None,
        isolate_errors: bool = True,
        metrics: DispatchMetrics | None = None,
    ) -> None:
        self.registry = registry if registry is not None else ListenerRegistry()
        self.dispatcher = Dispatcher(self.registry, isolate_errors=isolate_errors, metrics=metrics)

    @classmethod
    def from_settings(cls, settings: EventCoreSettings) -> EventManager:
        metrics = None
        if settings.enable_prometheus:
            metrics = DispatchMetrics(port=settings.prometheus_port)
            metrics.start()
            logger.info("Prometheus exporter started on :%s", settings.prometheus_port)
        return cls(isolate_errors=settings.isolate_listener_errors, metrics=metrics)

    @property
    def metrics(self) -> DispatchMetrics | None:
        return self.dispatcher.metrics

    def register(self, key: str, listener: EventListener) -> None:
        self.registry.register(key, listener)

    def unregister(self, key: str) -> None:
        self.registry.unregister(key)

    def publish(self, event: Any) -> None:
        self.dispatcher.publish(event)

    def listeners(self) -> dict[str, EventListener]:
        return self.registry.listeners()
