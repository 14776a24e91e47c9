from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, start_http_server


class DispatchMetrics:
    """Prometheus counters describing dispatcher traffic.

    Each instance owns its own ``CollectorRegistry`` unless one is passed in,
    so several managers can coexist in one process.
    """

    def __init__(self, port: int = 9109, registry: CollectorRegistry | None = None) -> None:
        self.port = int(port)
        self.registry = registry if registry is not None else CollectorRegistry()
        self._started = False

        self.published = Counter(
            "eventcore_events_published",
            "Events published, by concrete event class",
            ["event_type"],
            registry=self.registry,
        )
        self.invocations = Counter(
            "eventcore_listener_invocations",
            "Listener invocations that returned normally",
            ["event_type"],
            registry=self.registry,
        )
        self.failures = Counter(
            "eventcore_listener_failures",
            "Listener invocations that raised",
            ["event_type"],
            registry=self.registry,
        )
        self.null_events = Counter(
            "eventcore_null_events",
            "Publish calls made with no event",
            registry=self.registry,
        )

    def start(self) -> None:
        if self._started:
            return
        start_http_server(self.port, registry=self.registry)
        self._started = True
