from __future__ import annotations

from typing import Any, Callable, Iterable, Protocol, runtime_checkable


@runtime_checkable
class EventListener(Protocol):
    """Capability implemented by anything that wants to receive events.

    ``handled_event_classes`` returning an empty iterable means the listener
    receives every event.
    """

    def handle_event(self, event: Any) -> None:
        ...

    def handled_event_classes(self) -> Iterable[type]:
        ...


class FunctionListener:
    """Wrap a plain callable as an :class:`EventListener`."""

    def __init__(self, handler: Callable[[Any], None], *event_classes: type) -> None:
        self.handler = handler
        self.event_classes = tuple(event_classes)

    def handle_event(self, event: Any) -> None:
        self.handler(event)

    def handled_event_classes(self) -> tuple[type, ...]:
        return self.event_classes

    def __repr__(self) -> str:
        name = getattr(self.handler, "__qualname__", repr(self.handler))
        classes = ", ".join(cls.__name__ for cls in self.event_classes) or "*"
        return f"FunctionListener({name} <- {classes})"
