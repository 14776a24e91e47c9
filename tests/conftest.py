from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eventcore.core.event import Event


class RecordingListener:
    """Listener that records every event it receives."""

    def __init__(self, *classes: type, fail: bool = False) -> None:
        self.classes = list(classes)
        self.fail = fail
        self.events: list[Any] = []

    @property
    def count(self) -> int:
        return len(self.events)

    @property
    def called(self) -> bool:
        return bool(self.events)

    def handle_event(self, event: Any) -> None:
        self.events.append(event)
        if self.fail:
            raise RuntimeError("listener failure")

    def handled_event_classes(self) -> list[type]:
        return self.classes

    def __repr__(self) -> str:
        return f"RecordingListener({[c.__name__ for c in self.classes]})"


@dataclass
class OrderEvent(Event):
    order_id: str = "o-1"


@dataclass
class OrderPlacedEvent(OrderEvent):
    pass


@dataclass
class OrderCancelledEvent(OrderEvent):
    pass


@dataclass
class PaymentEvent(Event):
    amount: float = 10.0
