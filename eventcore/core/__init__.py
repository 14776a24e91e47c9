from .dispatcher import Dispatcher
from .errors import ConfigError, EventCoreError, InvalidArgument
from .event import Event
from .listener import EventListener, FunctionListener
from .manager import EventManager
from .registry import ListenerRegistry, Registration

__all__ = [
    "ConfigError",
    "Dispatcher",
    "Event",
    "EventCoreError",
    "EventListener",
    "EventManager",
    "FunctionListener",
    "InvalidArgument",
    "ListenerRegistry",
    "Registration",
]
