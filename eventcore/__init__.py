from .core import (
    ConfigError,
    Dispatcher,
    Event,
    EventCoreError,
    EventListener,
    EventManager,
    FunctionListener,
    InvalidArgument,
    ListenerRegistry,
)

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
]

# eventcore.config.*         – import on demand
# eventcore.plugins.*        – import on demand
