from __future__ import annotations

import logging
import weakref
from abc import get_cache_token
from dataclasses import dataclass
from threading import RLock

from .errors import InvalidArgument
from .listener import EventListener

logger = logging.getLogger("eventcore.registry")


@dataclass(frozen=True, slots=True)
class Registration:
    key: str
    listener: EventListener
    event_classes: tuple[type, ...]

    @property
    def catch_all(self) -> bool:
        return not self.event_classes


class ListenerRegistry:
    """Keyed listener store with derived per-class and catch-all indexes.

    ``_registrations`` is the source of truth. ``_by_class`` and ``_catch_all``
    are rebuilt from it incrementally on every mutation and never hold a key
    that is absent from ``_registrations``. All state, including the per-class
    match cache, is guarded by a single re-entrant lock. The match cache holds
    event classes weakly and is dropped whenever an ABC gains a virtual
    subclass, since that can change what ``issubclass`` reports.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, Registration] = {}
        self._by_class: dict[type, dict[str, EventListener]] = {}
        self._catch_all: dict[str, EventListener] = {}
        self._match_cache: weakref.WeakKeyDictionary[type, tuple[EventListener, ...]] = weakref.WeakKeyDictionary()
        self._abc_token = get_cache_token()
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def register(self, key: str, listener: EventListener) -> None:
        """Register *listener* under *key*, replacing any listener already there.

        Raises
        ------
        InvalidArgument
            If *key* is empty or not a string, *listener* is ``None`` or does
            not implement :class:`EventListener`, or a declared event type is
            not a class.
        """
        if not isinstance(key, str) or not key:
            raise InvalidArgument(f"Key for the listener must be a non-empty string: {key!r}")
        if listener is None:
            raise InvalidArgument("The listener must not be None")
        if not isinstance(listener, EventListener):
            raise InvalidArgument(f"Object does not implement EventListener: {listener!r}")

        event_classes = _declared_classes(listener)
        registration = Registration(key=key, listener=listener, event_classes=event_classes)

        with self._lock:
            if key in self._registrations:
                self._remove(key)
            self._add(registration)
            self._match_cache.clear()

        logger.debug(
            "Registered listener %r under '%s' for %s",
            listener,
            key,
            [cls.__name__ for cls in event_classes] or "all events",
        )

    def unregister(self, key: str) -> None:
        """Remove the listener registered under *key*; unknown keys are ignored."""
        with self._lock:
            registration = self._remove(key)
            if registration is None:
                return
            self._match_cache.clear()
        logger.debug("Unregistered listener %r from '%s'", registration.listener, key)

    def listeners(self) -> dict[str, EventListener]:
        """Return a copy of the key -> listener mapping."""
        with self._lock:
            return {key: reg.listener for key, reg in self._registrations.items()}

    def registrations(self) -> list[Registration]:
        with self._lock:
            return list(self._registrations.values())

    def matching_listeners(self, event_class: type) -> tuple[EventListener, ...]:
        """Return the listeners interested in events of *event_class*.

        Listeners registered for *event_class* or any of its superclasses come
        first, in the order their declared classes were first registered,
        followed by catch-all listeners. A listener object reachable more than
        once appears only at its first position.
        """
        with self._lock:
            token = get_cache_token()
            if token != self._abc_token:
                self._match_cache.clear()
                self._abc_token = token
            cached = self._match_cache.get(event_class)
            if cached is not None:
                return cached

            seen: set[int] = set()
            matched: list[EventListener] = []
            buckets = [
                bucket
                for declared, bucket in self._by_class.items()
                if issubclass(event_class, declared)
            ]
            buckets.append(self._catch_all)
            for bucket in buckets:
                for listener in bucket.values():
                    if id(listener) in seen:
                        continue
                    seen.add(id(listener))
                    matched.append(listener)

            result = tuple(matched)
            self._match_cache[event_class] = result
            return result

    def clear(self) -> None:
        with self._lock:
            self._registrations.clear()
            self._by_class.clear()
            self._catch_all.clear()
            self._match_cache.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._registrations

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrations)

    # ------------------------------------------------------------------
    # Internal (callers hold the lock)
    # ------------------------------------------------------------------

    def _add(self, registration: Registration) -> None:
        key, listener = registration.key, registration.listener
        if registration.catch_all:
            self._catch_all[key] = listener
        else:
            for cls in registration.event_classes:
                self._by_class.setdefault(cls, {})[key] = listener
        self._registrations[key] = registration

    def _remove(self, key: str) -> Registration | None:
        registration = self._registrations.pop(key, None)
        if registration is None:
            return None
        self._catch_all.pop(key, None)
        for cls in registration.event_classes:
            bucket = self._by_class.get(cls)
            if bucket is None:
                continue
            bucket.pop(key, None)
            if not bucket:
                del self._by_class[cls]
        return registration


def _declared_classes(listener: EventListener) -> tuple[type, ...]:
    declared = listener.handled_event_classes() or ()
    classes: list[type] = []
    for cls in declared:
        if not isinstance(cls, type):
            raise InvalidArgument(f"Declared event type must be a class, got {cls!r}")
        if cls not in classes:
            classes.append(cls)
    return tuple(classes)
