from __future__ import annotations

import argparse
import importlib
import logging

from rich.console import Console
from rich.table import Table

from .config.loader import load_settings
from .core.errors import ConfigError
from .core.manager import EventManager
from .plugins.loader import load_plugins

logger = logging.getLogger("eventcore")


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="eventcore", description="In-process event dispatcher")
    p.add_argument("--config", help="Path to YAML config", default=None)
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--plugins", help="Directory of listener plugins", default=None)

    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("listeners", help="List listeners registered by plugins")
    publish = sub.add_parser("publish", help="Publish an event to plugin listeners")
    publish.add_argument("event", help="Event class as module:ClassName, constructed without arguments")
    return p


def _resolve_event_class(target: str) -> type:
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise SystemExit(f"Event class must look like module:ClassName, got {target!r}")
    try:
        obj = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as exc:
        raise SystemExit(f"Cannot import {target}: {exc}") from exc
    if not isinstance(obj, type):
        raise SystemExit(f"{target} is not a class")
    return obj


def render_listeners(manager: EventManager, console: Console) -> None:
    table = Table(title="Registered listeners")
    table.add_column("Key", style="bold")
    table.add_column("Listener")
    table.add_column("Event classes")
    for reg in manager.registry.registrations():
        classes = ", ".join(cls.__qualname__ for cls in reg.event_classes) or "[italic]all events[/]"
        table.add_row(reg.key, repr(reg.listener), classes)
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    args = _build_arg_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, settings.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("eventcore settings: %s", settings)

    manager = EventManager.from_settings(settings)
    plugins = load_plugins(manager, args.plugins or settings.plugin_dir)
    logger.debug("Plugins loaded: %s", plugins)

    if args.command == "listeners":
        render_listeners(manager, Console())
    elif args.command == "publish":
        event_class = _resolve_event_class(args.event)
        try:
            event = event_class()
        except TypeError as exc:
            raise SystemExit(f"Cannot construct {args.event} without arguments: {exc}") from exc
        manager.publish(event)
        logger.info("Published %s to %d listeners", event_class.__name__, len(manager.registry.matching_listeners(event_class)))
