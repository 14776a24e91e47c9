from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

from eventcore.core.manager import EventManager

logger = logging.getLogger("eventcore.plugins")

DEFAULT_PLUGIN_DIR = Path.home() / ".eventcore" / "plugins"


def load_plugins(manager: EventManager, plugin_dir: str | Path | None = None) -> list[str]:
    """Import every ``*.py`` in *plugin_dir* and call its ``register(manager)``.

    Returns the names of the plugins that registered successfully. Plugins that
    fail to import or register are logged and skipped.
    """
    directory = Path(plugin_dir) if plugin_dir else DEFAULT_PLUGIN_DIR
    if not directory.is_dir():
        return []

    loaded: list[str] = []
    for file in sorted(directory.glob("*.py")):
        try:
            spec = importlib.util.spec_from_file_location(f"eventcore_user_plugin_{file.stem}", file)
            if spec is None or spec.loader is None:
                continue
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
            register = getattr(module, "register", None)
            if not callable(register):
                logger.debug("Plugin %s has no register(manager); skipped", file.name)
                continue
            register(manager)
        except Exception:
            logger.exception("Plugin %s failed to load", file.name)
            continue
        loaded.append(file.stem)
        logger.info("Loaded plugin %s", file.stem)
    return loaded
