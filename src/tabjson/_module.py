"""
Registration of the converter as a script-loadable module.

A script host resolves ``require(name)`` through preloaded loaders; the
converter registers under ``json`` by default and under any alias a caller
picks.
"""

import logging
from collections.abc import Callable
from typing import Any

from ._values import Table

logger = logging.getLogger(__name__)

MODULE_NAME = "json"

Loader = Callable[[], Any]


class ModuleRegistry:
    """Preloaded loaders plus the cache of modules already required."""

    def __init__(self) -> None:
        self.preloaded: dict[str, Loader] = {}
        self.loaded: dict[str, Any] = {}

    def preload(self, name: str, module_loader: Loader) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("module name must be a non-empty string")
        self.preloaded[name] = module_loader
        logger.debug("preloaded module %r", name)

    def require(self, name: str) -> Any:
        """Returns the module registered as ``name``, loading it once."""
        if name in self.loaded:
            return self.loaded[name]
        try:
            module_loader = self.preloaded[name]
        except KeyError:
            raise ModuleNotFoundError(f"module {name!r} not found") from None
        module = module_loader()
        self.loaded[name] = module
        logger.debug("loaded module %r", name)
        return module


def loader() -> Table:
    """Builds the module table exposing ``encode`` and ``decode``."""
    from . import decode
    from . import encode

    return Table(encode=encode, decode=decode)


def preload(registry: ModuleRegistry, name: str = MODULE_NAME) -> None:
    """Registers the converter in ``registry`` under ``name``."""
    registry.preload(name, loader)
