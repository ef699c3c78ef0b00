"""Adapter Registry — Named search adapters and their live connections.

Adapter classes are referenced by ``"module:Class"`` path and imported on
first use, so the Redis client stack is only loaded when an adapter that
needs it is actually connected.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from collections.abc import Mapping
from typing import Any

from cinesift.adapters.base.adapter import AdapterHealth, SearchAdapter

logger = logging.getLogger(__name__)

AdapterRef = str | type[SearchAdapter]
"""An adapter class, or its ``"package.module:ClassName"`` import path."""

BUILTIN_ADAPTERS: Mapping[str, AdapterRef] = {
    "redisearch": "cinesift.adapters.redisearch.adapter:RediSearchAdapter",
}


class AdapterNotFoundError(Exception):
    """Raised when a requested adapter is not registered or not connected."""


class AdapterRegistry:
    """Registry of adapter classes and connected adapter instances.

    Example:
        >>> registry = AdapterRegistry()
        >>> await registry.connect("redisearch", url="redis://localhost:6379")
        >>> adapter = registry.get("redisearch")
    """

    def __init__(self, classes: Mapping[str, AdapterRef] | None = None) -> None:
        self._classes: dict[str, AdapterRef] = dict(BUILTIN_ADAPTERS if classes is None else classes)
        self._active: dict[str, SearchAdapter] = {}

    def register(self, name: str, adapter_class: AdapterRef) -> None:
        """Register (or replace) the adapter class known as ``name``."""
        if name in self._classes:
            logger.debug("Replacing adapter registration: %s", name)
        self._classes[name] = adapter_class

    def resolve(self, name: str) -> type[SearchAdapter]:
        """Return the adapter class for ``name``, importing it if needed.

        Raises:
            AdapterNotFoundError: If ``name`` is not registered.
        """
        try:
            ref = self._classes[name]
        except KeyError:
            raise AdapterNotFoundError(
                f"No adapter registered with name '{name}'. Available adapters: {sorted(self._classes)}"
            ) from None
        if isinstance(ref, str):
            module_path, _, attr = ref.partition(":")
            ref = getattr(importlib.import_module(module_path), attr)
            self._classes[name] = ref
        return ref

    async def connect(self, name: str, **kwargs: Any) -> SearchAdapter:
        """Build the adapter ``name`` from ``kwargs`` and initialize it.

        The adapter only becomes available through :meth:`get` once its
        ``initialize()`` call succeeded.
        """
        adapter = self.resolve(name)(**kwargs)
        await adapter.initialize()
        self._active[name] = adapter
        logger.info("Connected adapter: %s", name)
        return adapter

    def attach(self, adapter: SearchAdapter) -> None:
        """Make an already initialized adapter available under its own name."""
        self._classes.setdefault(adapter.name, type(adapter))
        self._active[adapter.name] = adapter

    def get(self, name: str) -> SearchAdapter:
        """Return the connected adapter ``name``.

        Raises:
            AdapterNotFoundError: If the adapter is not connected.
        """
        try:
            return self._active[name]
        except KeyError:
            raise AdapterNotFoundError(f"Adapter '{name}' is not connected") from None

    def __contains__(self, name: object) -> bool:
        return name in self._active

    async def health(self) -> dict[str, AdapterHealth]:
        """Check every connected adapter concurrently."""
        names = list(self._active)
        checks = await asyncio.gather(
            *(self._active[name].health_check() for name in names),
            return_exceptions=True,
        )
        return {
            name: check if isinstance(check, AdapterHealth) else AdapterHealth(status="unhealthy", message=str(check))
            for name, check in zip(names, checks, strict=True)
        }

    async def close(self) -> None:
        """Shut down and forget every connected adapter."""
        while self._active:
            name, adapter = self._active.popitem()
            try:
                await adapter.shutdown()
                logger.info("Shut down adapter: %s", name)
            except Exception:
                logger.warning("Error shutting down adapter: %s", name, exc_info=True)

    @property
    def registered_adapters(self) -> list[str]:
        return list(self._classes)

    @property
    def active_adapters(self) -> list[str]:
        return list(self._active)
