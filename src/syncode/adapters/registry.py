"""Adapter registry: tool id -> adapter, with enable/disable bits.

A registry is an ordinary value built once by the caller and handed to
the sync driver; importing this module registers nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from syncode.adapters.base import AdapterProtocol
from syncode.adapters.engine import ToolAdapter
from syncode.adapters.tools import BUILTIN_TOOLS
from syncode.core.resolver import PathResolver


@dataclass
class RegistryEntry:
    adapter: AdapterProtocol
    enabled: bool = True


class AdapterRegistry:
    def __init__(self) -> None:
        self._entries: dict[str, RegistryEntry] = {}

    def register(self, adapter: AdapterProtocol, enabled: bool = True) -> None:
        self._entries[adapter.id] = RegistryEntry(adapter=adapter, enabled=enabled)

    def get(self, tool_id: str) -> AdapterProtocol | None:
        entry = self._entries.get(tool_id)
        return entry.adapter if entry else None

    def all(self) -> list[AdapterProtocol]:
        return [e.adapter for e in self._entries.values()]

    def enabled(self) -> list[AdapterProtocol]:
        return [e.adapter for e in self._entries.values() if e.enabled]

    def has(self, tool_id: str) -> bool:
        return tool_id in self._entries

    def is_enabled(self, tool_id: str) -> bool:
        entry = self._entries.get(tool_id)
        return bool(entry and entry.enabled)

    def enable(self, tool_id: str) -> bool:
        entry = self._entries.get(tool_id)
        if entry is None:
            return False
        entry.enabled = True
        return True

    def disable(self, tool_id: str) -> bool:
        entry = self._entries.get(tool_id)
        if entry is None:
            return False
        entry.enabled = False
        return True

    def unregister(self, tool_id: str) -> bool:
        return self._entries.pop(tool_id, None) is not None

    def ids(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def shared_skills_participants(self) -> set[str]:
        return {a.id for a in self.all() if a.descriptor.shared_skills}


def build_registry(
    resolver: PathResolver,
    enabled_ids: Iterable[str] | None = None,
) -> AdapterRegistry:
    """Create a registry holding every built-in tool.

    With enabled_ids given, only those tools start enabled.
    """
    wanted = set(enabled_ids) if enabled_ids is not None else None
    registry = AdapterRegistry()
    for descriptor in BUILTIN_TOOLS:
        enabled = wanted is None or descriptor.id in wanted
        registry.register(ToolAdapter(descriptor, resolver), enabled=enabled)
    return registry


def detect_installed(registry: AdapterRegistry) -> list[str]:
    """Ids of every registered tool found on this machine."""
    return [a.id for a in registry.all() if a.detect()]
