"""CLE virtual tool registry.

Holds the current ``ToolRegistrySnapshot`` and answers lookups against it.
Each query reads the snapshot reference once, so a concurrent ``load`` is
seen either entirely or not at all.
"""
from __future__ import annotations

import threading
from typing import Any, Mapping

from cletools.app.core.errors import InvalidToolIdError
from cletools.app.core.logging import get_logger
from cletools.app.domain.tools.snapshot import ToolRegistrySnapshot

logger = get_logger(__name__)


def _require_tool_id(tool_id: str | None) -> str:
    if tool_id is None or tool_id == "":
        raise InvalidToolIdError("Illegal tool id: must be a non-empty string")
    return tool_id


class ToolRegistry:
    def __init__(self, snapshot: ToolRegistrySnapshot | None = None) -> None:
        self._write_lock = threading.Lock()
        self._snapshot = snapshot or ToolRegistrySnapshot()

    @property
    def snapshot(self) -> ToolRegistrySnapshot:
        return self._snapshot

    def load(self, properties: Mapping[str, Any] | None) -> ToolRegistrySnapshot:
        """Replace the whole configuration with one built from ``properties``."""
        with self._write_lock:
            snapshot = ToolRegistrySnapshot.from_properties(properties)
            self._snapshot = snapshot
        logger.info(
            "CLE tool registry loaded",
            data={"base_url": snapshot.base_url, "tool_count": len(snapshot.tool_list)},
        )
        return snapshot

    def list_tools(self) -> list[str]:
        logger.debug("list_tools()")
        return list(self._snapshot.tool_list)

    def get_launch_values(self, tool_id: str | None) -> dict[str, Any] | None:
        """Launch parameters for ``tool_id``, or None if the tool is not offered.

        The LTI key and secret are never part of the result; use
        ``get_key_secret`` for those.
        """
        logger.debug("get_launch_values(%s)", tool_id)
        tool_id = _require_tool_id(tool_id)
        snapshot = self._snapshot
        if not snapshot.supports(tool_id):
            return None
        return snapshot.launch_values(tool_id)

    def get_key_secret(self, tool_id: str | None) -> dict[str, str] | None:
        logger.debug("get_key_secret(%s)", tool_id)
        tool_id = _require_tool_id(tool_id)
        snapshot = self._snapshot
        if not snapshot.supports(tool_id):
            return None
        # Every tool shares the one configured credential pair
        return snapshot.key_secret()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToolRegistry):
            return NotImplemented
        return self._snapshot == other._snapshot

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        snapshot = self._snapshot
        return f"ToolRegistry(tool_list={list(snapshot.tool_list)!r}, base_url={snapshot.base_url!r})"
