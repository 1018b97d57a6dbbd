from __future__ import annotations

from fastapi import Request

from cletools.app.domain.tools.registry import ToolRegistry


def get_tool_registry(request: Request) -> ToolRegistry:
    """The registry owned by the running application."""
    return request.app.state.tool_registry
