"""REST endpoint listing the Sakai CLE tool ids offered to the CLE Tools widget."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response
from pydantic import ValidationError

from cletools.app.api.deps import get_tool_registry
from cletools.app.core.errors import ToolListEncodingError
from cletools.app.core.logging import get_logger
from cletools.app.domain.schemas import ToolListResponse
from cletools.app.domain.tools.registry import ToolRegistry

logger = get_logger(__name__)

router = APIRouter(prefix="/var/basiclti", tags=["basiclti"])


def encode_tool_list(tool_ids: list[str]) -> str:
    try:
        return ToolListResponse(tool_list=tool_ids).model_dump_json(by_alias=True)
    except (ValidationError, TypeError, ValueError) as exc:
        raise ToolListEncodingError(str(exc)) from exc


@router.get("/cletools")
@router.get("/cletools.json", include_in_schema=False)
def list_cle_tools(registry: ToolRegistry = Depends(get_tool_registry)):
    try:
        body = encode_tool_list(registry.list_tools())
    except ToolListEncodingError as exc:
        logger.error("Failed to encode CLE tool list: %s", exc, exc_info=True)
        return PlainTextResponse(str(exc), status_code=500)
    return Response(content=body, media_type="application/json")
