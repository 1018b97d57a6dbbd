"""Pydantic response schemas."""
from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str


class ToolListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, strict=True)

    tool_list: list[str] = Field(alias="toolList")
