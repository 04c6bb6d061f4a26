from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..recipes.models import SearchResponse


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=1000)
    execute: bool = False


class ChatResponse(BaseModel):
    message: str
    query_string: str
    diet: str | None = None
    filters: dict[str, Any] = Field(default_factory=dict)
    results: SearchResponse | None = None
