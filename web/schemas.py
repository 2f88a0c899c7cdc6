"""
Pydantic models cho request/response cua /api/process va /api/process_stream.
"""

from typing import List

from pydantic import BaseModel, Field


class PathRequest(BaseModel):
    """Body chung cho ca endpoint dong bo va streaming."""

    path: str
    ignore_patterns: List[str] = Field(default_factory=list)


class PathResponse(BaseModel):
    content: str
    token_count: int
    warnings: List[str] = Field(default_factory=list)
