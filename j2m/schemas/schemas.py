#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for request validation and response serialisation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from j2m.core.config import get_settings


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Conversion
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConvertRequest(BaseModel):
    content: str = Field(..., description="Jira wiki markup to convert")

    @field_validator("content")
    @classmethod
    def content_within_limit(cls, v: str) -> str:
        limit = get_settings().max_input_chars
        if len(v) > limit:
            raise ValueError(f"content exceeds {limit} characters")
        return v


# -----------------------------------------------------------------------------

class ConvertResponse(BaseModel):
    markdown: str


# -----------------------------------------------------------------------------

class PreviewResponse(BaseModel):
    markdown: str
    html: str


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# System
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    app: str
