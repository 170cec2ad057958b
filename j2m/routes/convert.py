#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Convert endpoints.

POST /api/v1/convert                     {"content": "..."} → {"markdown": "..."}
GET  /api/v1/convert/preview?content=... → {"markdown": "...", "html": "..."}
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from j2m.core.config import get_settings
from j2m.schemas import ConvertRequest, ConvertResponse, PreviewResponse
from j2m.services.converter import convert
from j2m.services.preview import render_preview


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/convert", tags=["convert"])


# -----------------------------------------------------------------------------

@router.post("", response_model=ConvertResponse)
async def convert_markup(body: ConvertRequest):
    """Convert a Jira wiki markup document to Markdown."""
    return ConvertResponse(markdown=convert(body.content))


# -----------------------------------------------------------------------------

@router.get("/preview", response_model=PreviewResponse)
async def convert_preview(
    content: str = Query(default=""),
):
    """Convert, then render the Markdown to HTML for a side-by-side preview."""
    limit = get_settings().max_input_chars
    if len(content) > limit:
        raise HTTPException(status_code=422, detail=f"content exceeds {limit} characters")
    markdown = convert(content)
    return PreviewResponse(markdown=markdown, html=render_preview(markdown))


# -----------------------------------------------------------------------------
