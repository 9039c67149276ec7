"""Spreadsheet import endpoints."""

from __future__ import annotations

import json
from typing import Dict, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse

from restaurantiq.api.http_errors import raise_analytics_error
from restaurantiq.config.settings import get_settings
from restaurantiq.security.guards import upload_guard
from restaurantiq.services.data_import import (
    ImportKind,
    ImportResult,
    auto_map_columns,
    build_import,
    parse_upload,
    template_csv,
)
from restaurantiq.services.errors import AnalyticsError

router = APIRouter(prefix="/api/import", tags=["import"])


def _parse_mapping(raw: Optional[str]) -> Optional[Dict[str, Optional[str]]]:
    if raw is None or not raw.strip():
        return None
    try:
        mapping = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail="Column mapping must be a JSON object.") from exc
    if not isinstance(mapping, dict) or not all(
        isinstance(key, str) and (value is None or isinstance(value, str)) for key, value in mapping.items()
    ):
        raise HTTPException(status_code=400, detail="Column mapping must map column names to file headers.")
    return mapping


@router.post("/{kind}", response_model=ImportResult, dependencies=[Depends(upload_guard)])
async def import_file(
    kind: ImportKind,
    file: UploadFile = File(...),
    mapping: Optional[str] = Form(default=None),
    restaurant_id: int = Form(default=1),
) -> ImportResult:
    settings = get_settings()
    # Never read more than one byte past the limit.
    payload = await file.read(settings.max_upload_bytes + 1)
    if len(payload) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="The uploaded file is too large.")

    overrides = _parse_mapping(mapping)
    try:
        parsed = parse_upload(file.filename or "import.csv", file.content_type, payload)
        column_mapping = auto_map_columns(
            kind,
            parsed.headers,
            threshold=settings.header_match_threshold,
            overrides=overrides,
        )
    except AnalyticsError as exc:
        raise_analytics_error(exc)

    if not any(column_mapping.values()):
        raise HTTPException(status_code=400, detail="None of the file's columns could be mapped.")

    return build_import(
        kind,
        parsed.rows,
        column_mapping,
        restaurant_id,
        max_rows=settings.max_import_rows,
        line_numbers=parsed.line_numbers,
    )


@router.get("/{kind}/template", response_class=PlainTextResponse)
def download_template(kind: ImportKind) -> PlainTextResponse:
    return PlainTextResponse(
        template_csv(kind),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{kind}_template.csv"'},
    )
