"""
Khata Django Adapter Views
==========================
JSON views over core.sync_store: read or overwrite one shared row.

Envelope:
    success → {"ok": true,  "data": {...}, "error": null}
    failure → {"ok": false, "data": null,  "error": {"code", "message", "details"}}
"""

from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from core.sync_store.service import get_row, upsert_row


def _json_ok(data: dict[str, Any], status: int = 200) -> JsonResponse:
    return JsonResponse(
        {"ok": True, "data": data, "error": None},
        status=status,
        json_dumps_params={"ensure_ascii": False},
    )


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        {
            "ok": False,
            "data": None,
            "error": {"code": code, "message": message, "details": {}},
        },
        status=status,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


def _read_row(row_id: str) -> JsonResponse:
    try:
        row = get_row(row_id)
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)
    if row is None:
        return _json_error("ROW_NOT_FOUND", f"No row with id '{row_id}'.", status=404)
    return _json_ok(row)


def _write_row(request: HttpRequest, row_id: str) -> JsonResponse:
    try:
        body = _parse_json_body(request)
        if "data" not in body:
            raise ValueError("data is required.")
        row = upsert_row(row_id, body["data"], updated_at=body.get("updated_at"))
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)
    return _json_ok(row)


@csrf_exempt
def store_row_view(request: HttpRequest, row_id: str) -> JsonResponse:
    if request.method == "GET":
        return _read_row(row_id)
    if request.method in ("PUT", "POST"):
        return _write_row(request, row_id)
    return _method_not_allowed()
