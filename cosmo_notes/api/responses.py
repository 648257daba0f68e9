from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse


def envelope(
    data: Any = None,
    *,
    status_code: int = 200,
    message: str | None = None,
    count: int | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    return JSONResponse(body, status_code=status_code)


def error_envelope(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": error, "message": message},
        status_code=status_code,
    )
