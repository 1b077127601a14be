# -*- coding: utf-8 -*-
"""Response envelope shared by every endpoint: {status, message, data?}."""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


def success(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    return _respond(STATUS_SUCCESS, message, data, status_code)


def error(message: str, status_code: int) -> JSONResponse:
    return _respond(STATUS_ERROR, message, None, status_code)


def _respond(status: str, message: str, data: Any, status_code: int) -> JSONResponse:
    content = {"status": status, "message": message}
    # `data` is omitted rather than sent as null.
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)
