"""
Gear CRUD — Response Helpers and Error Classifier
==================================================

What:  Uniform JSON envelope writers and the error-kind → status mapping.
Why:   Every handler and the global exception handler emit the same shapes:
       success payloads as plain JSON, failures as {"error": message}.
How:   Thin wrappers around Starlette responses; `check_error()` is a pure
       lookup on the error's kind.

Status mapping:
    VALIDATION   → 400 Bad Request
    NOT_FOUND    → 404 Not Found
    CONFLICT     → 500 Internal Server Error
    PERSISTENCE  → 500 Internal Server Error
    DEPENDENCY   → 424 Failed Dependency
"""

from typing import Any, Dict, Mapping, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from gear_crud.exceptions import ErrorKind, GearCrudError

_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.PERSISTENCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.DEPENDENCY: status.HTTP_424_FAILED_DEPENDENCY,
}


def check_error(error: GearCrudError) -> int:
    """Maps an application error to its HTTP status code."""
    return _STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def respond_with_json(
    status_code: int,
    payload: Any,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """
    Serializes `payload` as the JSON body.

    Pydantic records are dumped with their wire key names (`_id`, `type`, ...).
    """
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(payload, by_alias=True),
        headers=dict(headers) if headers else None,
    )


def respond_with_error(status_code: int, message: str) -> JSONResponse:
    return respond_with_json(status_code, {"error": message})


def respond_no_content(status_code: int = status.HTTP_204_NO_CONTENT) -> Response:
    return Response(status_code=status_code)
