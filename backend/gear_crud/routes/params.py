"""
Gear CRUD — Request Parsing Helpers
====================================

What:  Body decoding and path-identifier parsing shared by the record routers.
Why:   Bodies are decoded by hand rather than through FastAPI's automatic body
       validation, because a malformed body must answer 400 {"error": ...}
       instead of FastAPI's 422 detail list.

Identifier parsing policy:
    A path identifier that is not 24 hex characters is reported as a
    PersistenceError (→ 500), the same way the store reports its own
    failures. GET, PUT and DELETE by ID all behave this way.
"""

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from gear_crud.exceptions import PersistenceError, ValidationError
from gear_crud.identifiers import RecordID
from gear_crud.models.gear import GearRecord

R = TypeVar("R", bound=GearRecord)

INVALID_PAYLOAD = "Invalid Request Payload"


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "body"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def decode_record(body: bytes, model: Type[R], message: Optional[str] = None) -> R:
    """
    Decodes a JSON request body into `model`.

    Decoding is strict: a JSON value must already have the field's type, so
    "5", true and 5.0 are all rejected for an integer field.

    Args:
        body: Raw request body.
        model: Armor or Weapon.
        message: Fixed error message; when omitted the decoder's own
            description of the problem is returned to the client.

    Raises:
        ValidationError: body is not JSON or does not fit the record shape.
    """
    try:
        return model.model_validate_json(body, strict=True)
    except PydanticValidationError as e:
        raise ValidationError(
            message=message or _describe(e),
            context={"resource": model.resource_name, "error_count": e.error_count()},
        )


def parse_path_id(raw: str) -> RecordID:
    """Converts the {record_id} path segment, failing as a store-layer error."""
    try:
        return RecordID.parse(raw)
    except ValidationError as e:
        raise PersistenceError(message=e.message, context=e.context)


def json_body(model: Type[GearRecord]) -> Dict[str, Any]:
    """OpenAPI request body entry for routes that decode the body by hand."""
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": model.model_json_schema(by_alias=True)},
            },
        }
    }
