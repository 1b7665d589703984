"""
Gear CRUD — Custom Exception Hierarchy
=======================================

What:  Defines the closed set of application error kinds.
Why:   Handlers and the store communicate failures as structured values, so
       mapping an error to an HTTP status is a lookup on its kind instead of
       string or driver-type inspection.
How:   Each exception class carries a message, an optional context dict and
       a fixed `kind`. The global handler registered in main.py renders them
       through `responses.check_error`.
Who:   Raised by the store implementations and the route handlers.

Exception Hierarchy:
    GearCrudError (base)
    ├── ValidationError   → 400 Bad Request (malformed body)
    ├── NotFoundError     → 404 Not Found (point lookup matched nothing)
    ├── ConflictError     → 500 Internal Server Error (update counts != 1)
    ├── PersistenceError  → 500 Internal Server Error (transport, timeout, decode)
    └── DependencyError   → 424 Failed Dependency (health check only)
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """The closed set of failure kinds the service distinguishes."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"
    DEPENDENCY = "dependency"


class GearCrudError(Exception):
    """
    Base exception for all Gear CRUD application errors.

    Attributes:
        message:  Error description returned to the client as {"error": message}
        context:  Additional debug info (logged but NOT returned to client)
    """

    kind: ErrorKind = ErrorKind.PERSISTENCE

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(GearCrudError):
    """
    Raised when client input cannot be decoded.

    When:    Request body is not valid JSON, or does not fit the record shape.
    HTTP:    400 Bad Request
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Invalid Request Payload",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(GearCrudError):
    """
    Raised when a point lookup matches no document.

    The message mirrors the driver's "no documents in result" signal so
    clients see the same text regardless of store implementation.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "document",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="mongo: no documents in result", context=ctx)


class ConflictError(GearCrudError):
    """
    Raised when an update did not match and modify exactly one document.

    Submitting a body identical to the stored value matches one document but
    modifies none, and is reported through this error as well.
    """

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        record_id: str,
        matched_count: int,
        modified_count: int,
        context: Optional[Dict[str, Any]] = None,
    ):
        if matched_count != 1:
            message = (
                f"Could not update record. Tried to update {record_id} "
                f"got {matched_count} matches instead of 1"
            )
        else:
            message = (
                f"Could not update record. Tried to update {record_id} "
                f"modified {modified_count} records instead of 1"
            )
        ctx = context or {}
        ctx.update(
            record_id=record_id,
            matched_count=matched_count,
            modified_count=modified_count,
        )
        super().__init__(message=message, context=ctx)
        self.record_id = record_id
        self.matched_count = matched_count
        self.modified_count = modified_count


class PersistenceError(GearCrudError):
    """
    Raised when the document store fails or returns something unusable.

    When:    Connection lost, server selection timeout, query exceeded its
             execution bound, document could not be decoded, or a path
             identifier could not be converted for the store.
    HTTP:    500 Internal Server Error
    """

    kind = ErrorKind.PERSISTENCE

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DependencyError(GearCrudError):
    """
    Raised by the store's liveness probe when MongoDB is unreachable.

    HTTP:    424 Failed Dependency (reported by /health, never fatal)
    """

    kind = ErrorKind.DEPENDENCY

    def __init__(
        self,
        message: str = "Database is unreachable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
