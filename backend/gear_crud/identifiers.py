"""
Gear CRUD — Record Identifier Value Type
=========================================

What:  `RecordID`, the opaque identifier carried by every armor and weapon record.
Why:   Routes, models and the in-memory store handle identifiers without knowing
       which database produced them. Only the Mongo store converts a RecordID
       to and from `bson.ObjectId`.
How:   Wraps 12 raw bytes. The human-readable form is 24 lowercase hex chars.
       Plugs into pydantic so models validate from and serialize to that form.
"""

import string
from typing import Any

from bson import ObjectId
from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from gear_crud.exceptions import ValidationError

_HEX_DIGITS = frozenset(string.hexdigits)
_BYTE_LENGTH = 12


class RecordID:
    """
    Immutable 12-byte record identifier.

    Example:
        >>> rid = RecordID.parse("5f1b2c3d4e5f6a7b8c9d0e1f")
        >>> str(rid)
        '5f1b2c3d4e5f6a7b8c9d0e1f'
    """

    __slots__ = ("_binary",)

    def __init__(self, binary: bytes):
        if not isinstance(binary, (bytes, bytearray)) or len(binary) != _BYTE_LENGTH:
            raise ValidationError(
                message=f"identifier must be {_BYTE_LENGTH} bytes",
                field="_id",
            )
        self._binary = bytes(binary)

    # ── Construction ──────────────────────────────────────────────────────

    @classmethod
    def generate(cls) -> "RecordID":
        """Creates a fresh identifier (timestamp + random + counter layout)."""
        return cls(ObjectId().binary)

    @classmethod
    def parse(cls, value: str) -> "RecordID":
        """
        Parses the 24-character hex form.

        Raises:
            ValidationError: value is not exactly 24 hexadecimal characters.
        """
        if not cls.is_valid(value):
            raise ValidationError(
                message="the provided hex string is not a valid ObjectID",
                field="_id",
                context={"value": str(value)[:64]},
            )
        return cls(bytes.fromhex(value))

    @staticmethod
    def is_valid(value: Any) -> bool:
        return (
            isinstance(value, str)
            and len(value) == _BYTE_LENGTH * 2
            and all(ch in _HEX_DIGITS for ch in value)
        )

    # ── Accessors ─────────────────────────────────────────────────────────

    @property
    def binary(self) -> bytes:
        return self._binary

    def hex(self) -> str:
        return self._binary.hex()

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"RecordID('{self.hex()}')"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RecordID):
            return self._binary == other._binary
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._binary)

    # ── Pydantic integration ──────────────────────────────────────────────

    @classmethod
    def _validate(cls, value: Any) -> "RecordID":
        if isinstance(value, RecordID):
            return value
        if isinstance(value, str):
            try:
                return cls.parse(value)
            except ValidationError as exc:
                # pydantic only collects ValueError/AssertionError
                raise ValueError(exc.message) from exc
        raise ValueError("identifier must be a 24 character hex string")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "pattern": "^[0-9a-fA-F]{24}$", "example": "5f1b2c3d4e5f6a7b8c9d0e1f"}
