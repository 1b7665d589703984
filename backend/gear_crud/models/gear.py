"""
Gear CRUD — Armor and Weapon Record Models
===========================================

What:  Pydantic models for the two record types held in the gear catalog.
Why:   One model serves as request body, response body and stored document,
       because MongoDB persists the same JSON-like shape the API exposes.
How:   Python attribute names are snake_case; the wire/document keys are set
       through aliases (`_id`, `type`, `hardPoints`, ...). Always dump with
       `by_alias=True`.

Field notes:
    - Every non-identifier field defaults to its zero value, so a body that
      omits a field stores "" or 0 for it.
    - Weapon encumbrance is stored under the key "encumberence". The spelling
      is part of the existing catalog's documents and is kept as-is.
    - `damage` is free text because it holds dice-like values ("3", "+2", "4d6").
    - Integer fields hold signed 64-bit values, the widest integer a BSON
      document stores. Larger values fail validation.
"""

from typing import Annotated, Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from gear_crud.identifiers import RecordID

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


class GearRecord(BaseModel):
    """
    Base for catalog records.

    `filter_fields` lists the document keys a list query may filter on,
    mapped to the type their query-string values are converted to.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    resource_name: ClassVar[str] = "record"
    filter_fields: ClassVar[Dict[str, type]] = {}

    id: Optional[RecordID] = Field(
        default=None,
        alias="_id",
        description="Server-assigned identifier (24 hex chars)",
    )

    def to_document(self, include_id: bool = True) -> Dict[str, Any]:
        """Dumps the record with its stored key names."""
        exclude = None if include_id else {"id"}
        return self.model_dump(by_alias=True, exclude=exclude)


class Armor(GearRecord):
    """A suit or piece of armor."""

    resource_name: ClassVar[str] = "armor"
    filter_fields: ClassVar[Dict[str, type]] = {
        "type": str,
        "defense": int,
        "soak": int,
        "price": int,
        "encumbrance": int,
        "hardPoints": int,
        "rarity": int,
    }

    armor_type: str = Field(default="", alias="type")
    defense: Int64 = 0
    soak: Int64 = 0
    price: Int64 = 0
    encumbrance: Int64 = 0
    hard_points: Int64 = Field(default=0, alias="hardPoints")
    rarity: Int64 = 0


class Weapon(GearRecord):
    """A weapon entry."""

    resource_name: ClassVar[str] = "weapon"
    filter_fields: ClassVar[Dict[str, type]] = {
        "type": str,
        "name": str,
        "skill": str,
        "damage": str,
        "critical": int,
        "range": str,
        "encumberence": int,
        "hp": int,
        "price": int,
        "rarity": int,
        "special": str,
    }

    weapon_type: str = Field(default="", alias="type")
    name: str = ""
    skill: str = ""
    damage: str = ""
    critical: Int64 = 0
    weapon_range: str = Field(default="", alias="range")
    encumbrance: Int64 = Field(default=0, alias="encumberence")
    hit_points: Int64 = Field(default=0, alias="hp")
    price: Int64 = 0
    rarity: Int64 = 0
    special: str = ""
