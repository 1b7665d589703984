"""
Gear CRUD — In-Memory Gear Store
=================================

What:  GearStore implementation that keeps documents in process memory.
Why:   Handler and end-to-end tests run without a MongoDB server, and the
       service can be started locally with no database at all.
How:   Each collection is a dict of hex identifier → stored document (the
       record dumped with its wire key names). Queries follow the MongoDB
       store's semantics: equality filters, ascending sort, skip/limit, and
       matched/modified counting on update.

Concurrency:
    Every operation runs to completion without awaiting, so on a single
    event loop no two operations interleave.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from gear_crud.exceptions import ConflictError, NotFoundError, PersistenceError
from gear_crud.identifiers import RecordID
from gear_crud.models.gear import Armor, GearRecord, Weapon
from gear_crud.query import DEFAULT_PAGE_SIZE, build_filter
from gear_crud.services.store_base import GearStore


R = TypeVar("R", bound=GearRecord)

Document = Dict[str, Any]


def _sort_key(value: Any) -> Tuple[int, Any]:
    # Missing values sort first, then numbers, then strings
    if value is None:
        return (0, 0)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, value)
    return (2, str(value))


class InMemoryGearStore(GearStore):
    """Dict-backed store with the same contract as MongoGearStore."""

    def __init__(self, default_page_size: int = DEFAULT_PAGE_SIZE):
        self.default_page_size = default_page_size
        self.armor: Dict[str, Document] = {}
        self.weapons: Dict[str, Document] = {}

    def reset(self) -> None:
        self.armor.clear()
        self.weapons.clear()

    async def ping(self) -> None:
        return None

    # ── Armor ─────────────────────────────────────────────────────────────

    async def insert_armor(self, armor: Armor) -> None:
        self._insert(self.armor, armor)

    async def get_armor(self, query_params: Mapping[str, str]) -> List[Armor]:
        return self._find(self.armor, Armor, query_params)

    async def get_armor_by_id(self, record_id: RecordID) -> Armor:
        return self._find_one(self.armor, Armor, record_id)

    async def update_armor_by_id(self, armor: Armor, record_id: RecordID) -> None:
        self._update(self.armor, armor, record_id)

    async def delete_armor_by_id(self, record_id: RecordID) -> None:
        self.armor.pop(record_id.hex(), None)

    # ── Weapons ───────────────────────────────────────────────────────────

    async def insert_weapon(self, weapon: Weapon) -> None:
        self._insert(self.weapons, weapon)

    async def get_weapon(self, query_params: Mapping[str, str]) -> List[Weapon]:
        return self._find(self.weapons, Weapon, query_params)

    async def get_weapon_by_id(self, record_id: RecordID) -> Weapon:
        return self._find_one(self.weapons, Weapon, record_id)

    async def update_weapon_by_id(self, weapon: Weapon, record_id: RecordID) -> None:
        self._update(self.weapons, weapon, record_id)

    async def delete_weapon_by_id(self, record_id: RecordID) -> None:
        self.weapons.pop(record_id.hex(), None)

    # ── Shared implementation ─────────────────────────────────────────────

    @staticmethod
    def _insert(collection: Dict[str, Document], record: GearRecord) -> None:
        if record.id is None:
            raise PersistenceError(message="Could not insert record: identifier is not set")
        key = record.id.hex()
        if key in collection:
            raise PersistenceError(
                message=f"E11000 duplicate key error: _id {key}",
                context={"record_id": key},
            )
        collection[key] = record.to_document()

    def _find(
        self,
        collection: Dict[str, Document],
        model: Type[R],
        query_params: Mapping[str, str],
    ) -> List[R]:
        options = build_filter(query_params, model.filter_fields, self.default_page_size)
        matches = [
            document
            for document in collection.values()
            if all(document.get(key) == value for key, value in options.filter.items())
        ]
        matches.sort(key=lambda document: _sort_key(document.get(options.sort)))
        page = matches[options.skip:options.skip + options.page_count]
        return [model.model_validate(document) for document in page]

    @staticmethod
    def _find_one(collection: Dict[str, Document], model: Type[R], record_id: RecordID) -> R:
        document: Optional[Document] = collection.get(record_id.hex())
        if document is None:
            raise NotFoundError(resource=model.resource_name, resource_id=str(record_id))
        return model.model_validate(document)

    @staticmethod
    def _update(collection: Dict[str, Document], record: GearRecord, record_id: RecordID) -> None:
        key = record_id.hex()
        existing = collection.get(key)
        if existing is None:
            raise ConflictError(record_id=key, matched_count=0, modified_count=0)
        updated = {**existing, **record.to_document(include_id=False)}
        if updated == existing:
            raise ConflictError(record_id=key, matched_count=1, modified_count=0)
        collection[key] = updated
