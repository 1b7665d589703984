"""
Gear CRUD — Abstract Gear Store Interface
==========================================

What:  Abstract base class defining the persistence contract for gear records.
Why:   Route handlers depend on this interface only, so the MongoDB-backed
       store and the in-memory store are interchangeable.
How:   Concrete stores inherit from GearStore and implement every method.
       The per-record-type methods are symmetric for armor and weapons.

Implementations:
    - MongoGearStore:     pymongo AsyncMongoClient (production)
    - InMemoryGearStore:  dict-backed, same semantics (tests, local runs)

Error contract (see gear_crud.exceptions):
    PersistenceError  store/transport failure, timeout, undecodable document
    NotFoundError     get-by-id matched nothing
    ConflictError     update did not match AND modify exactly one document
    DependencyError   ping failed
"""

from abc import ABC, abstractmethod
from typing import List, Mapping

from gear_crud.identifiers import RecordID
from gear_crud.models.gear import Armor, Weapon


class GearStore(ABC):
    """
    Persistence capability for the armor and weapon collections.

    Contract:
        - insert_* never assigns identifiers; the caller sets `record.id`
        - get_* applies build_filter() paging/sort/filter to the raw params
        - update_*_by_id replaces every field except `_id`
        - delete_*_by_id succeeds whether or not a document matched
    """

    # ── Armor ─────────────────────────────────────────────────────────────

    @abstractmethod
    async def insert_armor(self, armor: Armor) -> None:
        ...

    @abstractmethod
    async def get_armor(self, query_params: Mapping[str, str]) -> List[Armor]:
        ...

    @abstractmethod
    async def get_armor_by_id(self, record_id: RecordID) -> Armor:
        ...

    @abstractmethod
    async def update_armor_by_id(self, armor: Armor, record_id: RecordID) -> None:
        ...

    @abstractmethod
    async def delete_armor_by_id(self, record_id: RecordID) -> None:
        ...

    # ── Weapons ───────────────────────────────────────────────────────────

    @abstractmethod
    async def insert_weapon(self, weapon: Weapon) -> None:
        ...

    @abstractmethod
    async def get_weapon(self, query_params: Mapping[str, str]) -> List[Weapon]:
        ...

    @abstractmethod
    async def get_weapon_by_id(self, record_id: RecordID) -> Weapon:
        ...

    @abstractmethod
    async def update_weapon_by_id(self, weapon: Weapon, record_id: RecordID) -> None:
        ...

    @abstractmethod
    async def delete_weapon_by_id(self, record_id: RecordID) -> None:
        ...

    # ── Health ────────────────────────────────────────────────────────────

    @abstractmethod
    async def ping(self) -> None:
        """
        Lightweight liveness probe against the backing store.

        Raises:
            DependencyError: the store is unreachable. The message is the
                underlying failure text, reported verbatim by /health.
        """
        ...
