"""
Gear CRUD — MongoDB Gear Store
===============================

What:  GearStore implementation backed by pymongo's AsyncMongoClient.
Why:   The catalog lives in MongoDB; this is the only module that talks to it.
How:   One client, one database, two collections. Public per-record-type
       methods delegate to private helpers parameterized by collection and
       model class. Driver and BSON encoding exceptions are translated
       into the application's error kinds before they leave this module.
Who:   Built once during application startup (see database.py) and shared by
       every request. The client pools connections and is safe for
       concurrent use, so no locking happens here.

Operation → driver call:
    insert_*        insert_one(document)
    get_*           find(filter, skip, limit, sort=[(field, 1)], max_time_ms)
    get_*_by_id     find_one({"_id": oid})
    update_*_by_id  update_one({"_id": oid}, {"$set": document-without-_id})
    delete_*_by_id  delete_one({"_id": oid})
    ping            admin.command("ping")

No retries are attempted; any driver failure surfaces immediately.
"""

import logging
from typing import Any, Dict, List, Mapping, Type, TypeVar

from bson import ObjectId
from bson.errors import BSONError
from pydantic import ValidationError as PydanticValidationError
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.errors import PyMongoError

from gear_crud.exceptions import (
    ConflictError,
    DependencyError,
    NotFoundError,
    PersistenceError,
)
from gear_crud.identifiers import RecordID
from gear_crud.models.gear import Armor, GearRecord, Weapon
from gear_crud.query import DEFAULT_PAGE_SIZE, build_filter, build_query
from gear_crud.services.store_base import GearStore

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=GearRecord)

# What: Server-side execution bound for list queries
DEFAULT_MAX_TIME_MS = 30_000

# What: Failures raised while encoding or executing a store operation.
# OverflowError comes from BSON encoding of integers wider than 64 bits.
_STORE_ERRORS = (PyMongoError, BSONError, OverflowError)


def to_object_id(record_id: RecordID) -> ObjectId:
    return ObjectId(record_id.binary)


def _to_mongo(query: Mapping[str, Any]) -> Dict[str, Any]:
    """Converts RecordID values in a filter to ObjectId."""
    return {
        key: to_object_id(value) if isinstance(value, RecordID) else value
        for key, value in query.items()
    }


class MongoGearStore(GearStore):
    """
    Data access object for the gear database.

    Args:
        client: Connected AsyncMongoClient (owned by this store).
        database_name: Database holding both collections.
        armor_collection / weapon_collection: Collection names.
        default_page_size: Limit used when a list request has no `count`.
        max_time_ms: Execution bound for list queries.
    """

    def __init__(
        self,
        client: AsyncMongoClient,
        database_name: str,
        armor_collection: str,
        weapon_collection: str,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_time_ms: int = DEFAULT_MAX_TIME_MS,
    ):
        self._client = client
        self.database_name = database_name
        self.armor_collection = armor_collection
        self.weapon_collection = weapon_collection
        self.default_page_size = default_page_size
        self.max_time_ms = max_time_ms

    def _collection(self, name: str):
        return self._client.get_database(self.database_name).get_collection(name)

    async def close(self) -> None:
        await self._client.close()

    # ── Health ────────────────────────────────────────────────────────────

    async def ping(self) -> None:
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.error("ERROR connecting to database: %s", e)
            raise DependencyError(message=str(e), context={"error_type": type(e).__name__})

    # ── Armor ─────────────────────────────────────────────────────────────

    async def insert_armor(self, armor: Armor) -> None:
        logger.debug("BEGIN - insert_armor")
        await self._insert(self.armor_collection, armor)

    async def get_armor(self, query_params: Mapping[str, str]) -> List[Armor]:
        logger.debug("BEGIN - get_armor")
        return await self._find(self.armor_collection, Armor, query_params)

    async def get_armor_by_id(self, record_id: RecordID) -> Armor:
        logger.debug("BEGIN - get_armor_by_id: %s", record_id)
        return await self._find_one(self.armor_collection, Armor, record_id)

    async def update_armor_by_id(self, armor: Armor, record_id: RecordID) -> None:
        logger.debug("BEGIN - update_armor_by_id: %s", record_id)
        await self._update(self.armor_collection, armor, record_id)

    async def delete_armor_by_id(self, record_id: RecordID) -> None:
        logger.debug("BEGIN - delete_armor_by_id: %s", record_id)
        await self._delete(self.armor_collection, record_id)

    # ── Weapons ───────────────────────────────────────────────────────────

    async def insert_weapon(self, weapon: Weapon) -> None:
        logger.debug("BEGIN - insert_weapon")
        await self._insert(self.weapon_collection, weapon)

    async def get_weapon(self, query_params: Mapping[str, str]) -> List[Weapon]:
        logger.debug("BEGIN - get_weapon")
        return await self._find(self.weapon_collection, Weapon, query_params)

    async def get_weapon_by_id(self, record_id: RecordID) -> Weapon:
        logger.debug("BEGIN - get_weapon_by_id: %s", record_id)
        return await self._find_one(self.weapon_collection, Weapon, record_id)

    async def update_weapon_by_id(self, weapon: Weapon, record_id: RecordID) -> None:
        logger.debug("BEGIN - update_weapon_by_id: %s", record_id)
        await self._update(self.weapon_collection, weapon, record_id)

    async def delete_weapon_by_id(self, record_id: RecordID) -> None:
        logger.debug("BEGIN - delete_weapon_by_id: %s", record_id)
        await self._delete(self.weapon_collection, record_id)

    # ── Shared implementation ─────────────────────────────────────────────

    async def _insert(self, collection_name: str, record: GearRecord) -> None:
        if record.id is None:
            raise PersistenceError(
                message="Could not insert record: identifier is not set",
                context={"collection": collection_name},
            )
        document = {"_id": to_object_id(record.id), **record.to_document(include_id=False)}
        try:
            await self._collection(collection_name).insert_one(document)
        except _STORE_ERRORS as e:
            logger.error("Insert into %s failed: %s", collection_name, e)
            raise PersistenceError(
                message=str(e),
                context={"collection": collection_name, "error_type": type(e).__name__},
            )

    async def _find(
        self,
        collection_name: str,
        model: Type[R],
        query_params: Mapping[str, str],
    ) -> List[R]:
        options = build_filter(query_params, model.filter_fields, self.default_page_size)
        try:
            cursor = self._collection(collection_name).find(
                _to_mongo(options.filter),
                skip=options.skip,
                limit=options.page_count,
                sort=[(options.sort, ASCENDING)],
                max_time_ms=self.max_time_ms,
            )
            documents = await cursor.to_list()
        except _STORE_ERRORS as e:
            logger.error("Query on %s failed: %s", collection_name, e)
            raise PersistenceError(
                message=str(e),
                context={"collection": collection_name, "error_type": type(e).__name__},
            )
        return [self._decode(model, document) for document in documents]

    async def _find_one(self, collection_name: str, model: Type[R], record_id: RecordID) -> R:
        try:
            document = await self._collection(collection_name).find_one(
                _to_mongo(build_query(record_id))
            )
        except _STORE_ERRORS as e:
            logger.error("Lookup of %s in %s failed: %s", record_id, collection_name, e)
            raise PersistenceError(
                message=str(e),
                context={"collection": collection_name, "record_id": str(record_id)},
            )
        if document is None:
            raise NotFoundError(resource=model.resource_name, resource_id=str(record_id))
        return self._decode(model, document)

    async def _update(self, collection_name: str, record: GearRecord, record_id: RecordID) -> None:
        try:
            result = await self._collection(collection_name).update_one(
                _to_mongo(build_query(record_id)),
                {"$set": record.to_document(include_id=False)},
            )
        except _STORE_ERRORS as e:
            logger.error("Update of %s in %s failed: %s", record_id, collection_name, e)
            raise PersistenceError(
                message=str(e),
                context={"collection": collection_name, "record_id": str(record_id)},
            )
        if result.matched_count != 1 or result.modified_count != 1:
            raise ConflictError(
                record_id=str(record_id),
                matched_count=result.matched_count,
                modified_count=result.modified_count,
            )

    async def _delete(self, collection_name: str, record_id: RecordID) -> None:
        try:
            await self._collection(collection_name).delete_one(_to_mongo(build_query(record_id)))
        except _STORE_ERRORS as e:
            logger.error("Delete of %s in %s failed: %s", record_id, collection_name, e)
            raise PersistenceError(
                message=str(e),
                context={"collection": collection_name, "record_id": str(record_id)},
            )

    @staticmethod
    def _decode(model: Type[R], document: Mapping[str, Any]) -> R:
        data = dict(document)
        raw_id = data.get("_id")
        if isinstance(raw_id, ObjectId):
            data["_id"] = RecordID(raw_id.binary)
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise PersistenceError(
                message=f"Could not decode {model.resource_name} document: {e.error_count()} invalid field(s)",
                context={"document_id": str(raw_id)},
            )
