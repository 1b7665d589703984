"""
Gear CRUD — Database Connection Management
===========================================

What:  MongoDB client bootstrap, the shared GearStore, and its FastAPI dependency.
Why:   Centralizes all connection logic in one place.
How:   `connect_gear_store()` builds an AsyncMongoClient from settings, pings it
       and wraps it in a MongoGearStore. The application lifespan stores the
       result on `app.state`; `get_gear_store()` hands it to route handlers.
Who:   Used by main.py (lifespan) and by route handlers via Depends().
When:  Client is created once at startup and closed at shutdown.

Failure policy:
    A failed ping at startup is fatal: the lifespan re-raises and the server
    does not start. After startup, connectivity problems only surface as
    per-request errors and through GET /health.
"""

import logging

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from gear_crud.config import Settings, settings
from gear_crud.exceptions import PersistenceError
from gear_crud.services.mongo_store import MongoGearStore
from gear_crud.services.store_base import GearStore

logger = logging.getLogger(__name__)


def create_client(config: Settings = settings) -> AsyncMongoClient:
    """
    Creates the client without contacting the server.

    Raises:
        PersistenceError: the connection URI or options are invalid.
    """
    try:
        return AsyncMongoClient(
            config.mongo_uri,
            serverSelectionTimeoutMS=config.mongo_server_selection_timeout_ms,
        )
    except (PyMongoError, ValueError, TypeError) as e:
        raise PersistenceError(
            message=f"Invalid MongoDB configuration: {e}",
            context={"error_type": type(e).__name__},
        )


async def connect_gear_store(config: Settings = settings) -> MongoGearStore:
    """
    Connects to MongoDB and returns the store used for every request.

    Raises:
        PersistenceError: the client could not be created.
        DependencyError: the server did not answer the startup ping.
    """
    client = create_client(config)
    store = MongoGearStore(
        client,
        database_name=config.gear_database,
        armor_collection=config.armor_collection,
        weapon_collection=config.weapon_collection,
        default_page_size=config.default_page_size,
        max_time_ms=config.query_max_time_ms,
    )
    try:
        await store.ping()
    except Exception:
        await client.close()
        raise
    logger.info(
        "Connected to MongoDB database '%s' (collections: %s, %s)",
        config.gear_database,
        config.armor_collection,
        config.weapon_collection,
    )
    return store


async def close_gear_store(store: GearStore) -> None:
    """Closes the MongoDB client behind the store, if it has one."""
    if isinstance(store, MongoGearStore):
        await store.close()


def get_gear_store(request: Request) -> GearStore:
    """
    FastAPI dependency returning the application's GearStore.

    Tests replace it through `app.dependency_overrides[get_gear_store]`.
    """
    return request.app.state.gear_store
