"""
Gear CRUD — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Handler tests run against the in-memory store (or a mock store for
       failure paths), so no MongoDB server is needed.

Fixture Hierarchy (all function-scoped):
    ├── memory_store:     Fresh InMemoryGearStore
    ├── failing_store:    GearStore mock whose every operation raises
    ├── client_factory:   Builds an HTTPX AsyncClient for an app bound to a store
    ├── test_client:      AsyncClient bound to memory_store
    ├── armor_payload:    Request body for POST /armor
    └── weapon_payload:   Request body for POST /weapon
"""

import os

# Override settings BEFORE any gear_crud imports read them
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STORE_BACKEND"] = "memory"
os.environ["API_VERSION"] = "test"

from contextlib import asynccontextmanager
from typing import AsyncIterator
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from gear_crud.database import get_gear_store
from gear_crud.exceptions import DependencyError, PersistenceError
from gear_crud.main import create_app
from gear_crud.services.memory_store import InMemoryGearStore
from gear_crud.services.store_base import GearStore

STORE_OPERATIONS = [
    "insert_armor",
    "get_armor",
    "get_armor_by_id",
    "update_armor_by_id",
    "delete_armor_by_id",
    "insert_weapon",
    "get_weapon",
    "get_weapon_by_id",
    "update_weapon_by_id",
    "delete_weapon_by_id",
]


@pytest.fixture
def memory_store() -> InMemoryGearStore:
    return InMemoryGearStore(default_page_size=25)


@pytest.fixture
def failing_store():
    """
    GearStore double whose record operations raise PersistenceError and
    whose ping raises DependencyError.

    `MagicMock(spec=GearStore)` turns each async method into an AsyncMock,
    so tests can also assert on calls (e.g. that a bad body never reaches
    the store).
    """
    store = MagicMock(spec=GearStore)
    for name in STORE_OPERATIONS:
        getattr(store, name).side_effect = PersistenceError(message="test error")
    store.ping.side_effect = DependencyError(message="server selection timeout")
    return store


@pytest.fixture
def client_factory():
    """
    Returns an async context manager yielding a client for a given store.

    Usage:
        async with client_factory(store) as client:
            response = await client.get("/armor")
    """

    @asynccontextmanager
    async def _client_for(store: GearStore) -> AsyncIterator[AsyncClient]:
        app = create_app()
        app.dependency_overrides[get_gear_store] = lambda: store
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    return _client_for


@pytest_asyncio.fixture
async def test_client(client_factory, memory_store):
    async with client_factory(memory_store) as client:
        yield client


@pytest.fixture
def armor_payload():
    return {
        "type": "Heavy Battle Armor",
        "defense": 1,
        "soak": 2,
        "price": 5000,
        "encumbrance": 6,
        "hardPoints": 4,
        "rarity": 6,
    }


@pytest.fixture
def weapon_payload():
    return {
        "type": "Energy Weapon",
        "name": "Blaster Pistol",
        "skill": "Ranged (Light)",
        "damage": "6",
        "critical": 3,
        "range": "Medium",
        "encumberence": 1,
        "hp": 3,
        "price": 400,
        "rarity": 4,
        "special": "Stun setting",
    }
