"""
Gear CRUD — Application Package Initializer
============================================

What: Marks the `gear_crud` directory as a Python package.
Why:  Enables module imports like `from gear_crud.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows the same layered shape end to end:

    ┌─────────────────────────────────────┐
    │         Routes (Request Handlers)   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Query Builder & Responses       │  ← params → query, errors → status
    ├─────────────────────────────────────┤
    │       Models & Identifiers          │  ← Armor / Weapon / RecordID
    ├─────────────────────────────────────┤
    │     Services (Gear Store: Mongo)    │  ← Document persistence
    └─────────────────────────────────────┘

    Routes never touch the MongoDB client directly; they receive a GearStore
    through FastAPI dependency injection, which lets tests swap in the
    in-memory store.
"""

__version__ = "1.0.0"
