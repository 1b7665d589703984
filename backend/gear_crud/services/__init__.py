# Services package init
"""
Gear CRUD — Persistence Services
=================================

Service Inventory:
    - GearStore (abstract):  Persistence contract for armor and weapon records
    - MongoGearStore:        Implementation over pymongo's AsyncMongoClient
    - InMemoryGearStore:     Dict-backed implementation with the same semantics

Routes depend on GearStore only; which implementation they receive is decided
by the application lifespan (or a test's dependency override).
"""
