# Routes package init
"""
Gear CRUD — API Routes Package
===============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:  GET /ping, GET /health
    - armor.py:   POST/GET /armor, GET/PUT/DELETE /armor/{id}
    - weapon.py:  POST/GET /weapon, GET/PUT/DELETE /weapon/{id}
    - params.py:  body decoding and path identifier parsing shared by the above

Design Principle:
    Routes are THIN: decode the request, call the GearStore, write the
    response. Failures are raised and rendered by the exception handler
    registered in main.py.
"""
