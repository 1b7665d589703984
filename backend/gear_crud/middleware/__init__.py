# Middleware package init
"""
Gear CRUD — Middleware Package
===============================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and tracing
    2. Logging: Log request details with the generated request ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

    Responses travel back through the same chain in reverse, which is when
    the request ID header is attached and the duration is measured.
"""
