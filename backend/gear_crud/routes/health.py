"""
Gear CRUD — Liveness and Health Check Routes
=============================================

What:  GET /ping (process liveness) and GET /health (database reachability).
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    /ping    always 200 "OK, <version>"; never touches the database
    /health  200 when the store answers its ping,
             424 Failed Dependency with {apiVersion, dbError} otherwise

A failed health check is reported, never fatal: the process keeps serving
requests and each one surfaces its own store error.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from gear_crud.config import settings
from gear_crud.database import get_gear_store
from gear_crud.exceptions import GearCrudError
from gear_crud.models.health import HealthCheckResponse
from gear_crud.responses import respond_with_json
from gear_crud.services.store_base import GearStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/ping", response_class=PlainTextResponse, summary="Process liveness")
async def ping_check() -> PlainTextResponse:
    return PlainTextResponse(f"OK, {settings.api_version}", status_code=status.HTTP_200_OK)


@router.get(
    "/health",
    summary="Service health check",
    responses={
        200: {"description": "Database reachable"},
        424: {"description": "Database unreachable", "model": HealthCheckResponse},
    },
)
async def health_check(store: GearStore = Depends(get_gear_store)) -> JSONResponse:
    """
    Probe the database with the store's lightweight ping.

    Returns:
        200 "OK" when the ping succeeds, otherwise 424 with the API version and
        the database error text.
    """
    try:
        await store.ping()
    except GearCrudError as e:
        logger.warning("Health check: database unreachable: %s", e.message)
        response = HealthCheckResponse(api_version=settings.api_version, db_error=e.message)
        return respond_with_json(status.HTTP_424_FAILED_DEPENDENCY, response)

    return respond_with_json(status.HTTP_200_OK, "OK")
