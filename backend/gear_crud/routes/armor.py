"""
Gear CRUD — Armor Route Handlers
=================================

What:  CRUD endpoints for the armor collection.
How:   Each handler parses → validates → delegates to the GearStore → responds.
       Store errors propagate to the global exception handler (main.py),
       which maps them to a status through `responses.check_error`.

Endpoints:
    POST   /armor        insert, 200 "Armor Object Created" + Location header
    GET    /armor        list with ?page=&count=&sort=&<field>=
    GET    /armor/{id}   single record
    PUT    /armor/{id}   full replace, 200 with the bare JSON string of the id
    DELETE /armor/{id}   204, store failures are logged, not returned
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from gear_crud.database import get_gear_store
from gear_crud.exceptions import GearCrudError
from gear_crud.identifiers import RecordID
from gear_crud.models.gear import Armor
from gear_crud.responses import respond_no_content, respond_with_json
from gear_crud.routes.params import INVALID_PAYLOAD, decode_record, json_body, parse_path_id
from gear_crud.services.store_base import GearStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/armor", tags=["Armor"])


@router.post(
    "",
    summary="Insert an armor record",
    description="The server assigns the identifier; any `_id` in the body is replaced.",
    openapi_extra=json_body(Armor),
)
async def insert_armor(
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> JSONResponse:
    """
    Insert a new armor record.

    The body is decoded before the store is touched, so a malformed body
    answers 400 without any database call. The generated identifier is
    returned in the Location header.
    """
    logger.info("insert_armor invoked with url: %s", request.url)

    armor = decode_record(await request.body(), Armor, message=INVALID_PAYLOAD)
    armor.id = RecordID.generate()

    await store.insert_armor(armor)

    return respond_with_json(
        status.HTTP_200_OK,
        "Armor Object Created",
        headers={"Location": f"{router.prefix}/{armor.id}"},
    )


@router.get("", summary="List armor records")
async def get_armor(
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> JSONResponse:
    """Query parameters go to the store untouched; see gear_crud.query."""
    logger.info("get_armor invoked with url: %s", request.url)

    armor = await store.get_armor(request.query_params)
    return respond_with_json(status.HTTP_200_OK, armor)


@router.get("/{record_id}", summary="Get one armor record")
async def get_armor_by_id(
    record_id: str,
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> JSONResponse:
    logger.info("get_armor_by_id invoked with url: %s", request.url)

    armor = await store.get_armor_by_id(parse_path_id(record_id))
    return respond_with_json(status.HTTP_200_OK, armor)


@router.put(
    "/{record_id}",
    summary="Replace an armor record",
    description=(
        "Every field is overwritten. The update must match and modify exactly one "
        "record, so re-sending the stored values is reported as an error."
    ),
    openapi_extra=json_body(Armor),
)
async def update_armor_by_id(
    record_id: str,
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> JSONResponse:
    logger.info("update_armor_by_id invoked with url: %s", request.url)

    object_id = parse_path_id(record_id)
    armor = decode_record(await request.body(), Armor)

    await store.update_armor_by_id(armor, object_id)

    return respond_with_json(status.HTTP_200_OK, str(object_id))


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an armor record")
async def delete_armor_by_id(
    record_id: str,
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> Response:
    """
    Delete an armor record.

    Deleting an identifier that does not exist is not an error. A store
    failure is logged and the client still receives 204.
    """
    logger.info("delete_armor_by_id invoked with url: %s", request.url)

    object_id = parse_path_id(record_id)
    try:
        await store.delete_armor_by_id(object_id)
    except GearCrudError as e:
        logger.error("delete_armor_by_id failed for %s: %s", object_id, e.message)

    return respond_no_content(status.HTTP_204_NO_CONTENT)
