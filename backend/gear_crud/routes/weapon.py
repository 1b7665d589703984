"""
Gear CRUD — Weapon Route Handlers
==================================

What:  CRUD endpoints for the weapons collection, under the /weapon prefix.
How:   Same request flow and status codes as routes/armor.py.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from gear_crud.database import get_gear_store
from gear_crud.exceptions import GearCrudError
from gear_crud.identifiers import RecordID
from gear_crud.models.gear import Weapon
from gear_crud.responses import respond_no_content, respond_with_json
from gear_crud.routes.params import INVALID_PAYLOAD, decode_record, json_body, parse_path_id
from gear_crud.services.store_base import GearStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weapon", tags=["Weapons"])


@router.post("", summary="Insert a weapon record", openapi_extra=json_body(Weapon))
async def insert_weapon(
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> JSONResponse:
    logger.info("insert_weapon invoked with url: %s", request.url)

    weapon = decode_record(await request.body(), Weapon, message=INVALID_PAYLOAD)
    weapon.id = RecordID.generate()

    await store.insert_weapon(weapon)

    return respond_with_json(
        status.HTTP_200_OK,
        "Weapon Object Created",
        headers={"Location": f"{router.prefix}/{weapon.id}"},
    )


@router.get("", summary="List weapon records")
async def get_weapon(
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> JSONResponse:
    logger.info("get_weapon invoked with url: %s", request.url)

    weapons = await store.get_weapon(request.query_params)
    return respond_with_json(status.HTTP_200_OK, weapons)


@router.get("/{record_id}", summary="Get one weapon record")
async def get_weapon_by_id(
    record_id: str,
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> JSONResponse:
    logger.info("get_weapon_by_id invoked with url: %s", request.url)

    weapon = await store.get_weapon_by_id(parse_path_id(record_id))
    return respond_with_json(status.HTTP_200_OK, weapon)


@router.put("/{record_id}", summary="Replace a weapon record", openapi_extra=json_body(Weapon))
async def update_weapon_by_id(
    record_id: str,
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> JSONResponse:
    logger.info("update_weapon_by_id invoked with url: %s", request.url)

    object_id = parse_path_id(record_id)
    weapon = decode_record(await request.body(), Weapon)

    await store.update_weapon_by_id(weapon, object_id)

    return respond_with_json(status.HTTP_200_OK, str(object_id))


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a weapon record")
async def delete_weapon_by_id(
    record_id: str,
    request: Request,
    store: GearStore = Depends(get_gear_store),
) -> Response:
    logger.info("delete_weapon_by_id invoked with url: %s", request.url)

    object_id = parse_path_id(record_id)
    try:
        await store.delete_weapon_by_id(object_id)
    except GearCrudError as e:
        logger.error("delete_weapon_by_id failed for %s: %s", object_id, e.message)

    return respond_no_content(status.HTTP_204_NO_CONTENT)
