"""
Gear CRUD — Weapon Endpoint Tests
==================================

What we test:
    ✅ Wire key names (`range`, `encumberence`, `hp`) survive a round trip
    ✅ POST / GET / PUT / DELETE status codes and bodies
    ✅ Weapon-specific filters
    ✅ Bodies are decoded strictly (no coercion, 64-bit integers)
"""

import pytest

from gear_crud.identifiers import RecordID


async def _create(client, payload) -> str:
    response = await client.post("/weapon", json=payload)
    assert response.status_code == 200
    assert response.json() == "Weapon Object Created"
    return response.headers["location"].rsplit("/", 1)[-1]


class TestWeaponCrud:
    @pytest.mark.asyncio
    async def test_insert_then_get(self, test_client, weapon_payload):
        record_id = await _create(test_client, weapon_payload)

        response = await test_client.get(f"/weapon/{record_id}")

        assert response.status_code == 200
        assert response.json() == {"_id": record_id, **weapon_payload}

    @pytest.mark.asyncio
    async def test_location_uses_weapon_prefix(self, test_client, weapon_payload):
        response = await test_client.post("/weapon", json=weapon_payload)
        assert response.headers["location"].startswith("/weapon/")

    @pytest.mark.asyncio
    async def test_update_then_get(self, test_client, weapon_payload):
        record_id = await _create(test_client, weapon_payload)

        response = await test_client.put(
            f"/weapon/{record_id}", json={**weapon_payload, "damage": "+2"}
        )

        assert response.status_code == 200
        assert response.json() == record_id
        assert (await test_client.get(f"/weapon/{record_id}")).json()["damage"] == "+2"

    @pytest.mark.asyncio
    async def test_identical_update_is_500(self, test_client, weapon_payload):
        record_id = await _create(test_client, weapon_payload)
        response = await test_client.put(f"/weapon/{record_id}", json=weapon_payload)
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_delete(self, test_client, weapon_payload):
        record_id = await _create(test_client, weapon_payload)

        assert (await test_client.delete(f"/weapon/{record_id}")).status_code == 204
        assert (await test_client.get(f"/weapon/{record_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_store_failure_still_204(self, client_factory, failing_store):
        async with client_factory(failing_store) as client:
            response = await client.delete(f"/weapon/{RecordID.generate()}")
        assert response.status_code == 204


class TestWeaponErrors:
    @pytest.mark.asyncio
    async def test_malformed_body_is_400(self, client_factory, failing_store):
        async with client_factory(failing_store) as client:
            response = await client.post(
                "/weapon",
                content=b"not json",
                headers={"Content-Type": "application/json"},
            )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid Request Payload"}
        failing_store.insert_weapon.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value",
        [("hp", "3"), ("critical", True), ("damage", 6), ("range", None), ("rarity", 2**64)],
    )
    async def test_mistyped_field_is_400(
        self, test_client, weapon_payload, memory_store, field, value
    ):
        response = await test_client.post("/weapon", json={**weapon_payload, field: value})
        assert response.status_code == 400
        assert memory_store.weapons == {}

    @pytest.mark.asyncio
    async def test_missing_record_is_404(self, test_client):
        response = await test_client.get(f"/weapon/{RecordID.generate()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "delete"])
    async def test_invalid_id_is_500(self, test_client, method):
        response = await getattr(test_client, method)("/weapon/bad-id")
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_store_failure_is_500(self, client_factory, failing_store):
        async with client_factory(failing_store) as client:
            response = await client.get(f"/weapon/{RecordID.generate()}")
        assert response.status_code == 500
        assert response.json() == {"error": "test error"}


class TestWeaponList:
    @pytest.mark.asyncio
    async def test_filter_by_integer_and_string_fields(self, test_client, weapon_payload):
        await _create(test_client, {**weapon_payload, "name": "Heavy Blaster", "hp": 2})
        await _create(test_client, {**weapon_payload, "name": "Light Blaster", "hp": 1})

        response = await test_client.get("/weapon", params={"hp": "2"})
        assert [item["name"] for item in response.json()] == ["Heavy Blaster"]

        response = await test_client.get("/weapon", params={"skill": "Gunnery"})
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_unparsable_integer_filter_is_ignored(self, test_client, weapon_payload):
        await _create(test_client, weapon_payload)
        response = await test_client.get("/weapon", params={"price": "cheap"})
        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_count_limits_results(self, test_client, weapon_payload):
        for _ in range(4):
            await _create(test_client, weapon_payload)
        response = await test_client.get("/weapon", params={"count": "3"})
        assert len(response.json()) == 3
