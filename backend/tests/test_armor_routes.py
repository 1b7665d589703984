"""
Gear CRUD — Armor Endpoint Tests
=================================

What:  HTTP-level tests for /armor, run through the full middleware chain
       against the in-memory store (or a failing mock store).

What we test:
    ✅ POST → Location header → GET returns the stored record
    ✅ Malformed bodies answer 400 without touching the store
    ✅ Mistyped or out-of-range (beyond 64-bit) fields answer 400
    ✅ Listing: defaults, paging, sorting, filtering
    ✅ PUT: success, identical body, unknown record
    ✅ DELETE: 204 for existing, missing and failing cases
    ✅ Invalid path identifiers answer 500
    ✅ Store failures answer 500 {"error": ...}
"""

import asyncio

import pytest

from gear_crud.identifiers import RecordID


async def _create(client, payload) -> str:
    response = await client.post("/armor", json=payload)
    assert response.status_code == 200
    return response.headers["location"].rsplit("/", 1)[-1]


class TestInsertArmor:
    @pytest.mark.asyncio
    async def test_insert_then_get(self, test_client, armor_payload):
        response = await test_client.post("/armor", json=armor_payload)

        assert response.status_code == 200
        assert response.json() == "Armor Object Created"
        location = response.headers["location"]
        assert location.startswith("/armor/")

        fetched = await test_client.get(location)
        assert fetched.status_code == 200
        body = fetched.json()
        assert body["_id"] == location.rsplit("/", 1)[-1]
        for key, value in armor_payload.items():
            assert body[key] == value

    @pytest.mark.asyncio
    async def test_client_supplied_id_is_replaced(self, test_client, armor_payload):
        supplied = "5f1b2c3d4e5f6a7b8c9d0e1f"
        record_id = await _create(test_client, {**armor_payload, "_id": supplied})
        assert record_id != supplied

    @pytest.mark.asyncio
    async def test_missing_fields_default_to_zero_values(self, test_client):
        record_id = await _create(test_client, {"type": "Padded"})
        body = (await test_client.get(f"/armor/{record_id}")).json()
        assert body["soak"] == 0
        assert body["hardPoints"] == 0

    @pytest.mark.asyncio
    async def test_malformed_body_is_400(self, client_factory, failing_store):
        async with client_factory(failing_store) as client:
            response = await client.post(
                "/armor",
                content=b"{not json",
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid Request Payload"}
        failing_store.insert_armor.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_field_type_is_400(self, test_client):
        response = await test_client.post("/armor", json={"soak": "lots"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid Request Payload"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value",
        [
            ("defense", "5"),
            ("defense", True),
            ("defense", 5.0),
            ("type", 5),
            ("price", 2**70),
            ("price", -(2**63) - 1),
        ],
    )
    async def test_mistyped_or_oversized_field_is_400(
        self, client_factory, failing_store, armor_payload, field, value
    ):
        async with client_factory(failing_store) as client:
            response = await client.post("/armor", json={**armor_payload, field: value})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid Request Payload"}
        failing_store.insert_armor.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_int64_bounds_are_accepted(self, test_client, armor_payload):
        record_id = await _create(
            test_client, {**armor_payload, "price": 2**63 - 1, "rarity": -(2**63)}
        )
        body = (await test_client.get(f"/armor/{record_id}")).json()
        assert body["price"] == 2**63 - 1
        assert body["rarity"] == -(2**63)

    @pytest.mark.asyncio
    async def test_store_failure_is_500(self, client_factory, failing_store, armor_payload):
        async with client_factory(failing_store) as client:
            response = await client.post("/armor", json=armor_payload)
        assert response.status_code == 500
        assert response.json() == {"error": "test error"}

    @pytest.mark.asyncio
    async def test_concurrent_inserts_get_distinct_ids(self, test_client, armor_payload, memory_store):
        ids = await asyncio.gather(*(_create(test_client, armor_payload) for _ in range(20)))
        assert len(set(ids)) == 20
        assert len(memory_store.armor) == 20


class TestListArmor:
    @pytest.mark.asyncio
    async def test_empty_collection_returns_empty_array(self, test_client):
        response = await test_client.get("/armor")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_paging_and_sort(self, test_client, armor_payload):
        for price in range(1, 8):
            await _create(test_client, {**armor_payload, "price": price})

        response = await test_client.get("/armor", params={"sort": "price", "page": 2, "count": 3})

        assert response.status_code == 200
        assert [item["price"] for item in response.json()] == [4, 5, 6]

    @pytest.mark.asyncio
    async def test_default_order_is_by_id(self, test_client, armor_payload):
        for _ in range(3):
            await _create(test_client, armor_payload)

        ids = [item["_id"] for item in (await test_client.get("/armor")).json()]
        assert ids == sorted(ids)

    @pytest.mark.asyncio
    async def test_filter(self, test_client, armor_payload):
        await _create(test_client, {**armor_payload, "type": "Heavy", "rarity": 6})
        await _create(test_client, {**armor_payload, "type": "Light", "rarity": 2})

        response = await test_client.get("/armor", params={"type": "Light", "color": "red"})

        assert [item["type"] for item in response.json()] == ["Light"]

    @pytest.mark.asyncio
    async def test_oversized_paging_and_filter_values_are_ignored(
        self, test_client, armor_payload
    ):
        await _create(test_client, armor_payload)

        response = await test_client.get(
            "/armor", params={"page": str(10**20), "count": str(10**20), "price": str(2**70)}
        )

        assert response.status_code == 200
        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_store_failure_is_500(self, client_factory, failing_store):
        async with client_factory(failing_store) as client:
            response = await client.get("/armor")
        assert response.status_code == 500
        assert response.json() == {"error": "test error"}


class TestGetArmorById:
    @pytest.mark.asyncio
    async def test_missing_record_is_404(self, test_client):
        response = await test_client.get(f"/armor/{RecordID.generate()}")
        assert response.status_code == 404
        assert response.json() == {"error": "mongo: no documents in result"}

    @pytest.mark.asyncio
    async def test_invalid_id_is_500(self, test_client):
        response = await test_client.get("/armor/not-an-id")
        assert response.status_code == 500
        assert "not a valid ObjectID" in response.json()["error"]


class TestUpdateArmor:
    @pytest.mark.asyncio
    async def test_update_returns_id(self, test_client, armor_payload):
        record_id = await _create(test_client, armor_payload)

        response = await test_client.put(f"/armor/{record_id}", json={**armor_payload, "price": 1})

        assert response.status_code == 200
        assert response.json() == record_id
        assert response.text == f'"{record_id}"'
        body = (await test_client.get(f"/armor/{record_id}")).json()
        assert body["price"] == 1

    @pytest.mark.asyncio
    async def test_identical_update_is_500(self, test_client, armor_payload):
        record_id = await _create(test_client, armor_payload)

        response = await test_client.put(f"/armor/{record_id}", json=armor_payload)

        assert response.status_code == 500
        assert "modified 0 records instead of 1" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_unknown_record_is_500(self, test_client, armor_payload):
        response = await test_client.put(f"/armor/{RecordID.generate()}", json=armor_payload)
        assert response.status_code == 500
        assert "got 0 matches instead of 1" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_invalid_id_is_500(self, test_client, armor_payload):
        response = await test_client.put("/armor/xyz", json=armor_payload)
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_malformed_body_is_400(self, test_client, armor_payload):
        record_id = await _create(test_client, armor_payload)
        response = await test_client.put(
            f"/armor/{record_id}",
            content=b"[1, 2",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_boolean_for_integer_is_400(self, test_client, armor_payload):
        record_id = await _create(test_client, armor_payload)
        response = await test_client.put(f"/armor/{record_id}", json={**armor_payload, "soak": False})
        assert response.status_code == 400
        assert (await test_client.get(f"/armor/{record_id}")).json()["soak"] == armor_payload["soak"]


class TestDeleteArmor:
    @pytest.mark.asyncio
    async def test_delete_existing(self, test_client, armor_payload):
        record_id = await _create(test_client, armor_payload)

        response = await test_client.delete(f"/armor/{record_id}")

        assert response.status_code == 204
        assert response.content == b""
        assert (await test_client.get(f"/armor/{record_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_is_204(self, test_client):
        response = await test_client.delete(f"/armor/{RecordID.generate()}")
        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_store_failure_still_204(self, client_factory, failing_store):
        async with client_factory(failing_store) as client:
            response = await client.delete(f"/armor/{RecordID.generate()}")
        assert response.status_code == 204
        failing_store.delete_armor_by_id.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_invalid_id_is_500(self, test_client):
        response = await test_client.delete("/armor/1234")
        assert response.status_code == 500
