"""
Tests for the daily P&L API endpoints.

Covers upsert-by-date, listing with date bounds, lookup by date, deletion,
authentication and per-account isolation.
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def _put(client: AsyncClient, headers: dict, day: str, pnl) -> dict:
    response = await client.put(f"/api/v1/pnl/{day}", json={"pnl": pnl}, headers=headers)
    assert response.status_code in (200, 201), response.text
    return response.json()


class TestUpsert:
    async def test_first_write_creates(self, client: AsyncClient, auth_headers):
        response = await client.put(
            "/api/v1/pnl/2024-01-02", json={"pnl": 2500}, headers=auth_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["trade_date"] == "2024-01-02"
        assert data["pnl"] == 2500.0
        assert data["is_no_trade_day"] is False

    async def test_second_write_overwrites(self, client: AsyncClient, auth_headers):
        created = await _put(client, auth_headers, "2024-01-02", 2500)

        response = await client.put(
            "/api/v1/pnl/2024-01-02", json={"pnl": -750.5}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]
        assert response.json()["pnl"] == -750.5

        listing = await client.get("/api/v1/pnl", headers=auth_headers)
        assert len(listing.json()["data"]) == 1

    async def test_zero_marks_no_trade_day(self, client: AsyncClient, auth_headers):
        data = await _put(client, auth_headers, "2024-01-06", 0)

        assert data["is_no_trade_day"] is True

    async def test_more_than_two_decimals_rejected(self, client: AsyncClient, auth_headers):
        response = await client.put(
            "/api/v1/pnl/2024-01-02", json={"pnl": "10.555"}, headers=auth_headers
        )

        assert response.status_code == 422

    async def test_invalid_date_rejected(self, client: AsyncClient, auth_headers):
        response = await client.put("/api/v1/pnl/2024-13-40", json={"pnl": 1}, headers=auth_headers)

        assert response.status_code == 422


class TestRead:
    async def test_list_is_ascending_with_summary(self, client: AsyncClient, auth_headers):
        await _put(client, auth_headers, "2024-01-04", 100)
        await _put(client, auth_headers, "2024-01-02", -40)
        await _put(client, auth_headers, "2024-01-03", 0)

        response = await client.get("/api/v1/pnl", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert [e["trade_date"] for e in body["data"]] == ["2024-01-02", "2024-01-03", "2024-01-04"]
        assert body["summary"] == {
            "count": 3,
            "total_pnl": 60.0,
            "win_days": 1,
            "loss_days": 1,
            "no_trade_days": 1,
        }

    async def test_list_date_bounds_are_inclusive(self, client: AsyncClient, auth_headers):
        for day in ("2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05"):
            await _put(client, auth_headers, day, 10)

        response = await client.get(
            "/api/v1/pnl",
            params={"start": "2024-01-03", "end": "2024-01-04"},
            headers=auth_headers,
        )

        assert [e["trade_date"] for e in response.json()["data"]] == ["2024-01-03", "2024-01-04"]

    async def test_start_after_end_rejected(self, client: AsyncClient, auth_headers):
        response = await client.get(
            "/api/v1/pnl",
            params={"start": "2024-02-01", "end": "2024-01-01"},
            headers=auth_headers,
        )

        assert response.status_code == 422

    async def test_get_by_date(self, client: AsyncClient, auth_headers):
        await _put(client, auth_headers, "2024-01-02", 321)

        found = await client.get("/api/v1/pnl/2024-01-02", headers=auth_headers)
        missing = await client.get("/api/v1/pnl/2024-01-03", headers=auth_headers)

        assert found.status_code == 200
        assert found.json()["pnl"] == 321.0
        assert missing.status_code == 404


class TestDelete:
    async def test_delete_then_not_found(self, client: AsyncClient, auth_headers):
        created = await _put(client, auth_headers, "2024-01-02", 100)

        response = await client.delete(f"/api/v1/pnl/{created['id']}", headers=auth_headers)
        again = await client.delete(f"/api/v1/pnl/{created['id']}", headers=auth_headers)

        assert response.status_code == 204
        assert again.status_code == 404

    async def test_delete_unknown_id(self, client: AsyncClient, auth_headers):
        response = await client.delete(f"/api/v1/pnl/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404


class TestAccessControl:
    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.get("/api/v1/pnl")

        assert response.status_code in (401, 403)

    async def test_invalid_token_rejected(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/pnl", headers={"Authorization": "Bearer not-a-real-token"}
        )

        assert response.status_code == 401

    async def test_refresh_token_cannot_access_data(self, client: AsyncClient, token_svc, user_id):
        refresh = token_svc.create_refresh_token(user_id)

        response = await client.get("/api/v1/pnl", headers={"Authorization": f"Bearer {refresh}"})

        assert response.status_code == 401

    async def test_accounts_are_isolated(
        self, client: AsyncClient, auth_headers, other_auth_headers
    ):
        created = await _put(client, auth_headers, "2024-01-02", 100)

        listing = await client.get("/api/v1/pnl", headers=other_auth_headers)
        by_date = await client.get("/api/v1/pnl/2024-01-02", headers=other_auth_headers)
        delete = await client.delete(f"/api/v1/pnl/{created['id']}", headers=other_auth_headers)

        assert listing.json()["data"] == []
        assert by_date.status_code == 404
        assert delete.status_code == 404

    async def test_same_date_in_two_accounts(
        self, client: AsyncClient, auth_headers, other_auth_headers
    ):
        first = await client.put("/api/v1/pnl/2024-01-02", json={"pnl": 1}, headers=auth_headers)
        second = await client.put(
            "/api/v1/pnl/2024-01-02", json={"pnl": 2}, headers=other_auth_headers
        )

        assert first.status_code == 201
        assert second.status_code == 201
