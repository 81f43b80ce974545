"""
Integration tests for the reservation endpoints
"""
from datetime import date, timedelta

import pytest

from app.core.config import settings

START = date.today() + timedelta(days=10)


def body(listing_id, start=START, nights=2, total=200):
    return {
        "listing_id": listing_id,
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=nights)).isoformat(),
        "total_price": total,
    }


@pytest.fixture
async def world(register, create_listing):
    """host owns a listing, guest and stranger are other users"""
    host_id, host = await register("Host")
    guest_id, guest = await register("Guest")
    stranger_id, stranger = await register("Stranger")
    listing = await create_listing(host)
    return {
        "listing": listing,
        "host": (host_id, host),
        "guest": (guest_id, guest),
        "stranger": (stranger_id, stranger),
    }


async def reserve(client, world, who="guest", **kwargs):
    return await client.post(
        "/api/reservations",
        json=body(world["listing"]["id"], **kwargs),
        headers=world[who][1],
    )


class TestCreateReservation:
    async def test_requires_authentication(self, client, world):
        resp = await client.post("/api/reservations", json=body(world["listing"]["id"]))
        assert resp.status_code == 401

    async def test_returns_listing_with_reservations(self, client, world):
        resp = await reserve(client, world)

        assert resp.status_code == 200, resp.text
        data = resp.json()["data"]
        assert data["id"] == world["listing"]["id"]
        assert len(data["reservations"]) == 1
        reservation = data["reservations"][0]
        assert reservation["user_id"] == world["guest"][0]
        assert reservation["start_date"] == START.isoformat()
        assert reservation["total_price"] == 200
        assert data["disabled_dates"] == [
            (START + timedelta(days=i)).isoformat() for i in range(3)
        ]

    async def test_rejects_reversed_dates(self, client, world):
        resp = await client.post(
            "/api/reservations",
            json={
                "listing_id": world["listing"]["id"],
                "start_date": "2030-01-12",
                "end_date": "2030-01-10",
                "total_price": 100,
            },
            headers=world["guest"][1],
        )
        assert resp.status_code == 400

    async def test_rejects_start_in_the_past(self, client, world):
        resp = await reserve(client, world, start=date.today() - timedelta(days=1))
        assert resp.status_code == 400

    async def test_rejects_endless_stay(self, client, world):
        resp = await client.post(
            "/api/reservations",
            json={
                "listing_id": world["listing"]["id"],
                "start_date": "1990-01-01",
                "end_date": "9999-12-31",
                "total_price": 1,
            },
            headers=world["guest"][1],
        )
        assert resp.status_code == 400

        detail = (await client.get(f"/api/listings/{world['listing']['id']}")).json()["data"]
        assert detail["disabled_dates"] == []

    async def test_stay_length_is_capped(self, client, world):
        too_long = await reserve(client, world, nights=settings.MAX_STAY_DAYS + 1)
        assert too_long.status_code == 400
        assert str(settings.MAX_STAY_DAYS) in too_long.json()["detail"]

        longest = await reserve(client, world, nights=settings.MAX_STAY_DAYS)
        assert longest.status_code == 200

    async def test_missing_fields(self, client, world):
        resp = await client.post(
            "/api/reservations",
            json={"listing_id": world["listing"]["id"]},
            headers=world["guest"][1],
        )
        assert resp.status_code == 422

    async def test_unknown_listing(self, client, world):
        resp = await client.post("/api/reservations", json=body(9999), headers=world["guest"][1])
        assert resp.status_code == 404

    async def test_booked_days_conflict(self, client, world):
        assert (await reserve(client, world)).status_code == 200

        resp = await reserve(client, world, who="stranger", start=START + timedelta(days=2))

        assert resp.status_code == 409
        assert (START + timedelta(days=2)).isoformat() in resp.json()["detail"]


class TestListReservations:
    async def test_filters_and_order(self, client, world, create_listing):
        other_listing = await create_listing(world["stranger"][1], title="Cave")
        await reserve(client, world)
        await reserve(client, world, who="stranger", start=START + timedelta(days=20))
        await client.post(
            "/api/reservations",
            json=body(other_listing["id"]),
            headers=world["guest"][1],
        )

        by_listing = (await client.get(
            "/api/reservations", params={"listing_id": world["listing"]["id"]}
        )).json()["items"]
        assert len(by_listing) == 2
        # newest first
        assert by_listing[0]["user_id"] == world["stranger"][0]
        assert by_listing[0]["listing"]["id"] == world["listing"]["id"]

        by_user = (await client.get(
            "/api/reservations", params={"user_id": world["guest"][0]}
        )).json()["items"]
        assert {r["listing_id"] for r in by_user} == {world["listing"]["id"], other_listing["id"]}

        by_owner = (await client.get(
            "/api/reservations", params={"author_id": world["host"][0]}
        )).json()["items"]
        assert len(by_owner) == 2
        assert all(r["listing"]["user_id"] == world["host"][0] for r in by_owner)

        combined = (await client.get(
            "/api/reservations",
            params={"author_id": world["host"][0], "user_id": world["guest"][0]},
        )).json()["items"]
        assert len(combined) == 1

    async def test_dates_are_iso_strings(self, client, world):
        await reserve(client, world)
        item = (await client.get("/api/reservations")).json()["items"][0]
        assert item["start_date"] == START.isoformat()
        assert "T" in item["created_at"]
        assert "T" in item["listing"]["created_at"]


class TestCancelReservation:
    async def _reservation_id(self, client, world):
        resp = await reserve(client, world)
        return resp.json()["data"]["reservations"][0]["id"]

    async def test_guest_can_cancel(self, client, world):
        rid = await self._reservation_id(client, world)
        resp = await client.delete(f"/api/reservations/{rid}", headers=world["guest"][1])
        assert resp.json() == {"count": 1}

    async def test_listing_owner_can_cancel(self, client, world):
        rid = await self._reservation_id(client, world)
        resp = await client.delete(f"/api/reservations/{rid}", headers=world["host"][1])
        assert resp.json() == {"count": 1}

    async def test_stranger_deletes_nothing(self, client, world):
        rid = await self._reservation_id(client, world)

        resp = await client.delete(f"/api/reservations/{rid}", headers=world["stranger"][1])

        assert resp.status_code == 200
        assert resp.json() == {"count": 0}
        remaining = (await client.get("/api/reservations")).json()["items"]
        assert [r["id"] for r in remaining] == [rid]

    async def test_missing_reservation_is_count_zero(self, client, world):
        resp = await client.delete("/api/reservations/424242", headers=world["guest"][1])
        assert resp.status_code == 200
        assert resp.json() == {"count": 0}

    async def test_requires_authentication(self, client, world):
        rid = await self._reservation_id(client, world)
        resp = await client.delete(f"/api/reservations/{rid}")
        assert resp.status_code == 401


class TestMyReservationPages:
    async def test_anonymous_gets_unauthorized_empty_state(self, client):
        for path in ("/api/users/me/reservations", "/api/users/me/trips"):
            resp = await client.get(path)
            assert resp.status_code == 200
            assert resp.json() == {
                "items": [],
                "empty_state": {"title": "Unauthorized", "subtitle": "Please login", "show_reset": False},
            }

    async def test_host_sees_reservations_on_own_listings(self, client, world):
        await reserve(client, world)

        host_view = (await client.get("/api/users/me/reservations", headers=world["host"][1])).json()
        assert len(host_view["items"]) == 1
        assert host_view["empty_state"] is None

        guest_view = (await client.get("/api/users/me/reservations", headers=world["guest"][1])).json()
        assert guest_view["items"] == []
        assert guest_view["empty_state"]["title"] == "No reservations found"

    async def test_trips(self, client, world):
        await reserve(client, world)
        trips = (await client.get("/api/users/me/trips", headers=world["guest"][1])).json()
        assert [t["listing"]["title"] for t in trips["items"]] == ["Beach house"]
