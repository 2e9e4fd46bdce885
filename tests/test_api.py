"""
Integration tests for the REST API endpoints.

Runs the real app against an in-memory SQLite database; the weather
provider, landmark directory and subscription store are replaced through
dependency overrides (see ``conftest.client``).
"""

from __future__ import annotations

import pytest

from gocabs.domain.errors import UpstreamError

API = "/api/v1"


async def _create(client, ride_id="r1", rider_id="u1", rider_offer=40.0, **extra):
    return await client.post(
        f"{API}/negotiations",
        json={"ride_id": ride_id, "rider_id": rider_id, "rider_offer": rider_offer, **extra},
    )


# ── Health ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get(f"{API}/admin/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": "1.0.0"}


# ── Negotiations ──────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_negotiation(client):
    resp = await _create(client)
    assert resp.status_code == 201
    data = resp.json()
    assert data["ride_id"] == "r1"
    assert data["rider_id"] == "u1"
    assert data["rider_offer"] == 40.0
    assert data["status"] == "pending"
    assert data["driver_id"] is None
    assert data["driver_counter_offer"] is None
    assert data["agreed_fare"] is None


@pytest.mark.asyncio
async def test_second_live_negotiation_conflicts(client):
    await _create(client)
    resp = await _create(client, rider_offer=42.0)
    assert resp.status_code == 409
    assert resp.json()["success"] is False
    assert "live negotiation" in resp.json()["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"ride_id": "r1", "rider_id": "u1", "rider_offer": -1},
        {"ride_id": "r1", "rider_id": "u1"},
        {"ride_id": "", "rider_id": "u1", "rider_offer": 40},
        {"ride_id": "r1", "rider_id": "u1", "rider_offer": "lots"},
    ],
)
async def test_create_rejects_invalid_body(client, payload):
    resp = await client.post(f"{API}/negotiations", json=payload)
    assert resp.status_code == 400
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_create_outside_offer_band(client):
    resp = await _create(client, rider_offer=20.0, estimated_fare=50.0)
    assert resp.status_code == 400
    assert "between 35.00 and 55.00" in resp.json()["message"]


@pytest.mark.asyncio
async def test_counter_offer_flow(client):
    created = (await _create(client)).json()

    resp = await client.patch(
        f"{API}/negotiations/{created['id']}/respond",
        json={"driver_id": "d1", "decision": "countered", "counter_offer": 45.0},
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "countered"
    assert resp.json()["driver_counter_offer"] == 45.0

    resp = await client.patch(f"{API}/negotiations/{created['id']}/accept-counter")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "counter_accepted"
    assert data["agreed_fare"] == 45.0
    assert data["driver_id"] == "d1"

    resp = await client.get(f"{API}/negotiations/{created['id']}")
    assert resp.json()["status"] == "counter_accepted"


@pytest.mark.asyncio
async def test_respond_twice_is_invalid_state(client):
    created = (await _create(client)).json()
    url = f"{API}/negotiations/{created['id']}/respond"
    first = await client.patch(url, json={"driver_id": "d1", "decision": "accepted"})
    assert first.status_code == 200
    assert first.json()["agreed_fare"] == 40.0

    second = await client.patch(url, json={"driver_id": "d2", "decision": "rejected"})
    assert second.status_code == 409
    assert second.json()["success"] is False


@pytest.mark.asyncio
async def test_counter_without_amount_is_bad_request(client):
    created = (await _create(client)).json()
    resp = await client.patch(
        f"{API}/negotiations/{created['id']}/respond",
        json={"driver_id": "d1", "decision": "countered"},
    )
    assert resp.status_code == 400
    stored = await client.get(f"{API}/negotiations/{created['id']}")
    assert stored.json()["status"] == "pending"


@pytest.mark.asyncio
async def test_unknown_decision_is_bad_request(client):
    created = (await _create(client)).json()
    resp = await client.patch(
        f"{API}/negotiations/{created['id']}/respond",
        json={"driver_id": "d1", "decision": "maybe"},
    )
    assert resp.status_code == 400


def _raw_json(body: str) -> dict:
    # NaN / Infinity literals are not valid JSON, but the server's parser accepts them
    return {"content": body, "headers": {"content-type": "application/json"}}


@pytest.mark.asyncio
@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
async def test_non_finite_counter_offer_is_bad_request(client, literal):
    created = (await _create(client)).json()
    resp = await client.patch(
        f"{API}/negotiations/{created['id']}/respond",
        **_raw_json(
            '{"driver_id": "d1", "decision": "countered", '
            f'"counter_offer": {literal}}}'
        ),
    )
    assert resp.status_code == 400
    stored = await client.get(f"{API}/negotiations/{created['id']}")
    assert stored.json()["status"] == "pending"
    assert stored.json()["driver_counter_offer"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        '{"ride_id": "r9", "rider_id": "u1", "rider_offer": Infinity}',
        '{"ride_id": "r9", "rider_id": "u1", "rider_offer": NaN}',
        '{"ride_id": "r9", "rider_id": "u1", "rider_offer": 40, "estimated_fare": Infinity}',
    ],
)
async def test_non_finite_offer_is_bad_request(client, body):
    resp = await client.post(f"{API}/negotiations", **_raw_json(body))
    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert (await client.get(f"{API}/negotiations/ride/r9")).json() == []


@pytest.mark.asyncio
async def test_blank_ids_are_bad_request(client):
    resp = await _create(client, ride_id="   ")
    assert resp.status_code == 400

    created = (await _create(client)).json()
    resp = await client.patch(
        f"{API}/negotiations/{created['id']}/respond",
        json={"driver_id": "  ", "decision": "accepted"},
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_reject_counter(client):
    created = (await _create(client)).json()
    await client.patch(
        f"{API}/negotiations/{created['id']}/respond",
        json={"driver_id": "d1", "decision": "countered", "counter_offer": 50.0},
    )
    resp = await client.patch(f"{API}/negotiations/{created['id']}/reject-counter")
    assert resp.status_code == 200
    assert resp.json()["status"] == "rejected"
    assert resp.json()["driver_counter_offer"] is None

    # the ride is free again
    assert (await _create(client, rider_offer=44.0)).status_code == 201


@pytest.mark.asyncio
async def test_accept_counter_on_pending_conflicts(client):
    created = (await _create(client)).json()
    resp = await client.patch(f"{API}/negotiations/{created['id']}/accept-counter")
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_ride_history(client):
    first = (await _create(client)).json()
    await client.patch(
        f"{API}/negotiations/{first['id']}/respond",
        json={"driver_id": "d1", "decision": "rejected"},
    )
    second = (await _create(client, rider_offer=45.0)).json()
    await _create(client, ride_id="r2")

    resp = await client.get(f"{API}/negotiations/ride/r1")
    assert resp.status_code == 200
    assert [n["id"] for n in resp.json()] == [first["id"], second["id"]]
    assert [n["status"] for n in resp.json()] == ["rejected", "pending"]

    empty = await client.get(f"{API}/negotiations/ride/unknown")
    assert empty.status_code == 200
    assert empty.json() == []


@pytest.mark.asyncio
async def test_unknown_negotiation(client):
    resp = await client.get(f"{API}/negotiations/999")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Negotiation 999 not found"}

    resp = await client.patch(
        f"{API}/negotiations/999/respond",
        json={"driver_id": "d1", "decision": "accepted"},
    )
    assert resp.status_code == 404


# ── Weather ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_current_weather_is_cached(client, weather_provider):
    first = await client.get(f"{API}/weather/current/London")
    assert first.status_code == 200
    data = first.json()
    assert data["location"] == "london"
    assert data["condition"] == "Rain"
    assert data["temperature"] == 18.5

    second = await client.get(f"{API}/weather/current/LONDON")
    assert second.status_code == 200
    assert second.json() == data
    assert weather_provider.current_calls == ["london"]


@pytest.mark.asyncio
async def test_forecast(client):
    resp = await client.get(f"{API}/weather/forecast/London")
    assert resp.status_code == 200
    entries = resp.json()
    assert len(entries) == 8
    assert {e["condition"] for e in entries} == {"Clear", "Clouds"}


@pytest.mark.asyncio
async def test_weather_upstream_failure_is_generic(client, weather_provider):
    weather_provider.error = UpstreamError("api.openweathermap.org timed out")
    resp = await client.get(f"{API}/weather/current/London")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Failed to fetch weather data"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "condition, adjustment",
    [("RAIN", 1.2), ("snow", 1.35), ("Thunderstorm", 1.5), ("fog", 1.15), ("sunny", 1.0)],
)
async def test_weather_adjustment(client, condition, adjustment):
    resp = await client.get(f"{API}/weather/adjustment/{condition}")
    assert resp.status_code == 200
    assert resp.json()["adjustment"] == adjustment
    assert resp.json()["adjusted_fare"] is None


@pytest.mark.asyncio
async def test_weather_adjustment_with_base_fare(client):
    resp = await client.get(f"{API}/weather/adjustment/rain", params={"base_fare": 40})
    data = resp.json()
    assert data["adjusted_fare"] == 48.0
    assert data["message"] == "20% surge applied due to rain weather"


# ── Landmarks ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_landmark_search(client):
    resp = await client.get(f"{API}/landmarks", params={"q": "MALL"})
    assert resp.status_code == 200
    names = [lm["name"] for lm in resp.json()]
    assert "Central Mall" in names


@pytest.mark.asyncio
async def test_landmark_search_blank_query(client):
    resp = await client.get(f"{API}/landmarks")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_nearby_landmarks(client):
    resp = await client.get(
        f"{API}/landmarks/nearby", params={"lat": 40.7128, "lng": -74.006, "radius": 0}
    )
    assert resp.status_code == 200
    assert [lm["id"] for lm in resp.json()] == ["lm1"]

    wide = await client.get(
        f"{API}/landmarks/nearby", params={"lat": 40.7128, "lng": -74.006}
    )
    assert len(wide.json()) == 25


@pytest.mark.asyncio
async def test_nearby_negative_radius(client):
    resp = await client.get(
        f"{API}/landmarks/nearby", params={"lat": 40.7, "lng": -74.0, "radius": -1}
    )
    assert resp.status_code == 400
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_get_landmark(client):
    resp = await client.get(f"{API}/landmarks/lm2")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Grand Hotel"
    assert resp.json()["category"] == "hotel"

    missing = await client.get(f"{API}/landmarks/lm999")
    assert missing.status_code == 404


# ── Subscriptions ─────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_subscription_plans(client):
    resp = await client.get(f"{API}/subscriptions/plans")
    assert resp.status_code == 200
    plans = resp.json()
    assert [p["plan_type"] for p in plans] == ["basic", "premium", "unlimited"]
    assert plans[0]["price"] == 499.0


@pytest.mark.asyncio
async def test_subscription_lifecycle(client):
    assert (await client.get(f"{API}/subscriptions/user/7")).status_code == 404

    resp = await client.post(
        f"{API}/subscriptions/purchase", json={"user_id": 7, "plan_id": 2}
    )
    assert resp.status_code == 201
    subscription = resp.json()
    assert subscription["plan_type"] == "premium"
    assert subscription["rides_remaining"] == 25
    assert subscription["status"] == "active"

    again = await client.post(
        f"{API}/subscriptions/purchase", json={"user_id": 7, "plan_id": 1}
    )
    assert again.status_code == 409

    current = await client.get(f"{API}/subscriptions/user/7")
    assert current.json()["id"] == subscription["id"]

    cancelled = await client.patch(f"{API}/subscriptions/{subscription['id']}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    twice = await client.patch(f"{API}/subscriptions/{subscription['id']}/cancel")
    assert twice.status_code == 409
    assert (await client.get(f"{API}/subscriptions/user/7")).status_code == 404


@pytest.mark.asyncio
async def test_purchase_unknown_plan(client):
    resp = await client.post(
        f"{API}/subscriptions/purchase", json={"user_id": 7, "plan_id": 42}
    )
    assert resp.status_code == 404
