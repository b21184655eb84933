import pytest

from app.realtime.fields import now_ms
from app.realtime.matcher import find_nearest_partner
from app.realtime.presence import get_all_presence, set_presence
from app.realtime.result import SyncStatus

pytestmark = pytest.mark.anyio


async def _put(store, partner_id, **record):
    await store.update(f"delivery_boys/{partner_id}", record)


# ---------- presence ----------

async def test_set_presence_requires_partner_id(store):
    result = await set_presence(store, "", online=True, lat=1.0, lng=2.0)
    assert not result
    assert result.status is SyncStatus.invalid_input
    assert store.snapshot() == {}


async def test_set_presence_without_store_is_unavailable():
    result = await set_presence(None, "p1", online=True)
    assert not result
    assert result.status is SyncStatus.unavailable


async def test_set_presence_writes_status_and_coordinates(store):
    result = await set_presence(store, "p1", online=True, lat=28.6, lng=77.2)
    assert result

    rec = store.snapshot()["delivery_boys"]["p1"]
    assert rec["status"] == "online"
    assert rec["lat"] == 28.6
    assert rec["lng"] == 77.2
    assert rec["last_updated"] <= now_ms()


async def test_heartbeat_without_coordinates_keeps_previous_ones(store):
    await set_presence(store, "p1", online=True, lat=28.6, lng=77.2)
    await set_presence(store, "p1", online=False)

    rec = store.snapshot()["delivery_boys"]["p1"]
    assert rec["status"] == "offline"
    assert rec["lat"] == 28.6
    assert rec["lng"] == 77.2


async def test_half_a_coordinate_pair_is_not_written(store):
    await set_presence(store, "p1", online=True, lat=28.6)
    await set_presence(store, "p2", online=True, lat=True, lng=77.2)

    boys = store.snapshot()["delivery_boys"]
    assert "lat" not in boys["p1"]
    assert "lat" not in boys["p2"] and "lng" not in boys["p2"]


async def test_get_all_presence(store):
    await set_presence(store, "p1", online=True, lat=1.0, lng=2.0)
    await set_presence(store, "p2", online=False)

    records = await get_all_presence(store)
    assert set(records) == {"p1", "p2"}
    assert records["p1"].is_online and records["p1"].is_locatable
    assert not records["p2"].is_online and not records["p2"].is_locatable

    assert await get_all_presence(None) == {}


# ---------- matcher ----------

async def test_nearest_after_heartbeat(store):
    await set_presence(store, "p1", online=True, lat=28.6, lng=77.2)

    nearest = await find_nearest_partner(store, 28.61, 77.21)
    assert nearest is not None
    assert nearest.partner_id == "p1"
    assert 0 < nearest.distance_km < 2
    assert (nearest.lat, nearest.lng) == (28.6, 77.2)


async def test_no_presence_records_means_no_candidate(store):
    assert await find_nearest_partner(store, 28.61, 77.21) is None


async def test_unavailable_store_means_no_candidate():
    assert await find_nearest_partner(None, 28.61, 77.21) is None


async def test_non_finite_pickup_means_no_candidate(store):
    await set_presence(store, "p1", online=True, lat=28.6, lng=77.2)
    assert await find_nearest_partner(store, float("nan"), 77.21) is None


async def test_picks_the_closest_partner(store):
    now = 1_700_000_000_000
    await _put(store, "far", status="online", lat=28.9, lng=77.5, last_updated=now)
    await _put(store, "near", status="online", lat=28.611, lng=77.211, last_updated=now)
    await _put(store, "mid", status="online", lat=28.7, lng=77.3, last_updated=now)

    nearest = await find_nearest_partner(store, 28.61, 77.21, now=now)
    assert nearest.partner_id == "near"


async def test_stale_partner_is_never_returned(store):
    now = 1_700_000_000_000
    await _put(store, "stale", status="online", lat=28.61, lng=77.21, last_updated=now - 120_001)
    await _put(store, "fresh", status="online", lat=29.5, lng=78.0, last_updated=now - 1_000)

    nearest = await find_nearest_partner(store, 28.61, 77.21, max_age_ms=120_000, now=now)
    assert nearest.partner_id == "fresh"

    only_stale = await find_nearest_partner(store, 28.61, 77.21, max_age_ms=500, now=now)
    assert only_stale is None


async def test_age_exactly_at_limit_is_eligible(store):
    now = 1_700_000_000_000
    await _put(store, "p1", status="online", lat=1.0, lng=1.0, last_updated=now - 5_000)

    assert await find_nearest_partner(store, 1.0, 1.0, max_age_ms=5_000, now=now) is not None
    assert await find_nearest_partner(store, 1.0, 1.0, max_age_ms=4_999, now=now) is None


async def test_zero_max_age_accepts_same_instant(store):
    now = 1_700_000_000_000
    await _put(store, "p1", status="online", lat=1.0, lng=1.0, last_updated=now)

    nearest = await find_nearest_partner(store, 1.0, 1.0, max_age_ms=0, now=now)
    assert nearest.partner_id == "p1"
    assert nearest.distance_km == 0


async def test_offline_and_unlocated_partners_are_skipped(store):
    now = 1_700_000_000_000
    await _put(store, "offline", status="offline", lat=1.0, lng=1.0, last_updated=now)
    await _put(store, "nowhere", status="online", last_updated=now)
    await _put(store, "no_clock", status="online", lat=1.0, lng=1.0)

    assert await find_nearest_partner(store, 1.0, 1.0, now=now) is None


async def test_equidistant_partners_return_a_minimal_candidate(store):
    now = 1_700_000_000_000
    await _put(store, "a", status="online", lat=1.0, lng=1.01, last_updated=now)
    await _put(store, "b", status="online", lat=1.0, lng=0.99, last_updated=now)
    await _put(store, "c", status="online", lat=1.5, lng=1.5, last_updated=now)

    nearest = await find_nearest_partner(store, 1.0, 1.0, now=now)
    assert nearest.partner_id in {"a", "b"}


@pytest.mark.parametrize("partner_id", ["a/b", "p.1", "p#1", "p$1", "p[1]", "p\n1", None])
async def test_set_presence_rejects_unusable_ids(store, partner_id):
    result = await set_presence(store, partner_id, online=True, lat=1.0, lng=1.0)
    assert result.status is SyncStatus.invalid_input
    assert store.snapshot() == {}


async def test_slash_id_cannot_hide_a_partner(store):
    await set_presence(store, "a/b", online=True, lat=1.0, lng=1.0)
    await set_presence(store, "a", online=True, lat=1.0, lng=1.0)

    nearest = await find_nearest_partner(store, 1.0, 1.0)
    assert nearest.partner_id == "a"
