from __future__ import annotations

from types import SimpleNamespace

import pytest

from core.exceptions import OdometerError
from core.spatial import gps_distance_km
from recording.odometer import OdometerAccumulator
from redis_fakes import FakeRedis


def _point(latitude: float | None, longitude: float | None) -> SimpleNamespace:
    return SimpleNamespace(trip_id="trip-1", latitude=latitude, longitude=longitude)


@pytest.mark.asyncio
async def test_accumulate_adds_distance_to_all_counters(persistent_keys) -> None:
    client = FakeRedis({persistent_keys.odo: 1000.0})
    odometer = OdometerAccumulator(client, persistent_keys)
    expected = gps_distance_km(0, 0, 0, 0.001) * 1000

    added = await odometer.accumulate(_point(0, 0), _point(0, 0.001))

    assert added == expected
    assert client.data[persistent_keys.odo] == 1000.0 + expected
    assert client.data[persistent_keys.trip_a] == expected
    assert client.data[persistent_keys.trip_b] == expected


@pytest.mark.asyncio
async def test_accumulate_without_prev_is_noop(persistent_keys) -> None:
    client = FakeRedis()
    odometer = OdometerAccumulator(client, persistent_keys)

    assert await odometer.accumulate(None, _point(0, 0.001)) is None
    assert client.data == {}


@pytest.mark.asyncio
async def test_zero_distance_is_still_added(persistent_keys) -> None:
    client = FakeRedis()
    odometer = OdometerAccumulator(client, persistent_keys)

    added = await odometer.accumulate(_point(47.0, 8.0), _point(47.0, 8.0))

    assert added == 0.0
    assert set(client.data) == set(odometer.counter_keys)


@pytest.mark.asyncio
async def test_store_failure_raises_odometer_error(persistent_keys) -> None:
    client = FakeRedis()
    client.fail_writes = True
    odometer = OdometerAccumulator(client, persistent_keys)

    with pytest.raises(OdometerError):
        await odometer.accumulate(_point(0, 0), _point(0, 0.001))
    assert client.data == {}


@pytest.mark.asyncio
async def test_missing_position_raises_odometer_error(persistent_keys) -> None:
    odometer = OdometerAccumulator(FakeRedis(), persistent_keys)

    with pytest.raises(OdometerError):
        await odometer.accumulate(_point(None, 8.0), _point(47.0, 8.0))
