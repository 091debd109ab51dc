from __future__ import annotations

from types import SimpleNamespace

import pytest

from core.spatial import gps_distance_meters
from recording.significance import needs_update


def _point(
    latitude: float | None,
    longitude: float | None,
    vehicle_speed: float | None = 10.0,
) -> SimpleNamespace:
    return SimpleNamespace(
        latitude=latitude,
        longitude=longitude,
        vehicle_speed=vehicle_speed,
    )


def test_nothing_to_compare() -> None:
    assert needs_update(None, None) is False


def test_first_valid_fix_starts_recording() -> None:
    assert needs_update(None, _point(47.1, 8.2)) is True


def test_first_zero_fix_is_not_recorded() -> None:
    assert needs_update(None, _point(0, 0)) is False


@pytest.mark.parametrize("current", [_point(0, 8.2), _point(47.1, 0), _point(None, 8.2)])
def test_first_fix_with_a_missing_coordinate_is_not_recorded(
    current: SimpleNamespace,
) -> None:
    assert needs_update(None, current) is False


@pytest.mark.parametrize("prev_speed", [10.0, 55.0, None])
def test_zero_fix_is_ignored_regardless_of_prev(prev_speed: float | None) -> None:
    prev = _point(47.1, 8.2, prev_speed)
    assert needs_update(prev, _point(0, 0, 99.0)) is False


def test_speed_change_forces_update_without_movement() -> None:
    assert needs_update(_point(47.1, 8.2, 10.0), _point(47.1, 8.2, 20.0)) is True


def test_speed_appearing_counts_as_change() -> None:
    assert needs_update(_point(47.1, 8.2, None), _point(47.1, 8.2, 0.0)) is True


def test_unchanged_position_and_speed_is_skipped() -> None:
    assert needs_update(_point(47.1, 8.2, 10.0), _point(47.1, 8.2, 10.0)) is False


def test_short_movement_is_skipped() -> None:
    # ~1.1 m at the equator
    assert needs_update(_point(0.0, 1.0), _point(0.0, 1.00001)) is False


def test_long_movement_is_recorded() -> None:
    # ~111 m at the equator
    assert needs_update(_point(0.0, 1.0), _point(0.0, 1.001)) is True


def test_threshold_is_inclusive_of_update() -> None:
    prev = _point(0.0, 1.0)
    current = _point(0.0, 1.001)
    distance = gps_distance_meters(0.0, 1.0, 0.0, 1.001)

    assert needs_update(prev, current, min_travel_distance_m=distance) is True
    assert (
        needs_update(prev, current, min_travel_distance_m=distance + 1e-6) is False
    )


def test_custom_threshold() -> None:
    prev = _point(0.0, 1.0)
    current = _point(0.0, 1.0002)  # ~22 m

    assert needs_update(prev, current, min_travel_distance_m=10) is True
    assert needs_update(prev, current, min_travel_distance_m=50) is False


def test_fix_after_positionless_point_is_recorded() -> None:
    assert needs_update(_point(None, None), _point(47.1, 8.2)) is True


def test_positionless_current_without_speed_change_is_skipped() -> None:
    assert needs_update(_point(47.1, 8.2), _point(None, None)) is False
    assert needs_update(_point(47.1, 8.2), _point(47.1, None)) is False
