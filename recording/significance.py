"""
Decimation predicate deciding whether a snapshot becomes a new trip point.

Rules are evaluated in a fixed order and the first match wins. The order
is observable: a first sample at exactly (0, 0) reaches the zero-fix rule
and is dropped rather than starting the trip.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config import DEFAULT_MIN_TRAVEL_DISTANCE_M
from core.spatial import gps_distance_meters

if TYPE_CHECKING:
    from db.models import TripPoint

logger = logging.getLogger(__name__)


def needs_update(
    prev: TripPoint | None,
    current: TripPoint | None,
    *,
    min_travel_distance_m: float = DEFAULT_MIN_TRAVEL_DISTANCE_M,
) -> bool:
    """
    Return whether ``current`` is significant enough to persist after ``prev``.

    Args:
        prev: Last persisted point of the active trip, if any.
        current: Candidate point built from this cycle's snapshot.
        min_travel_distance_m: Movements strictly shorter than this are
            dropped. A movement of exactly this distance is recorded.
    """
    if prev is None and current is None:
        return False
    if current is None:
        return False

    if prev is None and current.latitude and current.longitude:
        return True

    # (0, 0) is what an unset receiver reports.
    if current.latitude == 0 and current.longitude == 0:
        return False

    if prev is None:
        return False

    # Any change in vehicle speed is sampled, even while stationary.
    if prev.vehicle_speed != current.vehicle_speed:
        return True

    if prev.latitude == current.latitude and prev.longitude == current.longitude:
        return False

    if current.latitude is None or current.longitude is None:
        return False
    # A stored point without a fix cannot be measured from.
    if prev.latitude is None or prev.longitude is None:
        return True

    distance_m = gps_distance_meters(
        float(prev.latitude),
        float(prev.longitude),
        float(current.latitude),
        float(current.longitude),
    )
    if distance_m < min_travel_distance_m:
        logger.debug(
            "Skipping point: moved %.2fm, below %.2fm",
            distance_m,
            min_travel_distance_m,
        )
        return False

    return True
