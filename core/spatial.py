"""
Spatial utilities.

Centralizes great-circle distance calculations used by the trip recorder.
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)


class GeometryService:
    """Authoritative geometry operations for the application."""

    EARTH_RADIUS_M = 6371000.0

    @staticmethod
    def haversine_distance(
        lon1: float,
        lat1: float,
        lon2: float,
        lat2: float,
        unit: str = "meters",
    ) -> float:
        """Calculate the great-circle distance using the Haversine formula."""
        phi1 = math.radians(lat1)
        phi2 = math.radians(lat2)
        dphi = math.radians(lat2 - lat1)
        dlmb = math.radians(lon2 - lon1)
        a = (
            math.sin(dphi / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
        )
        distance_m = (
            2 * GeometryService.EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))
        )
        if unit == "meters":
            return distance_m
        if unit == "miles":
            return distance_m / 1609.344
        if unit == "km":
            return distance_m / 1000.0
        msg = "Invalid unit. Use 'meters', 'miles', or 'km'."
        raise ValueError(msg)


def gps_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two (lat, lon) pairs in degrees."""
    return GeometryService.haversine_distance(lon1, lat1, lon2, lat2, unit="km")


def gps_distance_meters(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """
    Great-circle distance in metres between two (lat, lon) pairs.

    Derived from :func:`gps_distance_km` so threshold checks and odometer
    increments agree to the last bit.
    """
    return gps_distance_km(lat1, lon1, lat2, lon2) * 1000
