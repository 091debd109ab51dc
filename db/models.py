"""Beanie ODM document models for MongoDB collections.

Usage:
    from db.models import Trip, TripPoint

    # Find a trip
    trip = await Trip.find_one(Trip.trip_id == "abc123")

    # Insert a new point
    point = TripPoint.from_snapshot("abc123", snapshot)
    await point.insert()
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from beanie import Document, Indexed
from pydantic import Field
from pymongo import ASCENDING, DESCENDING, IndexModel

if TYPE_CHECKING:
    from recording.snapshot import TelemetrySnapshot


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Trip(Document):
    """A recording session identified by an externally assigned trip id."""

    trip_id: Indexed(str, unique=True)
    created_at: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "trips"


class TripPoint(Document):
    """One persisted, decimated telemetry sample belonging to a trip."""

    trip_id: Indexed(str)
    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    fix_mode: int | None = None
    gps_speed: float | None = None
    accuracy_lat: float | None = None
    accuracy_lon: float | None = None
    accuracy_alt: float | None = None
    accuracy_spd: float | None = None
    vehicle_speed: float | None = None
    vehicle_intake_temp: float | None = None
    vehicle_intake_map: float | None = None
    vehicle_rpm: float | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    class Settings:
        name = "trip_points"
        indexes = [
            IndexModel(
                [("trip_id", ASCENDING), ("created_at", ASCENDING)],
                name="trip_points_trip_created_idx",
            ),
        ]

    @classmethod
    def from_snapshot(
        cls,
        trip_id: str,
        snapshot: TelemetrySnapshot,
    ) -> TripPoint:
        """Build an unsaved point for ``trip_id`` from a normalized snapshot."""
        return cls(
            trip_id=trip_id,
            latitude=snapshot.latitude,
            longitude=snapshot.longitude,
            altitude=snapshot.altitude,
            fix_mode=snapshot.fix_mode,
            gps_speed=snapshot.gps_speed,
            accuracy_lat=snapshot.gps_accuracy_lat,
            accuracy_lon=snapshot.gps_accuracy_lon,
            accuracy_alt=snapshot.gps_accuracy_height,
            accuracy_spd=snapshot.gps_accuracy_speed,
            vehicle_speed=snapshot.obd_speed_kmh,
            vehicle_intake_temp=snapshot.intake_temp,
            vehicle_intake_map=snapshot.intake_map,
            vehicle_rpm=snapshot.engine_rpm,
        )


class ServerLog(Document):
    """Server log document for MongoDB logging handler."""

    timestamp: Indexed(datetime, index_type=DESCENDING) | None = None
    level: str | None = None
    logger_name: str | None = None
    message: str | None = None
    pathname: str | None = None
    lineno: int | None = None
    funcName: str | None = None
    exc_info: str | None = None

    class Settings:
        name = "server_logs"
        indexes = [
            IndexModel([("level", ASCENDING)], name="server_logs_level_idx"),
            IndexModel(
                [("timestamp", ASCENDING)],
                name="server_logs_ttl_idx",
                expireAfterSeconds=30 * 24 * 60 * 60,
            ),
        ]


ALL_DOCUMENT_MODELS = [
    Trip,
    TripPoint,
    ServerLog,
]

__all__ = [
    "ALL_DOCUMENT_MODELS",
    "ServerLog",
    "Trip",
    "TripPoint",
]
