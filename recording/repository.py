"""Trip and trip point persistence.

Thin wrappers around the Beanie documents that translate database
failures into the recorder's exception taxonomy.
"""

from __future__ import annotations

import logging

from pymongo.errors import DuplicateKeyError, PyMongoError

from core.exceptions import PointPersistenceError, TripCreationError
from db.models import Trip, TripPoint

logger = logging.getLogger(__name__)


class TripRepository:
    """Repository for trip documents."""

    async def find_or_create(self, trip_id: str) -> Trip:
        """
        Return the trip with ``trip_id``, inserting it first if needed.

        Raises:
            TripCreationError: If the trip can neither be found nor created.
        """
        try:
            trip = await Trip.find_one(Trip.trip_id == trip_id)
            if trip is not None:
                return trip

            trip = Trip(trip_id=trip_id)
            try:
                await trip.insert()
            except DuplicateKeyError:
                # Inserted concurrently by another writer; use theirs.
                existing = await Trip.find_one(Trip.trip_id == trip_id)
                if existing is None:
                    raise
                return existing
        except PyMongoError as exc:
            raise TripCreationError(
                trip_id,
                details={"error": str(exc)},
            ) from exc

        logger.info("Created trip %s", trip_id)
        return trip


class TripPointRepository:
    """Repository for trip point documents."""

    async def create(self, point: TripPoint) -> TripPoint:
        """
        Insert ``point`` and return the persisted document.

        Raises:
            PointPersistenceError: If the insert fails.
        """
        try:
            return await point.insert()
        except PyMongoError as exc:
            raise PointPersistenceError(
                f"Failed to create point for trip {point.trip_id}",
                details={"trip_id": point.trip_id, "error": str(exc)},
            ) from exc
