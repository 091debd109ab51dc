"""Odometer accumulation into the persistent Redis counters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from core.exceptions import OdometerError
from core.spatial import gps_distance_meters

if TYPE_CHECKING:
    import redis.asyncio as aioredis

    from config import PersistentRedisKeys
    from db.models import TripPoint

logger = logging.getLogger(__name__)


class OdometerAccumulator:
    """
    Adds the distance between consecutive points to three running counters.

    Trip counter B receives the same increment as A; nothing here resets
    either of them.
    """

    def __init__(self, client: aioredis.Redis, keys: PersistentRedisKeys) -> None:
        self._client = client
        self._keys = keys

    @property
    def counter_keys(self) -> tuple[str, str, str]:
        return (self._keys.odo, self._keys.trip_a, self._keys.trip_b)

    async def accumulate(
        self,
        prev: TripPoint | None,
        current: TripPoint,
    ) -> float | None:
        """
        Increment every counter by the distance from ``prev`` to ``current``.

        Returns:
            The increment in metres, or ``None`` when there was nothing to
            accumulate against.

        Raises:
            OdometerError: If a position is missing or the store rejects
                the increment.
        """
        if prev is None:
            return None

        if None in (prev.latitude, prev.longitude, current.latitude, current.longitude):
            msg = "Cannot accumulate distance without both positions"
            raise OdometerError(msg, details={"trip_id": current.trip_id})

        distance_m = gps_distance_meters(
            float(prev.latitude),
            float(prev.longitude),
            float(current.latitude),
            float(current.longitude),
        )

        try:
            async with self._client.pipeline(transaction=True) as pipe:
                for key in self.counter_keys:
                    pipe.incrbyfloat(key, distance_m)
                await pipe.execute()
        except (RedisError, OSError) as exc:
            raise OdometerError(
                f"Failed to add {distance_m:.3f}m to odometers",
                details={"error": str(exc), "distance_m": distance_m},
            ) from exc

        logger.debug("Added %.3fm to odometers", distance_m)
        return distance_m
