"""Publishes the identifier of the trip being recorded back to Redis."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redis.exceptions import RedisError

if TYPE_CHECKING:
    import redis.asyncio as aioredis

logger = logging.getLogger(__name__)


class ActiveTripPublisher:
    """
    Writes the active trip id to the live store and mirrors it to the
    persistent store so external observers can see what is being recorded.
    """

    def __init__(
        self,
        live_client: aioredis.Redis,
        persistent_client: aioredis.Redis,
        key: str,
    ) -> None:
        self._targets = (("live", live_client), ("persistent", persistent_client))
        self._key = key

    async def publish(self, trip_id: str) -> bool:
        """Best-effort publish; returns ``False`` if any store rejected it."""
        published = True
        for label, client in self._targets:
            try:
                await client.set(self._key, trip_id)
            except (RedisError, OSError) as exc:
                published = False
                logger.warning(
                    "Could not publish active trip %s to %s store: %s",
                    trip_id,
                    label,
                    exc,
                )
        return published
