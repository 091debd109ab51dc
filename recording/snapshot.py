"""Telemetry snapshot ingestion from the live Redis store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any

from redis.exceptions import RedisError

from core.casting import flag, optional_float, optional_int, optional_str
from core.exceptions import SnapshotFetchError

if TYPE_CHECKING:
    from collections.abc import Mapping

    import redis.asyncio as aioredis

    from config import RedisKeys

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TelemetrySnapshot:
    """One cycle's normalized read of every tracked signal."""

    gps_alive: bool = False
    obd_alive: bool = False
    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    fix_mode: int | None = None
    gps_time: str | None = None
    gps_speed: float | None = None
    gps_speed_kmh: float | None = None
    gps_accuracy_lon: float | None = None
    gps_accuracy_lat: float | None = None
    gps_accuracy_height: float | None = None
    gps_accuracy_speed: float | None = None
    obd_speed_kmh: float | None = None
    engine_rpm: float | None = None
    intake_temp: float | None = None
    intake_map: float | None = None
    record_trip_id_a: str | None = None
    record_trip_id_b: str | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> TelemetrySnapshot:
        """
        Normalize raw store values keyed by field name.

        The ``"nan"`` sentinel, blank strings and missing keys all become
        ``None``; liveness flags become booleans.
        """
        values: dict[str, Any] = {}
        for field in fields(cls):
            value = raw.get(field.name)
            if field.name in _FLAG_FIELDS:
                values[field.name] = flag(value)
            elif field.name in _INT_FIELDS:
                values[field.name] = optional_int(value)
            elif field.name in _STR_FIELDS:
                values[field.name] = optional_str(value)
            else:
                values[field.name] = optional_float(value)
        return cls(**values)

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None


_FLAG_FIELDS = frozenset({"gps_alive", "obd_alive"})
_INT_FIELDS = frozenset({"fix_mode"})
_STR_FIELDS = frozenset({"gps_time", "record_trip_id_a", "record_trip_id_b"})


class SnapshotReader:
    """Reads a :class:`TelemetrySnapshot` from the live store with one ``MGET``."""

    def __init__(self, client: aioredis.Redis, keys: RedisKeys) -> None:
        self._client = client
        self._fields = [field.name for field in fields(keys)]
        self._store_keys = [getattr(keys, name) for name in self._fields]

    async def fetch(self) -> TelemetrySnapshot:
        """
        Fetch and normalize the current telemetry.

        Raises:
            SnapshotFetchError: If the live store cannot be read.
        """
        try:
            replies = await self._client.mget(self._store_keys)
        except (RedisError, OSError) as exc:
            logger.warning("Error while getting telemetry from Redis: %s", exc)
            raise SnapshotFetchError(
                "Failed to get data from the live store",
                details={"error": str(exc)},
            ) from exc
        raw = dict(zip(self._fields, replies, strict=True))
        logger.debug("Fetched telemetry %s", raw)
        return TelemetrySnapshot.from_raw(raw)
