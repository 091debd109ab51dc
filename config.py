"""Centralized configuration for the trip recorder.

This module is the single source of truth for configuration. Values come
from environment variables (optionally loaded from a ``.env`` file); import
``load_recorder_config`` rather than calling ``os.getenv`` elsewhere.

Store key names have no defaults and must always be supplied.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Final, TypeVar

from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Load environment variables from .env if present
load_dotenv()

DEFAULT_INTERVAL_SECONDS: Final[float] = 1.0
DEFAULT_MIN_TRAVEL_DISTANCE_M: Final[float] = 10.0
DEFAULT_REDIS_URL: Final[str] = "redis://localhost:6379"
DEFAULT_PERSISTENT_REDIS_URL: Final[str] = "redis://localhost:6380"


@dataclass(frozen=True)
class RedisKeys:
    """Live store key names, one per tracked telemetry signal."""

    gps_alive: str
    obd_alive: str
    latitude: str
    longitude: str
    altitude: str
    fix_mode: str
    gps_time: str
    gps_speed: str
    gps_speed_kmh: str
    gps_accuracy_lon: str
    gps_accuracy_lat: str
    gps_accuracy_height: str
    gps_accuracy_speed: str
    obd_speed_kmh: str
    engine_rpm: str
    intake_temp: str
    intake_map: str
    record_trip_id_a: str
    record_trip_id_b: str


@dataclass(frozen=True)
class PersistentRedisKeys:
    """Persistent store counter names."""

    odo: str
    trip_a: str
    trip_b: str


@dataclass(frozen=True)
class RecorderConfig:
    interval_seconds: float
    min_travel_distance_m: float
    redis_url: str
    persistent_redis_url: str
    redis_keys: RedisKeys
    persistent_keys: PersistentRedisKeys


_KeysT = TypeVar("_KeysT", RedisKeys, PersistentRedisKeys)


def _env_name(prefix: str, field_name: str) -> str:
    return f"{prefix}{field_name.upper()}"


def _read_float(name: str, default: float, errors: list[str]) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        errors.append(f"{name} must be a number (got {raw!r})")
        return default


def _read_keys(
    cls: type[_KeysT],
    prefix: str,
    missing: list[str],
) -> _KeysT:
    values: dict[str, str] = {}
    for field in fields(cls):
        name = _env_name(prefix, field.name)
        value = os.getenv(name, "").strip()
        if not value:
            missing.append(name)
        values[field.name] = value
    return cls(**values)


def load_recorder_config() -> RecorderConfig:
    """
    Build the recorder configuration from the environment.

    Raises:
        ConfigurationError: If any store key name is missing or a numeric
            option cannot be parsed. All problems are reported at once.
    """
    errors: list[str] = []
    missing: list[str] = []

    interval = _read_float(
        "RECORDER_INTERVAL_SECONDS",
        DEFAULT_INTERVAL_SECONDS,
        errors,
    )
    if interval <= 0:
        errors.append("RECORDER_INTERVAL_SECONDS must be greater than zero")
    min_distance = _read_float(
        "MIN_TRAVEL_DISTANCE_M",
        DEFAULT_MIN_TRAVEL_DISTANCE_M,
        errors,
    )
    if min_distance < 0:
        errors.append("MIN_TRAVEL_DISTANCE_M must not be negative")

    redis_keys = _read_keys(RedisKeys, "REDIS_KEY_", missing)
    persistent_keys = _read_keys(PersistentRedisKeys, "PERSISTENT_REDIS_KEY_", missing)

    if missing:
        errors.append("Missing required settings: " + ", ".join(missing))
    if errors:
        raise ConfigurationError(
            "; ".join(errors),
            details={"missing": missing},
        )

    return RecorderConfig(
        interval_seconds=interval,
        min_travel_distance_m=min_distance,
        redis_url=os.getenv("REDIS_URL", "").strip() or DEFAULT_REDIS_URL,
        persistent_redis_url=(
            os.getenv("PERSISTENT_REDIS_URL", "").strip()
            or DEFAULT_PERSISTENT_REDIS_URL
        ),
        redis_keys=redis_keys,
        persistent_keys=persistent_keys,
    )


__all__ = [
    "DEFAULT_INTERVAL_SECONDS",
    "DEFAULT_MIN_TRAVEL_DISTANCE_M",
    "PersistentRedisKeys",
    "RecorderConfig",
    "RedisKeys",
    "load_recorder_config",
]
