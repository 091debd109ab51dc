"""
Redis connections for the live telemetry store and the persistent counter store.

The recorder talks to two independent Redis servers: a volatile one that
upstream producers fill with the current telemetry, and a persistent one
that holds the odometer counters.
"""

from __future__ import annotations

import asyncio
import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


def create_redis_client(redis_url: str) -> aioredis.Redis:
    """Create an async Redis client that decodes replies to ``str``."""
    logger.debug("Creating Redis client for %s", _redacted(redis_url))
    return aioredis.from_url(redis_url, decode_responses=True)


def _redacted(redis_url: str) -> str:
    return redis_url.split("@")[-1] if "@" in redis_url else redis_url


async def report_connection(client: aioredis.Redis, label: str) -> bool:
    """
    Ping ``client`` once and log whether the connection is established.

    Used as the standalone liveness report for the persistent store; it
    never raises on connection problems.
    """
    try:
        await client.ping()
    except (RedisError, OSError) as exc:
        logger.error("Error in %s connection: %s", label, exc)
        return False
    logger.info("Connected to %s", label)
    return True


async def wait_for_connection(
    client: aioredis.Redis,
    label: str,
    retry_seconds: float,
) -> None:
    """Block until ``client`` answers a ping, retrying every ``retry_seconds``."""
    while not await report_connection(client, label):
        logger.warning("Retrying %s connection in %.1fs", label, retry_seconds)
        await asyncio.sleep(retry_seconds)


async def close_redis(client: aioredis.Redis | None, label: str) -> None:
    """Close a Redis client, logging instead of raising on failure."""
    if client is None:
        return
    try:
        await client.aclose()
    except (RedisError, OSError):
        logger.exception("Error closing %s connection", label)
    else:
        logger.info("%s connection closed", label)


__all__ = [
    "close_redis",
    "create_redis_client",
    "report_connection",
    "wait_for_connection",
]
