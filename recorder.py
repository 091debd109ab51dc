"""
GPS trip recorder worker.

Samples the live telemetry store once per interval and records decimated
trip points to MongoDB. Run with ``python recorder.py``; stop with Ctrl+C
or by terminating the process.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import sys

from config import RecorderConfig, load_recorder_config
from core.exceptions import ConfigurationError
from core.redis import (
    close_redis,
    create_redis_client,
    report_connection,
    wait_for_connection,
)
from db import db_manager
from db.logging_handler import attach_mongo_handler, detach_mongo_handler
from recording.lifecycle import TripLifecycleManager
from recording.loop import PollingLoop
from recording.odometer import OdometerAccumulator
from recording.publisher import ActiveTripPublisher
from recording.repository import TripPointRepository, TripRepository
from recording.snapshot import SnapshotReader

logger = logging.getLogger(__name__)

LIVE_STORE_LABEL = "Redis host"
PERSISTENT_STORE_LABEL = "persistent Redis host"


def configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


async def run_recorder(config: RecorderConfig) -> None:
    """Wire the collaborators together and run the polling loop until cancelled."""
    await db_manager.init_beanie()
    mongo_handler = attach_mongo_handler()

    live_client = create_redis_client(config.redis_url)
    persistent_client = create_redis_client(config.persistent_redis_url)
    liveness_task = asyncio.create_task(
        report_connection(persistent_client, PERSISTENT_STORE_LABEL),
    )

    lifecycle = TripLifecycleManager(
        TripRepository(),
        TripPointRepository(),
        OdometerAccumulator(persistent_client, config.persistent_keys),
        ActiveTripPublisher(
            live_client,
            persistent_client,
            config.redis_keys.record_trip_id_a,
        ),
        min_travel_distance_m=config.min_travel_distance_m,
    )
    loop = PollingLoop(
        SnapshotReader(live_client, config.redis_keys),
        lifecycle,
        config.interval_seconds,
    )

    try:
        await wait_for_connection(
            live_client,
            LIVE_STORE_LABEL,
            config.interval_seconds,
        )
        await loop.run_forever()
    finally:
        liveness_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await liveness_task
        await close_redis(live_client, LIVE_STORE_LABEL)
        await close_redis(persistent_client, PERSISTENT_STORE_LABEL)
        await mongo_handler.flush_pending()
        detach_mongo_handler(mongo_handler)
        await db_manager.cleanup_connections()


def main() -> int:
    configure_logging()
    try:
        config = load_recorder_config()
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc.message)
        return 1

    try:
        asyncio.run(run_recorder(config))
    except KeyboardInterrupt:
        logger.info("Recorder stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
