"""
Polling loop driving the recorder.

One cycle reads a snapshot, advances the trip lifecycle and, after all of
that work has been awaited, sleeps for the configured interval. Cycles
never overlap and no failure stops the loop; only cancellation does.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from core.exceptions import (
    OdometerError,
    PointPersistenceError,
    RecorderError,
    SnapshotFetchError,
    TripCreationError,
)
from recording.lifecycle import CycleOutcome, RecordingState

if TYPE_CHECKING:
    from recording.lifecycle import TripLifecycleManager
    from recording.snapshot import SnapshotReader

logger = logging.getLogger(__name__)


class PollingLoop:
    def __init__(
        self,
        reader: SnapshotReader,
        lifecycle: TripLifecycleManager,
        interval_seconds: float,
    ) -> None:
        self._reader = reader
        self._lifecycle = lifecycle
        self._interval_seconds = interval_seconds
        self._state = RecordingState()

    @property
    def state(self) -> RecordingState:
        return self._state

    async def run_cycle(self) -> CycleOutcome:
        """Run one cycle and return its outcome; recoverable errors are logged."""
        try:
            snapshot = await self._reader.fetch()
        except SnapshotFetchError as exc:
            _log_failure(exc)
            return CycleOutcome.FAILED

        result = await self._lifecycle.process(self._state, snapshot)
        self._state = result.state
        if result.error is not None:
            _log_failure(result.error)
        elif result.outcome is CycleOutcome.RECORDED:
            logger.debug("Recorded point for trip %s", self._state.trip_id)
        return result.outcome

    async def run_forever(self) -> None:
        """Run cycles back to back until the task is cancelled."""
        logger.info(
            "Recording loop started (interval %.2fs)",
            self._interval_seconds,
        )
        while True:
            try:
                await self.run_cycle()
            except Exception:
                logger.exception("Unexpected error in recording cycle")
            await asyncio.sleep(self._interval_seconds)


def _log_failure(exc: RecorderError) -> None:
    if isinstance(exc, SnapshotFetchError):
        logger.error("Error while getting current data from Redis: %s", exc.details)
    elif isinstance(exc, TripCreationError):
        logger.error("Failed to create trip %s: %s", exc.trip_id, exc.details)
    elif isinstance(exc, PointPersistenceError):
        logger.error("Failed to create point: %s", exc.message)
    elif isinstance(exc, OdometerError):
        logger.warning("Failed to update odometers: %s", exc.message)
    else:
        logger.error("Recording cycle failed: %s", exc.message)
