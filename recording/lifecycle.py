"""
Trip lifecycle: which trip is being recorded and what was last persisted.

The polling loop owns a :class:`RecordingState` and hands it to
:meth:`TripLifecycleManager.process` once per cycle; the manager returns
the state to keep for the next cycle together with what happened.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from config import DEFAULT_MIN_TRAVEL_DISTANCE_M
from core.exceptions import OdometerError, RecorderError
from db.models import Trip, TripPoint
from recording.significance import needs_update

if TYPE_CHECKING:
    from recording.odometer import OdometerAccumulator
    from recording.publisher import ActiveTripPublisher
    from recording.repository import TripPointRepository, TripRepository
    from recording.snapshot import TelemetrySnapshot

logger = logging.getLogger(__name__)


class CycleOutcome(enum.Enum):
    SKIPPED = "skipped"
    UNCHANGED = "unchanged"
    RECORDED = "recorded"
    FAILED = "failed"


@dataclass(frozen=True)
class RecordingState:
    """The trip being recorded and its last persisted point."""

    trip: Trip | None = None
    last_point: TripPoint | None = None

    def __post_init__(self) -> None:
        if self.last_point is None:
            return
        if self.trip is None or self.last_point.trip_id != self.trip.trip_id:
            msg = "last_point must belong to the active trip"
            raise ValueError(msg)

    @property
    def trip_id(self) -> str | None:
        return self.trip.trip_id if self.trip is not None else None

    @property
    def is_active(self) -> bool:
        return self.trip is not None


@dataclass(frozen=True)
class CycleResult:
    """State to carry forward, the cycle outcome and the failure, if any."""

    state: RecordingState
    outcome: CycleOutcome
    error: RecorderError | None = None


class TripLifecycleManager:
    def __init__(
        self,
        trips: TripRepository,
        points: TripPointRepository,
        odometer: OdometerAccumulator,
        publisher: ActiveTripPublisher,
        *,
        min_travel_distance_m: float = DEFAULT_MIN_TRAVEL_DISTANCE_M,
    ) -> None:
        self._trips = trips
        self._points = points
        self._odometer = odometer
        self._publisher = publisher
        self._min_travel_distance_m = min_travel_distance_m

    async def process(
        self,
        state: RecordingState,
        snapshot: TelemetrySnapshot,
    ) -> CycleResult:
        """
        Advance the recording for one snapshot.

        Never raises for recoverable failures: they are returned in
        :attr:`CycleResult.error` alongside the state to keep. A failed trip
        creation leaves the recorder idle; a failed point insert keeps the
        previous last point.
        """
        requested_id = snapshot.record_trip_id_a
        if not snapshot.gps_alive or requested_id is None:
            return CycleResult(state, CycleOutcome.SKIPPED)

        if state.trip is not None and state.trip.trip_id != requested_id:
            logger.info(
                "Requested trip changed from %s to %s",
                state.trip.trip_id,
                requested_id,
            )
            state = RecordingState()

        try:
            if state.trip is None:
                state = await self._activate(requested_id)
            return await self._record(state, snapshot)
        except RecorderError as exc:
            return CycleResult(state, CycleOutcome.FAILED, exc)

    async def _activate(self, trip_id: str) -> RecordingState:
        trip = await self._trips.find_or_create(trip_id)
        logger.info("Recording trip %s", trip.trip_id)
        await self._publisher.publish(trip.trip_id)
        return RecordingState(trip=trip)

    async def _record(
        self,
        state: RecordingState,
        snapshot: TelemetrySnapshot,
    ) -> CycleResult:
        candidate = TripPoint.from_snapshot(state.trip.trip_id, snapshot)
        if not needs_update(
            state.last_point,
            candidate,
            min_travel_distance_m=self._min_travel_distance_m,
        ):
            return CycleResult(state, CycleOutcome.UNCHANGED)

        point = await self._points.create(candidate)
        recorded = replace(state, last_point=point)

        try:
            await self._odometer.accumulate(state.last_point, point)
        except OdometerError as exc:
            return CycleResult(recorded, CycleOutcome.RECORDED, exc)
        return CycleResult(recorded, CycleOutcome.RECORDED)
