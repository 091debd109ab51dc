"""Trip recording: snapshot ingestion, decimation and trip lifecycle."""

from recording.lifecycle import RecordingState, TripLifecycleManager
from recording.loop import CycleOutcome, PollingLoop
from recording.odometer import OdometerAccumulator
from recording.significance import needs_update
from recording.snapshot import SnapshotReader, TelemetrySnapshot

__all__ = [
    "CycleOutcome",
    "OdometerAccumulator",
    "PollingLoop",
    "RecordingState",
    "SnapshotReader",
    "TelemetrySnapshot",
    "TripLifecycleManager",
    "needs_update",
]
