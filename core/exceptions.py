"""
Centralized exception hierarchy for domain-specific errors.

Every failure the recorder can survive is expressed as one of these
classes. Store and database exceptions are wrapped at the collaborator
seams so the polling loop only has to reason about this taxonomy.
"""


class RecorderError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(RecorderError):
    """Exception raised when required configuration is missing or invalid."""


class SnapshotFetchError(RecorderError):
    """Exception raised when reading telemetry from the live store fails."""


class TripCreationError(RecorderError):
    """Exception raised when a trip cannot be found or created."""

    def __init__(
        self,
        trip_id: str,
        message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.trip_id = trip_id
        super().__init__(message or f"Failed to create trip {trip_id}", details)


class PointPersistenceError(RecorderError):
    """Exception raised when a trip point cannot be persisted."""


class OdometerError(RecorderError):
    """Exception raised when odometer counters cannot be incremented."""
