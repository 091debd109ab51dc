"""Database package for MongoDB persistence using Beanie ODM.

Modules:
    manager: DatabaseManager singleton for connection handling
    models: Beanie Document models for trips, trip points and server logs
    logging_handler: logging handler persisting records as ServerLog documents
"""

from db.manager import DatabaseManager, db_manager
from db.models import ALL_DOCUMENT_MODELS, ServerLog, Trip, TripPoint

__all__ = [
    "ALL_DOCUMENT_MODELS",
    "DatabaseManager",
    "ServerLog",
    "Trip",
    "TripPoint",
    "db_manager",
]
