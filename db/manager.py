"""
Database connection manager module.

Provides a singleton DatabaseManager class owning the MongoDB client the
trip and trip point documents are bound to.
"""

from __future__ import annotations

import logging
import os
import threading
from datetime import UTC
from typing import Any, Final, Self

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)

DEFAULT_MONGO_URI: Final[str] = "mongodb://localhost:27017"
MONGODB_URI_ENV_VAR: Final[str] = "MONGODB_URI"


def _get_mongo_uri() -> str:
    mongo_uri = os.getenv(MONGODB_URI_ENV_VAR, "").strip()
    return mongo_uri or DEFAULT_MONGO_URI


def _redacted(mongo_uri: str) -> str:
    return mongo_uri.split("@")[-1] if "@" in mongo_uri else mongo_uri


class DatabaseManager:
    """
    Singleton class to manage the MongoDB client and database connection.

    Environment Variables:
        MONGODB_URI: Optional MongoDB URI override
        MONGODB_DATABASE: Database name (default: gps_recorder)
        MONGODB_MAX_POOL_SIZE: Connection pool size (default: 10)
        MONGODB_CONNECTION_TIMEOUT_MS: Connection timeout (default: 5000)
        MONGODB_SERVER_SELECTION_TIMEOUT_MS: Server selection timeout (default: 10000)
    """

    _instance: DatabaseManager | None = None
    _lock = threading.Lock()

    def __new__(cls) -> Self:
        """Create or return the singleton instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        """Initialize the database manager with configuration from environment."""
        if not getattr(self, "_initialized", False):
            self._client: AsyncIOMotorClient | None = None
            self._db: AsyncIOMotorDatabase | None = None
            self._beanie_initialized = False
            self._initialized = True

            self._max_pool_size = int(os.getenv("MONGODB_MAX_POOL_SIZE", "10"))
            self._connection_timeout_ms = int(
                os.getenv("MONGODB_CONNECTION_TIMEOUT_MS", "5000"),
            )
            self._server_selection_timeout_ms = int(
                os.getenv("MONGODB_SERVER_SELECTION_TIMEOUT_MS", "10000"),
            )
            self._db_name = os.getenv("MONGODB_DATABASE", "gps_recorder")

    def _initialize_client(self) -> None:
        """
        Initialize the MongoDB client with proper connection settings.

        Raises:
            Exception: If client initialization fails.
        """
        mongo_uri = _get_mongo_uri()
        logger.debug("Initializing MongoDB client for %s", _redacted(mongo_uri))

        client_kwargs: dict[str, Any] = {
            "tz_aware": True,
            "tzinfo": UTC,
            "maxPoolSize": self._max_pool_size,
            "connectTimeoutMS": self._connection_timeout_ms,
            "serverSelectionTimeoutMS": self._server_selection_timeout_ms,
            "retryWrites": True,
            "retryReads": True,
            "appname": "GPSRecorder",
        }
        try:
            self._client = AsyncIOMotorClient(mongo_uri, **client_kwargs)
            self._db = self._client[self._db_name]
        except Exception:
            logger.exception("Failed to initialize MongoDB client")
            raise
        logger.info("MongoDB client initialized successfully")

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """
        Get the database instance, initializing if necessary.

        Raises:
            RuntimeError: If database cannot be initialized.
        """
        if self._db is None:
            self._initialize_client()
        if self._db is None:
            msg = "Database instance could not be initialized."
            raise RuntimeError(msg)
        return self._db

    async def init_beanie(self) -> None:
        """Initialize Beanie ODM with all document models (idempotent)."""
        if self._beanie_initialized and self._db is not None:
            logger.debug("Beanie already initialized, skipping")
            return

        from beanie import init_beanie

        from db.models import ALL_DOCUMENT_MODELS

        await init_beanie(database=self.db, document_models=ALL_DOCUMENT_MODELS)
        self._beanie_initialized = True
        logger.info(
            "Beanie ODM initialized with %d document models",
            len(ALL_DOCUMENT_MODELS),
        )

    async def cleanup_connections(self) -> None:
        """Clean up MongoDB client connections."""
        if self._client:
            try:
                logger.info("Closing MongoDB client connections...")
                self._client.close()
            except Exception:
                logger.exception("Error closing MongoDB client")
            finally:
                self._client = None
                self._db = None
                self._beanie_initialized = False
                logger.info("MongoDB client state reset")


# Singleton instance
db_manager = DatabaseManager()
