"""
MongoDB logging handler storing recorder logs as ``ServerLog`` documents.

Lets operators inspect what the recorder decided without shell access to
the device it runs on.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime

from db.models import ServerLog

logger = logging.getLogger(__name__)


class MongoDBHandler(logging.Handler):
    """Custom logging handler that writes log records to MongoDB."""

    def __init__(self, level: int = logging.INFO) -> None:
        super().__init__(level)
        self._pending: set[asyncio.Task] = set()

    def emit(self, record: logging.LogRecord) -> None:
        """Schedule the record for insertion on the running event loop."""
        # Records emitted while persisting a record would recurse forever.
        if record.name.startswith(("pymongo", "motor", "beanie", __name__)):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: nothing can await the insert, drop the record.
            return
        try:
            document = self._build_document(record)
            task = loop.create_task(self._insert(document))
        except Exception:
            self.handleError(record)
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @staticmethod
    async def _insert(document: ServerLog) -> None:
        try:
            await document.insert()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Could not persist log record: %s", exc)

    def _build_document(self, record: logging.LogRecord) -> ServerLog:
        exc_text = None
        if record.exc_info:
            formatter = self.formatter or logging.Formatter()
            exc_text = formatter.formatException(record.exc_info)
        return ServerLog(
            timestamp=datetime.fromtimestamp(record.created, UTC),
            level=record.levelname,
            logger_name=record.name,
            message=record.getMessage(),
            pathname=record.pathname,
            lineno=record.lineno,
            funcName=record.funcName,
            exc_info=exc_text,
        )

    async def flush_pending(self) -> None:
        """Await inserts that are still in flight."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def attach_mongo_handler(level: int = logging.INFO) -> MongoDBHandler:
    """Create a handler and add it to the root logger."""
    handler = MongoDBHandler(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
    )
    logging.getLogger().addHandler(handler)
    return handler


def detach_mongo_handler(handler: MongoDBHandler | None) -> None:
    """Detach and close the MongoDB logging handler if present."""
    if handler is None:
        return

    root_logger = logging.getLogger()
    root_logger.removeHandler(handler)
    handler.close()
