from enum import Enum
from typing import Any, Callable, Optional
import logging
import time

from fastapi import status
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from vistagram.core.config import settings
from vistagram.core.errors import APIError
from vistagram.db.collections import ensure_indexes

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


class MongoConnection:
    """
    Holds the Mongo client and the state of the connection attempt.

    The server starts accepting requests while ``connect`` is still running,
    so every data handler checks ``state`` through ``get_db`` before use.
    A failed attempt is retried by the next request once
    ``MONGODB_RECONNECT_INTERVAL_S`` has passed.
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
    ):
        self.uri = uri
        self.db_name = db_name
        self.client_factory = client_factory
        self.client = None
        self.db: Optional[AsyncIOMotorDatabase] = None
        self.state = ConnectionState.CONNECTING
        self.error: Optional[str] = None
        self.last_attempt: Optional[float] = None

    async def connect(self) -> ConnectionState:
        self.state = ConnectionState.CONNECTING
        self.error = None
        self.last_attempt = time.monotonic()
        logger.info(f"Connecting to MongoDB database '{self.db_name}'")
        try:
            # The driver reconnects on its own, so a client from a failed attempt is reused
            if self.client is None:
                self.client = self.client_factory(
                    self.uri,
                    serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
                    tz_aware=True,
                )
            await self.client.admin.command("ping")
            db = self.client[self.db_name]
            await ensure_indexes(db)
            self.db = db
            self.state = ConnectionState.READY
            logger.info("Connected to MongoDB successfully")
        except Exception as e:
            self.state = ConnectionState.FAILED
            self.error = str(e)
            logger.error(f"Failed to connect to MongoDB: {e}")
        return self.state

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self.db = None
        self.state = ConnectionState.CONNECTING

    def retry_due(self) -> bool:
        if self.state != ConnectionState.FAILED:
            return False
        if self.last_attempt is None:
            return True
        return time.monotonic() - self.last_attempt >= settings.MONGODB_RECONNECT_INTERVAL_S

    async def database(self) -> AsyncIOMotorDatabase:
        if self.retry_due():
            logger.info("Retrying failed MongoDB connection")
            await self.connect()

        if self.state != ConnectionState.READY or self.db is None:
            raise APIError(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Database not available",
                f"Connection state: {self.state.value}",
            )
        return self.db


mongo = MongoConnection(settings.MONGODB_URI, settings.MONGODB_DB_NAME)


# Database dependency for FastAPI
async def get_db() -> AsyncIOMotorDatabase:
    return await mongo.database()
