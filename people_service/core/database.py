"""MongoDB connectivity for the people service."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Callable, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import monitoring
from pymongo.errors import PyMongoError

from people_service.core.config import Settings
from people_service.core.exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"
    ERROR = "error"


StateListener = Callable[[ConnectionState, Optional[BaseException]], None]
ClientFactory = Callable[..., Any]


class _HeartbeatListener(monitoring.ServerHeartbeatListener):
    """Feeds driver heartbeat outcomes back into the manager's state.

    Heartbeats run on driver threads, so the manager serializes transitions.
    """

    def __init__(self, manager: "DatabaseManager") -> None:
        self._manager = manager

    def started(self, event: monitoring.ServerHeartbeatStartedEvent) -> None:
        pass

    def succeeded(self, event: monitoring.ServerHeartbeatSucceededEvent) -> None:
        self._manager._on_heartbeat(None)

    def failed(self, event: monitoring.ServerHeartbeatFailedEvent) -> None:
        self._manager._on_heartbeat(event.reply)


class DatabaseManager:
    """Owns the MongoDB client and exposes its connection state.

    The manager is constructed explicitly and handed to the application, which
    acquires it in the lifespan before serving and releases it on shutdown.
    """

    def __init__(self, settings: Settings, client_factory: ClientFactory = AsyncIOMotorClient) -> None:
        self._settings = settings
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self._listeners: List[StateListener] = []
        self._state = ConnectionState.DISCONNECTED
        self.last_error: Optional[BaseException] = None
        self.mongodb: Optional[AsyncIOMotorClient] = None

    @property
    def state(self) -> ConnectionState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener; returns a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def initialize(self) -> None:
        """Create the client and verify the connection with a ping.

        A failed ping is logged and recorded as the ERROR state. It is not
        retried here; the driver keeps monitoring the servers in the background.
        """

        if self.mongodb is not None:
            return

        self._transition(ConnectionState.CONNECTING)
        self.mongodb = self._client_factory(
            self._settings.MONGODB_URL,
            serverSelectionTimeoutMS=self._settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
            event_listeners=[_HeartbeatListener(self)],
        )

        try:
            await self.mongodb.admin.command("ping")
        except PyMongoError as exc:
            self._transition(ConnectionState.ERROR, exc)
            return

        self._transition(ConnectionState.OPEN)

    async def close(self) -> None:
        if self.mongodb is None:
            return

        self.mongodb.close()
        self.mongodb = None
        self._transition(ConnectionState.CLOSED)

    def database(self) -> AsyncIOMotorDatabase:
        if self.mongodb is None:
            raise DatabaseUnavailableError("Database connection is not initialized.")
        if self._settings.MONGODB_DATABASE:
            return self.mongodb[self._settings.MONGODB_DATABASE]
        return self.mongodb.get_default_database(self._settings.MONGODB_DEFAULT_DATABASE)

    def collection(self, name: Optional[str] = None) -> AsyncIOMotorCollection:
        return self.database()[name or self._settings.PEOPLE_COLLECTION]

    def _on_heartbeat(self, error: Optional[BaseException]) -> None:
        # Startup and shutdown transitions belong to initialize() and close().
        if self._state not in (ConnectionState.OPEN, ConnectionState.ERROR):
            return
        if error is None:
            self._transition(ConnectionState.OPEN)
        else:
            self._transition(ConnectionState.ERROR, error)

    def _transition(self, state: ConnectionState, error: Optional[BaseException] = None) -> None:
        with self._lock:
            if state is self._state and error is None:
                return
            if state is ConnectionState.ERROR and self._state is ConnectionState.ERROR:
                return
            self._state = state
            self.last_error = error
            listeners = list(self._listeners)

        if state is ConnectionState.OPEN:
            logger.info("Connected to database")
        elif state is ConnectionState.CLOSED:
            logger.info("Connection to database closed")
        elif state is ConnectionState.ERROR:
            logger.error("Database connection error: %s", error)
        else:
            logger.debug("Database connection state is now %s", state.value)

        for listener in listeners:
            listener(state, error)
