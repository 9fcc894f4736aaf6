import pytest
from pymongo.errors import ServerSelectionTimeoutError

from people_service.core.database import ConnectionState, DatabaseManager
from people_service.core.exceptions import DatabaseUnavailableError
from tests.stubs import StubClient


@pytest.mark.asyncio
async def test_initialize_opens_connection_and_notifies_listeners(settings, stub_client):
    manager = DatabaseManager(settings, client_factory=stub_client)
    seen = []
    manager.subscribe(lambda state, error: seen.append(state))

    await manager.initialize()

    assert manager.state is ConnectionState.OPEN
    assert seen == [ConnectionState.CONNECTING, ConnectionState.OPEN]
    assert stub_client.url == "mongodb://db.test:27017/people"
    assert stub_client.options["serverSelectionTimeoutMS"] == settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS
    assert stub_client.commands == ["ping"]


@pytest.mark.asyncio
async def test_initialize_is_idempotent(settings, stub_client):
    manager = DatabaseManager(settings, client_factory=stub_client)

    await manager.initialize()
    await manager.initialize()

    assert stub_client.commands == ["ping"]


@pytest.mark.asyncio
async def test_failed_ping_records_error_without_raising(settings):
    error = ServerSelectionTimeoutError("no servers")
    client = StubClient(ping_error=error)
    manager = DatabaseManager(settings, client_factory=client)

    await manager.initialize()

    assert manager.state is ConnectionState.ERROR
    assert manager.last_error is error
    # The client is kept so the driver can recover on its own.
    assert manager.mongodb is client


@pytest.mark.asyncio
async def test_close_releases_client(settings, stub_client):
    manager = DatabaseManager(settings, client_factory=stub_client)
    await manager.initialize()

    await manager.close()

    assert stub_client.closed
    assert manager.mongodb is None
    assert manager.state is ConnectionState.CLOSED
    with pytest.raises(DatabaseUnavailableError):
        manager.collection()


def test_collection_requires_initialization(settings, stub_client):
    manager = DatabaseManager(settings, client_factory=stub_client)

    with pytest.raises(DatabaseUnavailableError):
        manager.collection()


@pytest.mark.asyncio
async def test_collection_uses_default_database_and_people_collection(settings, stub_client):
    manager = DatabaseManager(settings, client_factory=stub_client)
    await manager.initialize()

    assert manager.collection() is stub_client.collection
    database = stub_client.databases["people"]
    assert database.requested == ["peoples"]


@pytest.mark.asyncio
async def test_explicit_database_name_wins(settings, stub_client):
    settings = settings.model_copy(update={"MONGODB_DATABASE": "directory"})
    manager = DatabaseManager(settings, client_factory=stub_client)
    await manager.initialize()

    manager.collection("staff")

    assert stub_client.databases["directory"].requested == ["staff"]


@pytest.mark.asyncio
async def test_heartbeats_move_between_open_and_error(settings, stub_client):
    manager = DatabaseManager(settings, client_factory=stub_client)
    seen = []
    await manager.initialize()
    unsubscribe = manager.subscribe(lambda state, error: seen.append(state))

    failure = ConnectionError("heartbeat lost")
    manager._on_heartbeat(failure)
    manager._on_heartbeat(failure)
    manager._on_heartbeat(None)
    unsubscribe()
    manager._on_heartbeat(failure)

    assert seen == [ConnectionState.ERROR, ConnectionState.OPEN]
    assert manager.state is ConnectionState.ERROR


def test_heartbeats_before_startup_are_ignored(settings, stub_client):
    manager = DatabaseManager(settings, client_factory=stub_client)

    manager._on_heartbeat(None)

    assert manager.state is ConnectionState.DISCONNECTED
