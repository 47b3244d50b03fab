"""Unit tests for connect() and Connection."""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ConfigurationError, ServerSelectionTimeoutError

from docbase.core.config import Settings, get_settings
from docbase.infrastructure.persistence.collection_accessor import CollectionAccessor
from docbase.infrastructure.persistence.connection import Connection, connect

CLIENT_PATH = "docbase.infrastructure.persistence.connection.AsyncIOMotorClient"


@pytest.fixture
def settings():
    return Settings(
        mongo_uri="mongodb://settings-host:27017/from_settings",
        mongo_server_selection_timeout_ms=1500,
        mongo_app_name="docbase-tests",
    )


@pytest.fixture
def mock_client():
    client = MagicMock()
    database = MagicMock()
    database.name = "app"
    client.get_default_database.return_value = database
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    return client


@pytest.mark.asyncio
async def test_connect_selects_default_database_and_pings(mock_client, settings):
    with patch(CLIENT_PATH, return_value=mock_client) as client_cls:
        connection = await connect("mongodb://localhost:27017/app", settings=settings)

    client_cls.assert_called_once_with(
        "mongodb://localhost:27017/app",
        serverSelectionTimeoutMS=1500,
        appname="docbase-tests",
    )
    mock_client.admin.command.assert_awaited_once_with("ping")
    assert connection.client is mock_client
    assert connection.database is mock_client.get_default_database.return_value


@pytest.mark.asyncio
async def test_connect_falls_back_to_settings_uri(mock_client, settings):
    with patch(CLIENT_PATH, return_value=mock_client) as client_cls:
        await connect(settings=settings)

    assert client_cls.call_args.args[0] == "mongodb://settings-host:27017/from_settings"


@pytest.mark.asyncio
async def test_explicit_client_options_win_over_settings(mock_client, settings):
    with patch(CLIENT_PATH, return_value=mock_client) as client_cls:
        await connect(
            "mongodb://localhost:27017/app",
            settings=settings,
            serverSelectionTimeoutMS=10,
            tz_aware=True,
        )

    assert client_cls.call_args.kwargs == {
        "serverSelectionTimeoutMS": 10,
        "appname": "docbase-tests",
        "tz_aware": True,
    }


@pytest.mark.asyncio
async def test_connect_surfaces_missing_default_database(mock_client, settings):
    mock_client.get_default_database.side_effect = ConfigurationError(
        "No default database name defined or provided."
    )

    with patch(CLIENT_PATH, return_value=mock_client):
        with pytest.raises(ConfigurationError):
            await connect("mongodb://localhost:27017", settings=settings)

    mock_client.close.assert_called_once()


@pytest.mark.asyncio
async def test_connect_surfaces_unreachable_server(mock_client, settings):
    mock_client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")

    with patch(CLIENT_PATH, return_value=mock_client):
        with pytest.raises(ServerSelectionTimeoutError):
            await connect("mongodb://unreachable:27017/app", settings=settings)

    mock_client.close.assert_called_once()


def test_close_closes_client(mock_client):
    connection = Connection(client=mock_client, database=mock_client.get_default_database())

    connection.close()
    connection.close()

    assert mock_client.close.call_count == 2


@pytest.mark.asyncio
async def test_connection_is_async_context_manager(mock_client):
    connection = Connection(client=mock_client, database=mock_client.get_default_database())

    async with connection as entered:
        assert entered is connection
        mock_client.close.assert_not_called()

    mock_client.close.assert_called_once()


def test_collection_factory_binds_database(mock_client):
    database = mock_client.get_default_database()
    connection = Connection(client=mock_client, database=database)

    users = connection.collection_factory()("users")

    assert isinstance(users, CollectionAccessor)
    assert users.collection is database["users"]


@pytest.mark.asyncio
async def test_empty_uri_reaches_driver_unchanged(mock_client, settings):
    mock_client.get_default_database.side_effect = ConfigurationError("empty URI")

    with patch(CLIENT_PATH, return_value=mock_client) as client_cls:
        with pytest.raises(ConfigurationError):
            await connect("", settings=settings)

    assert client_cls.call_args.args[0] == ""


@pytest.mark.asyncio
async def test_explicit_uri_ignores_invalid_environment(mock_client):
    get_settings.cache_clear()

    with patch.dict(os.environ, {"DOCBASE_MONGO_URI": "postgres://nope"}):
        with patch(CLIENT_PATH, return_value=mock_client) as client_cls:
            connection = await connect("mongodb://localhost:27017/app")

    get_settings.cache_clear()
    assert connection.client is mock_client
    client_cls.assert_called_once_with(
        "mongodb://localhost:27017/app",
        serverSelectionTimeoutMS=30000,
        appname="docbase",
    )


@pytest.mark.asyncio
async def test_missing_uri_reads_environment(mock_client):
    get_settings.cache_clear()

    with patch.dict(os.environ, {"DOCBASE_MONGO_URI": "mongodb://env-host:27017/from_env"}):
        with patch(CLIENT_PATH, return_value=mock_client) as client_cls:
            await connect()

    get_settings.cache_clear()
    assert client_cls.call_args.args[0] == "mongodb://env-host:27017/from_env"
