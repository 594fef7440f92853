# tests/conftest.py
import os
import tempfile

# Set up test environment variables BEFORE any other imports
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="agent-dashboard-tests-"))
os.environ.setdefault("OPENAI_API_KEY", "")
os.environ.setdefault("GATEWAY_TOKEN", "test-gateway-token")

from datetime import date, timedelta

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.core.config import Settings
from app.core.dependencies import get_db, get_gateway_client, get_settings, get_speech_client
from app.database import build_engine, init_db
from app.domains.chat.gateway import GatewayClient
from app.domains.voice.speech import SpeechClient
from app.main import app
from models import Message, ProjectItem, Tile, Todo


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing every file and the database at a per-test directory."""
    return Settings(
        environment="testing",
        data_dir=tmp_path,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        gateway_url="http://gateway.test/v1/chat/completions",
        gateway_token="test-gateway-token",
        openai_api_key="test-openai-key",
        openai_api_url="http://speech.test/v1",
    )


@pytest_asyncio.fixture
async def test_engine(test_settings):
    """Create a fresh SQLite database with the full schema applied."""
    engine = build_engine(test_settings.database_url)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return async_sessionmaker(bind=test_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


@pytest.fixture
def gateway_handler():
    """Mutable holder for the function answering gateway requests in a test."""

    def default(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": "Hello from the gateway"}}]}
        )

    return {"handler": default, "requests": []}


@pytest.fixture
def speech_handler():
    """Mutable holder for the function answering speech API requests in a test."""

    def default(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/audio/transcriptions"):
            return httpx.Response(200, json={"text": " what is on my list "})
        return httpx.Response(200, content=b"ID3-fake-mp3")

    return {"handler": default, "requests": []}


def _recording_transport(holder: dict) -> httpx.MockTransport:
    def handle(request: httpx.Request) -> httpx.Response:
        holder["requests"].append(request)
        return holder["handler"](request)

    return httpx.MockTransport(handle)


@pytest.fixture
def gateway_client(test_settings, gateway_handler):
    return GatewayClient(test_settings, transport=_recording_transport(gateway_handler))


@pytest.fixture
def speech_client(test_settings, speech_handler):
    return SpeechClient(test_settings, transport=_recording_transport(speech_handler))


@pytest_asyncio.fixture
async def client(session_factory, test_settings, gateway_client, speech_client):
    """Create a test client with database, settings and upstream overrides."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_gateway_client] = lambda: gateway_client
    app.dependency_overrides[get_speech_client] = lambda: speech_client

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# Model fixtures
@pytest_asyncio.fixture
async def test_todo(test_db):
    """Create an open todo."""
    todo = Todo(title="Call dentist", assignee="rodion", created_by="rodion")
    test_db.add(todo)
    await test_db.commit()
    await test_db.refresh(todo)
    return todo


@pytest_asyncio.fixture
async def completed_todo(test_db):
    """Create a completed todo."""
    from models.base import utcnow

    todo = Todo(title="File taxes", completed=True, completed_at=utcnow())
    test_db.add(todo)
    await test_db.commit()
    await test_db.refresh(todo)
    return todo


@pytest_asyncio.fixture
async def due_todo(test_db):
    """Create an open todo due tomorrow."""
    todo = Todo(title="Renew passport", due_date=date.today() + timedelta(days=1))
    test_db.add(todo)
    await test_db.commit()
    await test_db.refresh(todo)
    return todo


@pytest_asyncio.fixture
async def test_tile(test_db):
    tile = Tile(
        type="news",
        content={"headline": "Rust 2.0 released", "url": "https://example.com/rust"},
        source="agent",
        tags=["tech", "rust"],
        reactions=[],
    )
    test_db.add(tile)
    await test_db.commit()
    await test_db.refresh(tile)
    return tile


@pytest_asyncio.fixture
async def test_project(test_db):
    """Create a project through the service so the default docs exist."""
    from app.domains.project.service import ProjectService
    from app.schemas.project import ProjectCreate

    service = ProjectService(test_db)
    return await service.create_project(ProjectCreate(name="Dashboard", description="Agent dashboard"))


@pytest_asyncio.fixture
async def test_item(test_db, test_project):
    item = ProjectItem(
        project_id=test_project.id,
        title="Smart todo parser",
        acceptance_criteria=["parses dates", "infers assignee"],
    )
    test_db.add(item)
    await test_db.commit()
    await test_db.refresh(item)
    return item


@pytest_asyncio.fixture
async def chat_history(test_db):
    """Two prior messages in the conversation log."""
    messages = [
        Message(role="user", content="hi"),
        Message(role="assistant", content="hello"),
    ]
    for message in messages:
        test_db.add(message)
        await test_db.commit()
    return messages
