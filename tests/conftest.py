"""
Shared fixtures: an in-memory database, a fake O*NET upstream on
httpx.MockTransport, a fake generation client, and an ASGI test client wired
to all three through dependency overrides.
"""
import os

# Must be set before careerquest modules are imported
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Union

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from careerquest.config import Settings, get_settings
from careerquest.database import get_db, init_db
from careerquest.dependencies import get_onet_proxy, get_roadmap_generator
from careerquest.main import app
from careerquest.services.onet_proxy import OnetProxy
from careerquest.services.roadmap_generator import RoadmapGenerator
from careerquest.utils import metrics

JWT_SECRET = "test-secret-with-at-least-32-bytes-of-entropy"

Handler = Union[Dict[str, Any], Callable[[httpx.Request], httpx.Response]]


class FakeOnet:
    """Upstream O*NET stand-in; routes are keyed by path below /ws/"""

    def __init__(self):
        self.routes: Dict[str, Handler] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, handler: Handler):
        self.routes[path] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.split("/ws/", 1)[-1]
        handler = self.routes.get(path)
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(handler):
            return handler(request)
        return httpx.Response(200, json=handler)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


class FakeCompletions:
    def __init__(self, content=None, error: Exception = None, response=None):
        self.content = content
        self.error = error
        self.response = response
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeGenerationClient:
    """Mimics AsyncOpenAI().chat.completions.create"""

    def __init__(self, **kwargs):
        self.completions = FakeCompletions(**kwargs)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        onet_base_url="https://services.onetcenter.org/ws/",
        onet_username="onet-user",
        onet_password="onet-pass",
        onet_client="careerquest",
        gemini_api_key="",
        jwt_secret=JWT_SECRET,
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
def fake_onet() -> FakeOnet:
    return FakeOnet()


@pytest.fixture
def proxy(settings, fake_onet) -> OnetProxy:
    return OnetProxy(settings, transport=fake_onet.transport)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def generator(settings) -> RoadmapGenerator:
    return RoadmapGenerator(settings)


@pytest.fixture
async def client(settings, proxy, generator, session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_onet_proxy] = lambda: proxy
    app.dependency_overrides[get_roadmap_generator] = lambda: generator

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http

    app.dependency_overrides.clear()
