import os
from pathlib import Path
import sys

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DEFAULT_TIMEZONE", "UTC")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from main import create_app  # noqa: E402
from src.core.cache import get_query_cache  # noqa: E402
from src.core.database import build_engine, build_sessionmaker, create_schema, get_db  # noqa: E402
from tests.helpers import RecordingCache  # noqa: E402


@pytest_asyncio.fixture
async def db_session():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_schema(engine)
    SessionLocal = build_sessionmaker(engine)
    async with SessionLocal() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def cache():
    return RecordingCache()


@pytest_asyncio.fixture
async def client(db_session, cache):
    app = create_app()

    async def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_query_cache] = lambda: cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client

