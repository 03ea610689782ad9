"""
Pressroom Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite database (aiosqlite) and its own storage
       directory; the FastAPI app is built fresh per test with the session and
       blob store dependencies overridden to point at them.

Fixture Hierarchy (all function-scoped):
    temp_storage ─▶ blob_store ──────────────┐
    db_engine ─▶ session_factory ─┬─▶ db_session
                                  └──────────┴─▶ app ─▶ test_client
"""

import os
import tempfile

# Override settings BEFORE any pressroom import: config, engine and the
# blob store singleton are built at import time.
_TEST_ROOT = tempfile.mkdtemp(prefix="pressroom_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/unused.db"
os.environ["STORAGE_ROOT"] = os.path.join(_TEST_ROOT, "storage")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_TOKEN"] = ""
os.environ["RATE_LIMIT_REQUESTS"] = "10000"
os.environ["RATE_LIMIT_WRITE_REQUESTS"] = "10000"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

import pressroom.models  # noqa: E402,F401  (registers tables on Base.metadata)
from pressroom.database import Base, get_db_session  # noqa: E402
from pressroom.dependencies import get_blob_store  # noqa: E402
from pressroom.main import create_app  # noqa: E402
from pressroom.services.blob_store import BlobStore  # noqa: E402


# Smallest valid PNG (1x1 transparent pixel)
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\xff"
    b"\xff?\x00\x05\xfe\x02\xfe\xa7\x35\x81\x84\x00\x00\x00\x00IEND\xaeB`\x82"
)

# Minimal JPEG: SOI + JFIF APP0 + EOI
JPEG_BYTES = (
    b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
    b"\xff\xd9"
)


@pytest.fixture
def temp_storage(tmp_path):
    """A fresh storage root for each test."""
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def blob_store(temp_storage):
    return BlobStore(storage_root=temp_storage)


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """SQLite database file with the full schema, disposed after the test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'pressroom.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """A session for service/repository level tests (caller commits if needed)."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory, blob_store):
    """
    A fresh application wired to the test database and storage.

    The session override mirrors get_db_session: commit on success,
    rollback on error.
    """
    application = create_app()

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_db_session
    application.dependency_overrides[get_blob_store] = lambda: blob_store
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    raise_app_exceptions=False: a 500 is asserted on like any other response.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def category(test_client):
    response = await test_client.post("/categories", json={"name": "Tech"})
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def author(test_client):
    response = await test_client.post(
        "/authors",
        json={"name": "Ada Lovelace", "email": "ada@example.com", "bio": "First programmer"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def article_form(category, author):
    """Valid multipart form fields for an article."""
    return {
        "title": "Hello",
        "content": "First post",
        "category_id": str(category["id"]),
        "author_id": str(author["id"]),
    }


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def jpeg_bytes():
    return JPEG_BYTES
