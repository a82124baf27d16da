"""Shared fixtures: services on in-memory and sqlite stores, and an API client."""
import pytest
from fastapi.testclient import TestClient

from pastemd.cache.memory import MemoryCache
from pastemd.core.config import Settings
from pastemd.core.db import build_engine, build_sessionmaker, init_models
from pastemd.db.repositories import (
    DocumentRepository, MemoryDocumentRepository, MemoryPasteRepository,
    MemoryViewRepository, PasteRepository, ViewRepository
)
from pastemd.domains.documents.services import DocumentService
from pastemd.domains.pastes.services import PasteService
from pastemd.domains.views.services import ViewCounter, ViewMode

TEST_SECRET = "test-secret"


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache(max_entries=1000)


@pytest.fixture(params=["memory", "sql"])
async def stores(request):
    """(paste store, view store, document store) for each backend"""
    if request.param == "memory":
        yield MemoryPasteRepository(), MemoryViewRepository(), MemoryDocumentRepository()
        return

    engine = build_engine("sqlite+aiosqlite://")
    await init_models(engine)
    async with build_sessionmaker(engine)() as session:
        yield PasteRepository(session), ViewRepository(session), DocumentRepository(session)
    await engine.dispose()


@pytest.fixture
def paste_service(stores, cache) -> PasteService:
    paste_store, view_store, _ = stores
    return PasteService(paste_store, cache, ViewCounter(ViewMode.OPEN_MULTIPLE, cache, view_store))


@pytest.fixture
def authenticated_service(stores, cache) -> PasteService:
    paste_store, view_store, _ = stores
    return PasteService(paste_store, cache, ViewCounter(ViewMode.AUTHENTICATED_ONCE, cache, view_store))


@pytest.fixture
def document_service(stores, cache) -> DocumentService:
    _, _, document_store = stores
    return DocumentService(document_store, cache)


@pytest.fixture
def make_client():
    """Build a started TestClient for the given settings overrides."""
    clients = []

    def _make(**overrides) -> TestClient:
        options = {
            "database_url": "sqlite+aiosqlite://",
            "cache_backend": "memory",
            "jwt_secret": TEST_SECRET,
            "auth_cookie": "session",
        }
        options.update(overrides)
        from pastemd.main import create_app

        client = TestClient(create_app(Settings(**options)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
