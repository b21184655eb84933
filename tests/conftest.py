import os

# must be set before anything under app/ reads its config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REALTIME_BACKEND"] = "memory"
os.environ["LOG_FILE"] = ""
os.environ["LOG_LEVEL"] = "INFO"

import pytest
from fastapi.testclient import TestClient

from app.realtime.context import get_realtime_store
from app.realtime.store import MemoryRealtimeStore


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store():
    return MemoryRealtimeStore()


@pytest.fixture
def client(store):
    from app.core.db import Base, engine
    from app.main import app

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    app.dependency_overrides[get_realtime_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
