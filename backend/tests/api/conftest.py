"""API test fixtures: the FastAPI app bound to the in-memory test database
and a fake LLM client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from funding_advisor.database import get_db
from funding_advisor.dependencies import get_llm_client
from funding_advisor.main import app
from tests.fixtures import FakeLLMClient


@pytest.fixture()
def llm() -> FakeLLMClient:
    return FakeLLMClient({})


@pytest.fixture()
def client(db_engine, llm):
    """FastAPI test client.

    Not used as a context manager, so the lifespan (which opens the
    configured database) never runs.
    """
    TestingSessionLocal = sessionmaker(bind=db_engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_client] = lambda: llm
    yield TestClient(app)
    app.dependency_overrides.clear()
