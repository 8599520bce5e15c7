# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.app.db import Base, get_db, init_db
from backend.app.errors import UpstreamError
from backend.app.llm_client import get_llm_client
from backend.app.main import app


class FakeLLM:
    """Stands in for GeminiClient; records prompts and replays a canned answer."""

    def __init__(self, text="Spend less on takeout.", error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, prompt, system_instruction):
        self.calls.append((prompt, system_instruction))
        if self.error:
            raise UpstreamError(self.error)
        return self.text


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = Session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def api(engine, fake_llm):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
