import sys
from contextlib import suppress
from pathlib import Path

import pytest
from sqlmodel import SQLModel

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def db_engine(tmp_path, monkeypatch):
    from slotgrid_web import database

    engine = database.make_engine(f"sqlite:///{tmp_path / 'slotgrid.db'}")
    monkeypatch.setattr(database, "engine", engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    with suppress(Exception):
        engine.dispose()


@pytest.fixture
def store(db_engine):
    from slotgrid_web.database import session_scope
    from slotgrid_web.store import GridStore

    return GridStore(session_scope)


@pytest.fixture
def api_client(db_engine, monkeypatch):
    from fastapi.testclient import TestClient

    from slotgrid_web import auth

    monkeypatch.setattr(auth, "ADMIN_USER", "admin")
    monkeypatch.setattr(auth, "ADMIN_PASSWORD", "secret")
    monkeypatch.setattr(auth, "ADMIN_PASSWORD_HASH", "")
    monkeypatch.setattr(auth, "SECRET_KEY", "test-secret")

    import server

    with TestClient(server.app) as client:
        yield client
