import os
import tempfile
from types import SimpleNamespace

_tmp = tempfile.mkdtemp(prefix="approveflow-tests-")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_tmp, "uploads"))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_tmp, 'app.db')}")
os.environ.setdefault("SEED_DEMO", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from approveflow.core.logging import configure_logging
from approveflow.db.base import Base
from approveflow.db import models  # noqa: F401
from approveflow.services.registry import ProjectRegistry
from approveflow.services.store import ProjectStore


class FakeCompletions:
    def __init__(self, reply=None, exc=None):
        self.reply = reply
        self.exc = exc
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeClient:
    def __init__(self, reply=None, exc=None):
        self.chat = SimpleNamespace(completions=FakeCompletions(reply, exc))

    @property
    def calls(self):
        return self.chat.completions.calls


@pytest.fixture(autouse=True)
def _logging():
    configure_logging("dev")


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'store.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return ProjectStore(session_factory=session_factory, key="test_projects", seed=list)


@pytest.fixture
def registry(store):
    return ProjectRegistry(store)
