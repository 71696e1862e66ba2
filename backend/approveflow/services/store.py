import json
from typing import Callable

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session, sessionmaker

from approveflow.core.config import settings
from approveflow.core.logging import logger
from approveflow.db.models.kv import KeyValue
from approveflow.db.session import SessionLocal
from approveflow.schemas.project import Project
from approveflow.services.seed import seed_projects

_projects_adapter = TypeAdapter(list[Project])


class StoreCorruptedError(RuntimeError):
    """Persisted project list exists but cannot be decoded."""


def dump_projects(projects: list[Project]) -> str:
    data = _projects_adapter.dump_python(projects, mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def parse_projects(raw: str) -> list[Project]:
    try:
        return _projects_adapter.validate_json(raw)
    except ValidationError as e:
        raise StoreCorruptedError(f"stored project list is malformed: {e.error_count()} error(s)") from e


class ProjectStore:
    """The whole project list persisted as one JSON blob under a fixed key."""

    def __init__(
        self,
        session_factory: sessionmaker | Callable[[], Session] = SessionLocal,
        key: str | None = None,
        seed: Callable[[], list[Project]] | None = None,
    ):
        self.session_factory = session_factory
        self.key = key or settings.STORE_KEY
        if seed is None:
            seed = seed_projects if settings.SEED_DEMO else list
        self.seed = seed

    def load(self) -> list[Project]:
        db = self.session_factory()
        try:
            row = db.get(KeyValue, self.key)
            raw = row.value if row else None
        finally:
            db.close()

        if raw is None:
            projects = self.seed()
            logger.info("store_seeded", key=self.key, projects=len(projects))
            return projects

        projects = parse_projects(raw)
        logger.info("store_loaded", key=self.key, projects=len(projects))
        return projects

    def save(self, projects: list[Project]) -> None:
        raw = dump_projects(projects)
        db = self.session_factory()
        try:
            row = db.get(KeyValue, self.key)
            if row is None:
                db.add(KeyValue(key=self.key, value=raw))
            else:
                row.value = raw
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
        logger.debug("store_saved", key=self.key, projects=len(projects), size=len(raw))
