from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from approveflow.core.config import settings
from approveflow.core.logging import configure_logging, logger
from approveflow.api.router import api_router
from approveflow.db.session import engine
from approveflow.db.base import Base
from approveflow.db import models  # noqa: F401  (registers tables on Base.metadata)
from approveflow.services.assistant import MetadataAssistant
from approveflow.services.files import ensure_dirs
from approveflow.services.registry import ProjectRegistry, RegistryEvent
from approveflow.services.store import ProjectStore


def _log_registry_event(event: RegistryEvent) -> None:
    logger.info(
        "registry_event",
        kind=event.kind,
        project_id=event.project.id,
        status=event.project.status.value,
        comments=len(event.project.comments),
    )


def create_app(registry: ProjectRegistry | None = None, assistant: MetadataAssistant | None = None) -> FastAPI:
    configure_logging(settings.ENV, settings.LOG_LEVEL)
    app = FastAPI(title="ApproveFlow", version="0.1.0")

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.registry = registry
    app.state.assistant = assistant
    if registry is not None:
        registry.subscribe(_log_registry_event)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.on_event("startup")
    def _startup():
        if app.state.registry is None:
            Base.metadata.create_all(bind=engine)
            # a corrupted store aborts startup here
            app.state.registry = ProjectRegistry(ProjectStore())
            app.state.registry.subscribe(_log_registry_event)
        if app.state.assistant is None:
            app.state.assistant = MetadataAssistant()

    ensure_dirs()
    app.mount("/uploads", StaticFiles(directory=Path(settings.UPLOAD_DIR)), name="uploads")
    app.include_router(api_router)
    logger.info("app_started", env=settings.ENV)
    return app


app = create_app()
