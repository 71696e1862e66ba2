from fastapi import HTTPException, Request, status

from approveflow.schemas.project import Project
from approveflow.services.assistant import MetadataAssistant
from approveflow.services.registry import ProjectRegistry


def get_registry(request: Request) -> ProjectRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Registry not ready")
    return registry


def get_assistant(request: Request) -> MetadataAssistant:
    assistant = getattr(request.app.state, "assistant", None)
    if assistant is None:
        assistant = MetadataAssistant()
        request.app.state.assistant = assistant
    return assistant


def project_or_404(registry: ProjectRegistry, project_id: str) -> Project:
    p = registry.get(project_id)
    if p is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return p
