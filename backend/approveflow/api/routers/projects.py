from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from approveflow.core.deps import get_assistant, get_registry, project_or_404
from approveflow.schemas.assist import AssistResult, ProjectEmailDraftIn
from approveflow.schemas.project import (
    Comment,
    CommentAuthor,
    CommentIn,
    Project,
    ProjectCreate,
    ShareLinkOut,
    SummaryOut,
)
from approveflow.services.assistant import MetadataAssistant
from approveflow.services.dashboard import summarize
from approveflow.services.files import UnsupportedAssetError, read_upload, save_asset
from approveflow.services.links import share_link
from approveflow.services.registry import ProjectRegistry

router = APIRouter()


@router.get("", response_model=list[Project])
def get_projects(registry: ProjectRegistry = Depends(get_registry)):
    return registry.list_projects()


@router.post("", response_model=Project, status_code=201)
def post_project(data: ProjectCreate, registry: ProjectRegistry = Depends(get_registry)):
    return registry.create(data.title, data.client_name, data.image_url)


@router.post("/upload", response_model=Project, status_code=201)
def upload_project(
    file: UploadFile = File(...),
    client_name: str = Form(..., alias="clientName"),
    title: str | None = Form(None),
    registry: ProjectRegistry = Depends(get_registry),
    assistant: MetadataAssistant = Depends(get_assistant),
):
    if not client_name.strip():
        raise HTTPException(status_code=422, detail="clientName must not be empty")

    data = read_upload(file)
    try:
        image_url = save_asset(data, file.content_type)
    except UnsupportedAssetError as e:
        raise HTTPException(status_code=400, detail=str(e))

    title = (title or "").strip()
    if not title:
        # fallback result still carries a usable title
        title = assistant.describe_image(data, file.content_type).value.title
    return registry.create(title, client_name.strip(), image_url)


@router.get("/summary", response_model=SummaryOut)
def get_summary(registry: ProjectRegistry = Depends(get_registry)):
    return summarize(registry.list_projects())


@router.get("/{project_id}", response_model=Project)
def get_project(project_id: str, registry: ProjectRegistry = Depends(get_registry)):
    return project_or_404(registry, project_id)


@router.post("/{project_id}/comments", response_model=Comment, status_code=201)
def post_freelancer_comment(project_id: str, data: CommentIn, registry: ProjectRegistry = Depends(get_registry)):
    comment = registry.add_comment(project_id, CommentAuthor.freelancer, data.text, x=data.x, y=data.y)
    if comment is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return comment


@router.get("/{project_id}/share-link", response_model=ShareLinkOut)
def get_share_link(project_id: str, registry: ProjectRegistry = Depends(get_registry)):
    p = project_or_404(registry, project_id)
    return ShareLinkOut(project_id=p.id, url=share_link(p.id))


@router.post("/{project_id}/email-draft", response_model=AssistResult[str])
def post_project_email_draft(
    project_id: str,
    data: ProjectEmailDraftIn,
    registry: ProjectRegistry = Depends(get_registry),
    assistant: MetadataAssistant = Depends(get_assistant),
):
    p = project_or_404(registry, project_id)
    return assistant.draft_email(p.client_name, p.title, data.purpose)
