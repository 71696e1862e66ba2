from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import Response

from approveflow.core.deps import get_registry, project_or_404
from approveflow.schemas.project import (
    ApprovalData,
    ApproveIn,
    Comment,
    CommentAuthor,
    CommentIn,
    Project,
)
from approveflow.services.certificate import NotApprovedError, render_certificate
from approveflow.services.clock import now_ms
from approveflow.services.registry import ProjectRegistry

router = APIRouter()


def _approval_from_request(request: Request, data: ApproveIn | None) -> ApprovalData:
    # agent and address are placeholders, not verified identity
    data = data or ApproveIn()
    host = request.client.host if request.client else "127.0.0.1"
    return ApprovalData(
        approved_at=data.approved_at if data.approved_at is not None else now_ms(),
        approver_agent=data.approver_agent or request.headers.get("user-agent", "unknown"),
        ip_address=data.ip_address or host,
    )


@router.get("/{project_id}", response_model=Project)
def get_client_project(project_id: str, registry: ProjectRegistry = Depends(get_registry)):
    return project_or_404(registry, project_id)


@router.post("/{project_id}/comments", response_model=Comment, status_code=201)
def post_client_comment(project_id: str, data: CommentIn, registry: ProjectRegistry = Depends(get_registry)):
    comment = registry.add_comment(project_id, CommentAuthor.client, data.text, x=data.x, y=data.y)
    if comment is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return comment


@router.post("/{project_id}/request-changes", response_model=Project)
def post_request_changes(project_id: str, registry: ProjectRegistry = Depends(get_registry)):
    p = registry.request_changes(project_id)
    if p is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return p


@router.post("/{project_id}/approve", response_model=Project)
def post_approve(
    project_id: str,
    request: Request,
    data: ApproveIn | None = Body(None),
    registry: ProjectRegistry = Depends(get_registry),
):
    p = registry.approve(project_id, _approval_from_request(request, data))
    if p is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return p


@router.get("/{project_id}/certificate.pdf")
def get_certificate(project_id: str, registry: ProjectRegistry = Depends(get_registry)):
    p = project_or_404(registry, project_id)
    try:
        pdf = render_certificate(p)
    except NotApprovedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="approval_{p.id}.pdf"'},
    )
