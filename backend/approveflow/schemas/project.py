from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ProjectStatus(str, Enum):
    PENDING = "PENDING"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    APPROVED = "APPROVED"


class CommentAuthor(str, Enum):
    client = "client"
    freelancer = "freelancer"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Comment(CamelModel):
    id: str
    author: CommentAuthor
    text: str
    timestamp: int
    # pin coordinates, reserved for pinned annotations
    x: float | None = None
    y: float | None = None


class ApprovalData(CamelModel):
    approved_at: int
    approver_agent: str
    ip_address: str


class Project(CamelModel):
    id: str
    title: str
    client_name: str
    created_at: int
    status: ProjectStatus = ProjectStatus.PENDING
    image_url: str
    comments: list[Comment] = Field(default_factory=list)
    approval_data: ApprovalData | None = None


class ProjectCreate(CamelModel):
    title: NonBlank
    client_name: NonBlank
    image_url: NonBlank


class CommentIn(CamelModel):
    text: NonBlank
    x: float | None = None
    y: float | None = None


class ApproveIn(CamelModel):
    approved_at: int | None = None
    approver_agent: str | None = None
    ip_address: str | None = None


class ShareLinkOut(CamelModel):
    project_id: str
    url: str


class SummaryOut(CamelModel):
    total: int
    pending: int
    changes_requested: int
    approved: int
    comments: int
