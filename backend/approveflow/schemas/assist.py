from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from approveflow.schemas.project import CamelModel, NonBlank

T = TypeVar("T")


class EmailPurpose(str, Enum):
    initial = "initial"
    followup = "followup"
    approval_thanks = "approval_thanks"


class ImageDescription(BaseModel):
    title: str = Field(min_length=1)
    summary: str


class AssistResult(BaseModel, Generic[T]):
    """Outcome of one assistant call.

    ``fallback`` is set whenever ``value`` is a canned default rather than
    service output; callers branch on it instead of matching text.
    """

    value: T
    fallback: bool = False
    error: str | None = None


class EmailDraftIn(CamelModel):
    client_name: NonBlank
    project_name: NonBlank
    purpose: EmailPurpose = EmailPurpose.initial


class ProjectEmailDraftIn(CamelModel):
    purpose: EmailPurpose = EmailPurpose.initial
