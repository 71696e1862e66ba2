"""Project registry: the single owner of project state.

All mutations go through the methods below. Each one updates the in-memory
list, writes the full list to the store, then notifies subscribers.
Projects handed out are copies, so writing to their fields never touches the
registry.
"""
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from approveflow.core.logging import logger
from approveflow.schemas.project import (
    ApprovalData,
    Comment,
    CommentAuthor,
    Project,
    ProjectStatus,
)
from approveflow.services.clock import new_id, now_ms
from approveflow.services.store import ProjectStore


class StatusEvent(str, Enum):
    request_changes = "request_changes"
    approve = "approve"


# Every event is accepted from every state: an approved project can be
# reopened or re-approved.
TRANSITIONS: dict[tuple[ProjectStatus, StatusEvent], ProjectStatus] = {
    (ProjectStatus.PENDING, StatusEvent.request_changes): ProjectStatus.CHANGES_REQUESTED,
    (ProjectStatus.PENDING, StatusEvent.approve): ProjectStatus.APPROVED,
    (ProjectStatus.CHANGES_REQUESTED, StatusEvent.request_changes): ProjectStatus.CHANGES_REQUESTED,
    (ProjectStatus.CHANGES_REQUESTED, StatusEvent.approve): ProjectStatus.APPROVED,
    (ProjectStatus.APPROVED, StatusEvent.request_changes): ProjectStatus.CHANGES_REQUESTED,
    (ProjectStatus.APPROVED, StatusEvent.approve): ProjectStatus.APPROVED,
}


class InvalidTransitionError(ValueError):
    pass


def next_status(current: ProjectStatus, event: StatusEvent) -> ProjectStatus:
    try:
        return TRANSITIONS[(current, event)]
    except KeyError:
        raise InvalidTransitionError(f"{event.value} not allowed from {current.value}") from None


@dataclass(frozen=True)
class RegistryEvent:
    kind: str  # created|commented|changes_requested|approved
    project: Project


Listener = Callable[[RegistryEvent], None]


class ProjectRegistry:
    def __init__(self, store: ProjectStore):
        self.store = store
        self._projects: list[Project] = store.load()
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    # --- reads ---

    def list_projects(self) -> list[Project]:
        with self._lock:
            return [p.model_copy(deep=True) for p in self._projects]

    def get(self, project_id: str) -> Project | None:
        with self._lock:
            p = self._find(project_id)
            return p.model_copy(deep=True) if p else None

    # --- subscriptions ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # --- mutations ---

    def create(self, title: str, client_name: str, image_url: str) -> Project:
        project = Project(
            id=new_id(),
            title=title,
            client_name=client_name,
            created_at=now_ms(),
            status=ProjectStatus.PENDING,
            image_url=image_url,
            comments=[],
        )
        with self._lock:
            # newest first
            self._projects.insert(0, project)
            self._commit()
            snapshot = project.model_copy(deep=True)
        logger.info("project_created", project_id=project.id, client=client_name)
        return self._emit("created", snapshot)

    def add_comment(
        self,
        project_id: str,
        author: CommentAuthor,
        text: str,
        x: float | None = None,
        y: float | None = None,
    ) -> Comment | None:
        if not text or not text.strip():
            raise ValueError("comment text must not be empty")
        with self._lock:
            project = self._find(project_id)
            if project is None:
                logger.info("comment_skipped_missing_project", project_id=project_id)
                return None
            comment = Comment(
                id=new_id(),
                author=CommentAuthor(author),
                text=text.strip(),
                timestamp=now_ms(),
                x=x,
                y=y,
            )
            project.comments.append(comment)
            self._commit()
            snapshot = project.model_copy(deep=True)
        self._emit("commented", snapshot)
        return comment.model_copy()

    def request_changes(self, project_id: str) -> Project | None:
        return self._transition(project_id, StatusEvent.request_changes)

    def approve(self, project_id: str, approval: ApprovalData | None = None) -> Project | None:
        return self._transition(project_id, StatusEvent.approve, approval)

    # --- internals ---

    def _find(self, project_id: str) -> Project | None:
        for p in self._projects:
            if p.id == project_id:
                return p
        return None

    def _transition(
        self,
        project_id: str,
        event: StatusEvent,
        approval: ApprovalData | None = None,
    ) -> Project | None:
        with self._lock:
            project = self._find(project_id)
            if project is None:
                logger.info("status_change_skipped_missing_project", project_id=project_id, status_event=event.value)
                return None
            previous = project.status
            project.status = next_status(previous, event)
            # an existing approval record is kept unless a new one is supplied
            if approval is not None:
                project.approval_data = approval.model_copy()
            self._commit()
            snapshot = project.model_copy(deep=True)
        logger.info(
            "project_status_changed",
            project_id=project_id,
            status_event=event.value,
            from_status=previous.value,
            to_status=snapshot.status.value,
        )
        kind = "approved" if event is StatusEvent.approve else "changes_requested"
        return self._emit(kind, snapshot)

    def _commit(self) -> None:
        self.store.save(self._projects)

    def _emit(self, kind: str, snapshot: Project) -> Project:
        for listener in list(self._listeners):
            try:
                listener(RegistryEvent(kind=kind, project=snapshot.model_copy(deep=True)))
            except Exception:
                # the mutation is already persisted
                logger.exception("registry_listener_failed", kind=kind, project_id=snapshot.id)
        return snapshot
