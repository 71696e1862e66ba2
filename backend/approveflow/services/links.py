from dataclasses import dataclass
from typing import Literal

from approveflow.core.config import settings

CLIENT_PREFIX = "#/client/"


@dataclass(frozen=True)
class Route:
    view: Literal["dashboard", "client"]
    project_id: str | None = None


def share_link(project_id: str, base_url: str | None = None) -> str:
    base = (base_url or settings.PUBLIC_BASE_URL).rstrip("/")
    return f"{base}/{CLIENT_PREFIX}{project_id}"


def resolve_route(fragment: str | None) -> Route:
    """Map a URL fragment to a view: the client view for ``#/client/<id>``, else the dashboard."""
    fragment = fragment or ""
    if fragment.startswith(CLIENT_PREFIX):
        project_id = fragment[len(CLIENT_PREFIX):].split("/", 1)[0]
        if project_id:
            return Route(view="client", project_id=project_id)
    return Route(view="dashboard")
