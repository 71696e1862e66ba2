from approveflow.schemas.project import (
    ApprovalData,
    Comment,
    CommentAuthor,
    Project,
    ProjectStatus,
)
from approveflow.services.clock import now_ms


def seed_projects(now: int | None = None) -> list[Project]:
    """Demo projects shown on a fresh install."""
    now = now_ms() if now is None else now
    return [
        Project(
            id="p1",
            title="Neon Brand Identity",
            client_name="Nexus Tech",
            created_at=now - 10_000_000,
            status=ProjectStatus.CHANGES_REQUESTED,
            image_url="https://picsum.photos/800/600",
            comments=[
                Comment(
                    id="c1",
                    author=CommentAuthor.client,
                    text="Can we make the blue a bit more electric?",
                    timestamp=now - 500_000,
                ),
                Comment(
                    id="c2",
                    author=CommentAuthor.freelancer,
                    text="Sure, I will update that in the next version.",
                    timestamp=now - 200_000,
                ),
            ],
        ),
        Project(
            id="p2",
            title="Q3 Marketing Video",
            client_name="Apex Corp",
            created_at=now - 2_000_000,
            status=ProjectStatus.APPROVED,
            image_url="https://picsum.photos/800/450",
            approval_data=ApprovalData(
                approved_at=now,
                approver_agent="Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7)",
                ip_address="192.168.1.1",
            ),
        ),
    ]
