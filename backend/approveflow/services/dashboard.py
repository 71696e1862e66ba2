from approveflow.schemas.project import Project, ProjectStatus, SummaryOut


def summarize(projects: list[Project]) -> SummaryOut:
    counts = {s: 0 for s in ProjectStatus}
    for p in projects:
        counts[p.status] += 1
    return SummaryOut(
        total=len(projects),
        pending=counts[ProjectStatus.PENDING],
        changes_requested=counts[ProjectStatus.CHANGES_REQUESTED],
        approved=counts[ProjectStatus.APPROVED],
        comments=sum(len(p.comments) for p in projects),
    )
