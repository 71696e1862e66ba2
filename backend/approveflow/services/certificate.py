import datetime as dt
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from approveflow.schemas.project import Project


class NotApprovedError(ValueError):
    pass


def _fmt_ms(ms: int) -> str:
    return dt.datetime.fromtimestamp(ms / 1000, tz=dt.timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def render_certificate(project: Project) -> bytes:
    """One-page PDF attesting the client's approval of a project."""
    if project.approval_data is None:
        raise NotApprovedError(f"project {project.id} has no approval record")

    approval = project.approval_data
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"Approval certificate - {project.title}")
    width, height = A4
    y = height - 25*mm
    c.setFont("Helvetica-Bold", 16)
    c.drawString(20*mm, y, "Approval Certificate")
    y -= 12*mm
    c.setFont("Helvetica", 11)
    lines = [
        f"Project: {project.title}",
        f"Client: {project.client_name}",
        f"Project ID: {project.id}",
        f"Current status: {project.status.value}",
        f"Approved at: {_fmt_ms(approval.approved_at)}",
        f"Approver agent: {approval.approver_agent}",
        f"IP address: {approval.ip_address}",
        f"Comments on record: {len(project.comments)}",
    ]
    for ln in lines:
        c.drawString(20*mm, y, ln[:110])
        y -= 7*mm
    y -= 5*mm
    c.setFont("Helvetica-Oblique", 9)
    c.drawString(20*mm, y, "The approval timestamp above was recorded when the client confirmed the asset.")
    c.showPage()
    c.save()
    return buf.getvalue()
