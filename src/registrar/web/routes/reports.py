"""Audit log and export endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from registrar.core.exporter import render_export
from registrar.web.schemas import AuditEntryResponse, AuditLogResponse
from registrar.web.state import RecordsStore, get_store

router = APIRouter(prefix="/api", tags=["reports"])


@router.get("/audit", response_model=AuditLogResponse)
def audit_log(limit: int | None = None, store: RecordsStore = Depends(get_store)) -> AuditLogResponse:
    """Audit entries, oldest first; ``limit`` keeps only the most recent."""
    with store.session() as records:
        entries = records.audit_entries()
    if limit is not None and limit >= 0:
        entries = entries[-limit:] if limit else []
    items = [AuditEntryResponse(**entry.to_dict()) for entry in entries]
    return AuditLogResponse(entries=items, count=len(items))


@router.get("/export", response_class=PlainTextResponse)
def export_text(store: RecordsStore = Depends(get_store)) -> str:
    """Plain-text dump of all students, courses and enrollments."""
    with store.session() as records:
        snapshot = records.snapshot()
        records.audit.success("Export Data", "Data exported via API")
    return render_export(snapshot)
