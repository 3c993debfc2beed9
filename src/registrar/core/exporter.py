"""Plain-text export.

Human-readable dump of all students, courses and enrollments. The format
is meant for reading and archiving, not for re-import.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import structlog

from registrar.core.audit import AuditLog
from registrar.core.records import RecordsSnapshot

logger = structlog.get_logger(__name__)

HEADER = "================== SYSTEM DATA EXPORT =================="
FOOTER = "========== END OF EXPORT =========="


def _fmt_grade(grade: float | None) -> str:
    return "-" if grade is None else f"{grade:.2f}"


def render_export(snapshot: RecordsSnapshot, exported_at: datetime | None = None) -> str:
    """Render a snapshot as plain text.

    Args:
        snapshot: Records snapshot to dump
        exported_at: Timestamp for the header (defaults to now, UTC)

    Returns:
        The export document, newline-terminated
    """
    exported_at = exported_at or datetime.now(timezone.utc)
    lines: list[str] = [
        HEADER,
        f"Export Date: {exported_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}",
        "",
        "============ STUDENTS ============",
        f"Total Students: {len(snapshot.students)}",
        "",
    ]
    for s in snapshot.students:
        status = "" if s.is_active else " | Inactive"
        lines.append(
            f"ID: {s.student_id} | Name: {s.name} | Email: {s.email} | "
            f"Phone: {s.phone} | Major: {s.major}{status}"
        )

    lines += [
        "",
        "============ COURSES ============",
        f"Total Courses: {len(snapshot.courses)}",
        "",
    ]
    for c in snapshot.courses:
        lines.append(
            f"ID: {c.course_id} | Code: {c.code} | Name: {c.name} | "
            f"Credits: {c.credits} | Enrolled: {c.current_enrollment}/{c.max_capacity}"
        )

    lines += [
        "",
        "============ ENROLLMENTS ============",
        f"Total Enrollments: {len(snapshot.enrollments)}",
        "",
    ]
    for e in snapshot.enrollments:
        letter = f" ({e.letter_grade})" if e.letter_grade else ""
        lines.append(
            f"Enrollment ID: {e.enrollment_id} | Student: {e.student_id} | "
            f"Course: {e.course_id} | Grade: {_fmt_grade(e.grade)}{letter} | "
            f"Status: {e.status.label}"
        )

    lines += ["", FOOTER]
    return "\n".join(lines) + "\n"


def export_to_file(
    snapshot: RecordsSnapshot,
    path: Path,
    audit: AuditLog | None = None,
) -> Path:
    """Write the plain-text export to ``path``.

    Args:
        snapshot: Records snapshot to dump
        path: Destination file (parent directories are created)
        audit: Audit log to record the outcome in, if any

    Returns:
        The path written

    Raises:
        OSError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_export(snapshot), encoding="utf-8")
    except OSError as e:
        logger.error("export.failed", path=str(path), error=str(e))
        if audit is not None:
            audit.error("Export Data", f"Failed to create file: {path}")
        raise

    logger.info(
        "export.written",
        path=str(path),
        students=len(snapshot.students),
        courses=len(snapshot.courses),
        enrollments=len(snapshot.enrollments),
    )
    if audit is not None:
        audit.success("Export Data", f"Data exported to {path}")
    return path
