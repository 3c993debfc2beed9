"""Academic records facade.

Wires one identity allocator, student registry, course catalog,
enrollment engine and audit log together so that every component shares
the same state and audit trail. Callers hold one AcademicRecords per
process (or per test).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone

import structlog

from registrar.config.app_config import AppConfig, load_app_config
from registrar.core.audit import AuditEntry, AuditLog
from registrar.core.courses import Course, CourseCatalog
from registrar.core.enrollment import Enrollment, EnrollmentEngine
from registrar.core.ids import IdentityAllocator
from registrar.core.students import Student, StudentRegistry

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RecordsSnapshot:
    """Point-in-time copy of all three collections.

    Records are copies: mutating them does not touch the live state.
    """

    taken_at: str
    students: tuple[Student, ...]
    courses: tuple[Course, ...]
    enrollments: tuple[Enrollment, ...]


class AcademicRecords:
    """Owns the complete in-memory records state."""

    def __init__(self, config: AppConfig | None = None):
        self.config = config or load_app_config()
        limits = self.config.limits

        self.allocator = IdentityAllocator(self.config.ids.as_offsets())
        self.audit = AuditLog(max_entries=limits.max_log_entries)
        self.registry = StudentRegistry(
            allocator=self.allocator,
            audit=self.audit,
            max_students=limits.max_students,
        )
        self.catalog = CourseCatalog(
            allocator=self.allocator,
            audit=self.audit,
            max_courses=limits.max_courses,
        )
        self.engine = EnrollmentEngine(
            registry=self.registry,
            catalog=self.catalog,
            allocator=self.allocator,
            audit=self.audit,
            max_enrollments=limits.max_enrollments,
        )

        logger.debug("records.initialized", limits=limits)
        self.audit.info("System Init", "System started successfully")

    def snapshot(self) -> RecordsSnapshot:
        """Consistent read-only copy of students, courses and enrollments."""
        return RecordsSnapshot(
            taken_at=datetime.now(timezone.utc).isoformat(),
            students=tuple(replace(s) for s in self.registry.list_students(include_inactive=True)),
            courses=tuple(replace(c) for c in self.catalog.list_courses()),
            enrollments=tuple(replace(e) for e in self.engine.list_enrollments()),
        )

    def audit_entries(self) -> list[AuditEntry]:
        return self.audit.entries()
