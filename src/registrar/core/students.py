"""Student registry.

Owns the student records. Students are never physically removed: a
deactivated student keeps its ID and history but can no longer enroll
and no longer appears in searches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog

from registrar.core.audit import AuditLog
from registrar.core.errors import RecordLimitError, StudentNotFoundError
from registrar.core.ids import IdentityAllocator, IdKind
from registrar.utils.validators import validate_email, validate_phone

logger = structlog.get_logger(__name__)

DEFAULT_MAX_STUDENTS = 500


@dataclass
class Student:
    """A registered student."""

    student_id: int
    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    admission_year: int | None = None
    major: str = ""
    registration_date: str = ""
    is_active: bool = True

    def __post_init__(self):
        if not self.registration_date:
            self.registration_date = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "student_id": self.student_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "admission_year": self.admission_year,
            "major": self.major,
            "registration_date": self.registration_date,
            "is_active": self.is_active,
        }


@dataclass
class StudentRegistry:
    """Student collection indexed by ID."""

    allocator: IdentityAllocator
    audit: AuditLog = field(default_factory=AuditLog)
    max_students: int = DEFAULT_MAX_STUDENTS
    _students: dict[int, Student] = field(default_factory=dict, init=False, repr=False)

    def add_student(
        self,
        name: str,
        email: str = "",
        phone: str = "",
        address: str = "",
        admission_year: int | None = None,
        major: str = "",
    ) -> Student:
        """Register a new student and return the record.

        Malformed email or phone values are stored as given and reported
        as audit warnings.

        Raises:
            RecordLimitError: If the registry already holds max_students
        """
        if len(self._students) >= self.max_students:
            error = RecordLimitError("student", self.max_students)
            self.audit.error("Add Student", error.message)
            raise error

        if email and not validate_email(email):
            self.audit.warning("Add Student", f"Invalid email format: {email}")
        if phone and not validate_phone(phone):
            self.audit.warning("Add Student", f"Invalid phone format: {phone}")

        student = Student(
            student_id=self.allocator.next_id(IdKind.STUDENT),
            name=name,
            email=email,
            phone=phone,
            address=address,
            admission_year=admission_year,
            major=major,
        )
        self._students[student.student_id] = student

        logger.info("student.added", student_id=student.student_id, name=name)
        self.audit.success(
            "Add Student", f"Added student: {name} (ID: {student.student_id})"
        )
        return student

    def get_student(self, student_id: int) -> Student:
        """Get a student by ID, active or not."""
        student = self._students.get(student_id)
        if student is None:
            raise StudentNotFoundError(student_id)
        return student

    def find_student(self, student_id: int) -> Student:
        """Get an active student by ID.

        Raises:
            StudentNotFoundError: If unknown or deactivated
        """
        student = self._students.get(student_id)
        if student is None or not student.is_active:
            raise StudentNotFoundError(student_id)
        return student

    def search_by_name(self, substring: str) -> list[Student]:
        """Active students whose name contains ``substring`` (case-sensitive)."""
        return [
            s for s in self._students.values() if s.is_active and substring in s.name
        ]

    def deactivate_student(self, student_id: int) -> Student:
        """Soft-delete a student."""
        try:
            student = self.get_student(student_id)
        except StudentNotFoundError as e:
            self.audit.warning("Deactivate Student", e.message)
            raise
        student.is_active = False
        self.audit.success("Deactivate Student", f"Deactivated student {student_id}")
        return student

    def reactivate_student(self, student_id: int) -> Student:
        """Undo a soft-delete."""
        try:
            student = self.get_student(student_id)
        except StudentNotFoundError as e:
            self.audit.warning("Reactivate Student", e.message)
            raise
        student.is_active = True
        self.audit.success("Reactivate Student", f"Reactivated student {student_id}")
        return student

    def list_students(self, include_inactive: bool = False) -> list[Student]:
        """Students in registration order."""
        if include_inactive:
            return list(self._students.values())
        return [s for s in self._students.values() if s.is_active]

    def active_count(self) -> int:
        return sum(1 for s in self._students.values() if s.is_active)

    def __len__(self) -> int:
        return len(self._students)
