"""Enrollment engine.

Responsibilities:
- Create enrollments linking an active student to an existing course
- Enforce course capacity and one live enrollment per (student, course)
- Drive the enrollment state machine
- Record grades and derive letter grade / grade points

State machine:

    PENDING --(record_grade)--> COMPLETED
    PENDING --(drop)----------> DROPPED
    ACTIVE  --(record_grade)--> COMPLETED
    ACTIVE  --(drop)----------> DROPPED

ACTIVE is representable but nothing enters it yet. COMPLETED and DROPPED
are terminal. Every operation validates before it mutates, so a failure
leaves the engine, the catalog and the registry untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import structlog

from registrar.core.audit import AuditLog
from registrar.core.courses import CourseCatalog
from registrar.core.errors import (
    AlreadyGradedError,
    CourseFullError,
    DuplicateEnrollmentError,
    EnrollmentNotFoundError,
    InvalidGradeError,
    InvalidTransitionError,
    RecordLimitError,
    RegistrarError,
)
from registrar.core.grading import grade_points, is_valid_grade, letter_grade
from registrar.core.ids import IdentityAllocator, IdKind
from registrar.core.students import StudentRegistry

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ENROLLMENTS = 5000


class EnrollmentStatus(str, Enum):
    """Lifecycle status of an enrollment."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    DROPPED = "dropped"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Statuses from which a grade can be recorded or the enrollment dropped
OPEN_STATUSES = frozenset({EnrollmentStatus.PENDING, EnrollmentStatus.ACTIVE})


@dataclass
class Enrollment:
    """A student's enrollment in a course."""

    enrollment_id: int
    student_id: int
    course_id: int
    status: EnrollmentStatus = EnrollmentStatus.PENDING
    grade: float | None = None
    letter_grade: str | None = None
    credit_points: float | None = None
    enrollment_date: str = ""
    graded_at: str | None = None
    dropped_at: str | None = None

    def __post_init__(self):
        if not self.enrollment_date:
            self.enrollment_date = datetime.now(timezone.utc).isoformat()

    @property
    def is_live(self) -> bool:
        """Counts toward capacity and duplicate checks."""
        return self.status != EnrollmentStatus.DROPPED

    @property
    def is_completed(self) -> bool:
        return self.status == EnrollmentStatus.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "enrollment_id": self.enrollment_id,
            "student_id": self.student_id,
            "course_id": self.course_id,
            "status": self.status.value,
            "grade": self.grade,
            "letter_grade": self.letter_grade,
            "credit_points": self.credit_points,
            "enrollment_date": self.enrollment_date,
            "graded_at": self.graded_at,
            "dropped_at": self.dropped_at,
        }


@dataclass
class EnrollmentEngine:
    """Owns enrollment records and keeps course counters consistent."""

    registry: StudentRegistry
    catalog: CourseCatalog
    allocator: IdentityAllocator
    audit: AuditLog = field(default_factory=AuditLog)
    max_enrollments: int = DEFAULT_MAX_ENROLLMENTS
    _enrollments: dict[int, Enrollment] = field(default_factory=dict, init=False, repr=False)
    # (student_id, course_id) -> enrollment_id of the live enrollment
    _live_index: dict[tuple[int, int], int] = field(
        default_factory=dict, init=False, repr=False
    )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def enroll(self, student_id: int, course_id: int) -> Enrollment:
        """Enroll a student in a course.

        Args:
            student_id: ID of an active student
            course_id: ID of an existing course

        Returns:
            The new PENDING enrollment

        Raises:
            RecordLimitError: If max_enrollments records already exist
            StudentNotFoundError: If the student is unknown or inactive
            CourseNotFoundError: If the course is unknown
            DuplicateEnrollmentError: If a live enrollment already exists
            CourseFullError: If the course has no free seat
        """
        try:
            if len(self._enrollments) >= self.max_enrollments:
                raise RecordLimitError("enrollment", self.max_enrollments)

            self.registry.find_student(student_id)
            course = self.catalog.find_course(course_id)

            existing_id = self._live_index.get((student_id, course_id))
            if existing_id is not None:
                raise DuplicateEnrollmentError(student_id, course_id, existing_id)

            if course.current_enrollment >= course.max_capacity:
                raise CourseFullError(course_id, course.max_capacity)
        except DuplicateEnrollmentError as e:
            self.audit.warning("Enrollment", f"Duplicate enrollment attempt: {e.message}")
            raise
        except RegistrarError as e:
            self.audit.error("Enrollment", e.message)
            raise

        enrollment = Enrollment(
            enrollment_id=self.allocator.next_id(IdKind.ENROLLMENT),
            student_id=student_id,
            course_id=course_id,
        )
        self._enrollments[enrollment.enrollment_id] = enrollment
        self._live_index[(student_id, course_id)] = enrollment.enrollment_id
        self.catalog.increment_enrollment(course_id)

        logger.info(
            "enrollment.created",
            enrollment_id=enrollment.enrollment_id,
            student_id=student_id,
            course_id=course_id,
        )
        self.audit.success(
            "Enrollment", f"Enrolled student {student_id} in course {course_id}"
        )
        return enrollment

    def record_grade(self, enrollment_id: int, grade: float) -> Enrollment:
        """Record the final grade and complete the enrollment.

        Grades are written once: a COMPLETED enrollment rejects a second
        grade and a DROPPED one cannot be graded.

        Raises:
            InvalidGradeError: If grade is outside [0, 100]
            EnrollmentNotFoundError: If the ID is unknown
            AlreadyGradedError: If the enrollment is COMPLETED
            InvalidTransitionError: If the enrollment is DROPPED
        """
        try:
            if not is_valid_grade(grade):
                raise InvalidGradeError(grade)

            enrollment = self.get_enrollment(enrollment_id)

            if enrollment.status == EnrollmentStatus.COMPLETED:
                raise AlreadyGradedError(enrollment_id, enrollment.grade)
            if enrollment.status not in OPEN_STATUSES:
                raise InvalidTransitionError(
                    enrollment_id,
                    enrollment.status.value,
                    EnrollmentStatus.COMPLETED.value,
                )
        except RegistrarError as e:
            self.audit.error("Record Grade", e.message)
            raise

        letter = letter_grade(grade)
        enrollment.grade = float(grade)
        enrollment.letter_grade = letter
        enrollment.credit_points = grade_points(letter)
        enrollment.status = EnrollmentStatus.COMPLETED
        enrollment.graded_at = datetime.now(timezone.utc).isoformat()

        logger.info(
            "enrollment.graded",
            enrollment_id=enrollment_id,
            grade=grade,
            letter_grade=letter,
        )
        self.audit.success(
            "Record Grade", f"Recorded grade {grade:.2f} for enrollment {enrollment_id}"
        )
        return enrollment

    def drop_enrollment(self, enrollment_id: int) -> Enrollment:
        """Drop a PENDING or ACTIVE enrollment and release its seat.

        The record stays for history; the (student, course) pair becomes
        free for a new enrollment.

        Raises:
            EnrollmentNotFoundError: If the ID is unknown
            InvalidTransitionError: If the enrollment is COMPLETED or DROPPED
        """
        try:
            enrollment = self.get_enrollment(enrollment_id)
            if enrollment.status not in OPEN_STATUSES:
                raise InvalidTransitionError(
                    enrollment_id,
                    enrollment.status.value,
                    EnrollmentStatus.DROPPED.value,
                )
        except RegistrarError as e:
            self.audit.error("Drop Enrollment", e.message)
            raise

        self.catalog.decrement_enrollment(enrollment.course_id)
        enrollment.status = EnrollmentStatus.DROPPED
        enrollment.dropped_at = datetime.now(timezone.utc).isoformat()
        self._live_index.pop((enrollment.student_id, enrollment.course_id), None)

        logger.info("enrollment.dropped", enrollment_id=enrollment_id)
        self.audit.success(
            "Drop Enrollment",
            f"Dropped enrollment {enrollment_id} "
            f"(student {enrollment.student_id}, course {enrollment.course_id})",
        )
        return enrollment

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_enrollment(self, enrollment_id: int) -> Enrollment:
        enrollment = self._enrollments.get(enrollment_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)
        return enrollment

    def enrollments_by_student(self, student_id: int) -> list[Enrollment]:
        """All enrollments of a student, every status included."""
        return [e for e in self._enrollments.values() if e.student_id == student_id]

    def enrollments_by_course(self, course_id: int) -> list[Enrollment]:
        """All enrollments in a course, every status included."""
        return [e for e in self._enrollments.values() if e.course_id == course_id]

    def live_enrollment(self, student_id: int, course_id: int) -> Enrollment | None:
        """The non-dropped enrollment for a pair, if any."""
        enrollment_id = self._live_index.get((student_id, course_id))
        if enrollment_id is None:
            return None
        return self._enrollments[enrollment_id]

    def list_enrollments(self) -> list[Enrollment]:
        return list(self._enrollments.values())

    def __len__(self) -> int:
        return len(self._enrollments)
