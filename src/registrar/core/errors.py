"""Error taxonomy for the records engine.

Every error is recoverable: the operation that raised it left all state
unchanged. Callers (CLI, Web API) map the error kind to a user-facing
message or HTTP status.
"""

from __future__ import annotations

from typing import Any


class RegistrarError(Exception):
    """Base error for all records engine failures."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# NOT FOUND
# =============================================================================


class NotFoundError(RegistrarError):
    """A referenced record does not exist."""

    pass


class StudentNotFoundError(NotFoundError):
    """Raised when a student ID is unknown (or inactive, for enrollment)."""

    def __init__(self, student_id: int):
        self.student_id = student_id
        super().__init__(
            f"Student {student_id} not found",
            {"student_id": student_id},
        )


class CourseNotFoundError(NotFoundError):
    """Raised when a course ID is unknown."""

    def __init__(self, course_id: int):
        self.course_id = course_id
        super().__init__(
            f"Course {course_id} not found",
            {"course_id": course_id},
        )


class EnrollmentNotFoundError(NotFoundError):
    """Raised when an enrollment ID is unknown."""

    def __init__(self, enrollment_id: int):
        self.enrollment_id = enrollment_id
        super().__init__(
            f"Enrollment {enrollment_id} not found",
            {"enrollment_id": enrollment_id},
        )


# =============================================================================
# CAPACITY
# =============================================================================


class CapacityExceededError(RegistrarError):
    """A course or a collection limit is already full."""

    pass


class CourseFullError(CapacityExceededError):
    """Raised when a course is at maximum capacity."""

    def __init__(self, course_id: int, max_capacity: int):
        self.course_id = course_id
        self.max_capacity = max_capacity
        super().__init__(
            f"Course {course_id} is at maximum capacity ({max_capacity})",
            {"course_id": course_id, "max_capacity": max_capacity},
        )


class RecordLimitError(CapacityExceededError):
    """Raised when the configured limit for a record kind is reached."""

    def __init__(self, kind: str, limit: int):
        self.kind = kind
        self.limit = limit
        super().__init__(
            f"Maximum {kind} limit reached ({limit})",
            {"kind": kind, "limit": limit},
        )


# =============================================================================
# ENROLLMENT / GRADING
# =============================================================================


class DuplicateEnrollmentError(RegistrarError):
    """Raised when the student already holds a live enrollment in the course."""

    def __init__(self, student_id: int, course_id: int, enrollment_id: int):
        self.student_id = student_id
        self.course_id = course_id
        self.enrollment_id = enrollment_id
        super().__init__(
            f"Student {student_id} is already enrolled in course {course_id}",
            {
                "student_id": student_id,
                "course_id": course_id,
                "enrollment_id": enrollment_id,
            },
        )


class InvalidGradeError(RegistrarError):
    """Raised when a grade falls outside [0, 100]."""

    def __init__(self, grade: float):
        self.grade = grade
        super().__init__(
            f"Grade must be between 0 and 100 (got {grade})",
            {"grade": grade},
        )


class InvalidCapacityError(RegistrarError):
    """Raised when a counter or capacity would leave its valid range."""

    pass


class AlreadyGradedError(RegistrarError):
    """Raised when recording a grade on a completed enrollment."""

    def __init__(self, enrollment_id: int, grade: float | None):
        self.enrollment_id = enrollment_id
        self.grade = grade
        super().__init__(
            f"Enrollment {enrollment_id} is already graded ({grade})",
            {"enrollment_id": enrollment_id, "grade": grade},
        )


class InvalidTransitionError(RegistrarError):
    """Raised when an enrollment cannot move to the requested status."""

    def __init__(self, enrollment_id: int, current: str, target: str):
        self.enrollment_id = enrollment_id
        self.current = current
        self.target = target
        super().__init__(
            f"Enrollment {enrollment_id} cannot go from {current} to {target}",
            {"enrollment_id": enrollment_id, "current": current, "target": target},
        )
