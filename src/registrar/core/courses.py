"""Course catalog.

Owns the course records. ``current_enrollment`` is only moved through
increment_enrollment / decrement_enrollment, which the enrollment engine
calls to keep it equal to the number of live enrollments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog

from registrar.core.audit import AuditLog
from registrar.core.errors import (
    CourseNotFoundError,
    InvalidCapacityError,
    RecordLimitError,
)
from registrar.core.ids import IdentityAllocator, IdKind

logger = structlog.get_logger(__name__)

DEFAULT_MAX_COURSES = 100


@dataclass
class Course:
    """A course offering with a seat limit."""

    course_id: int
    code: str
    name: str
    credits: int
    max_capacity: int
    description: str = ""
    difficulty_level: float = 0.0
    current_enrollment: int = 0
    created_date: str = ""

    def __post_init__(self):
        if not self.created_date:
            self.created_date = datetime.now(timezone.utc).isoformat()

    @property
    def available_seats(self) -> int:
        return self.max_capacity - self.current_enrollment

    @property
    def is_full(self) -> bool:
        return self.current_enrollment >= self.max_capacity

    @property
    def enrollment_rate(self) -> float | None:
        """Fraction of seats taken, None when capacity is zero."""
        if self.max_capacity <= 0:
            return None
        return self.current_enrollment / self.max_capacity

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "course_id": self.course_id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "credits": self.credits,
            "max_capacity": self.max_capacity,
            "current_enrollment": self.current_enrollment,
            "difficulty_level": self.difficulty_level,
            "created_date": self.created_date,
        }


@dataclass
class CourseCatalog:
    """Course collection indexed by ID."""

    allocator: IdentityAllocator
    audit: AuditLog = field(default_factory=AuditLog)
    max_courses: int = DEFAULT_MAX_COURSES
    _courses: dict[int, Course] = field(default_factory=dict, init=False, repr=False)

    def add_course(
        self,
        code: str,
        name: str,
        credits: int,
        max_capacity: int,
        description: str = "",
        difficulty_level: float = 0.0,
    ) -> Course:
        """Add a course to the catalog.

        Raises:
            RecordLimitError: If the catalog already holds max_courses
            InvalidCapacityError: If credits or max_capacity are not positive
        """
        if len(self._courses) >= self.max_courses:
            error = RecordLimitError("course", self.max_courses)
            self.audit.error("Add Course", error.message)
            raise error

        if credits <= 0 or max_capacity <= 0:
            error = InvalidCapacityError(
                f"Credits and capacity must be positive (credits={credits}, "
                f"max_capacity={max_capacity})",
                {"credits": credits, "max_capacity": max_capacity},
            )
            self.audit.error("Add Course", error.message)
            raise error

        course = Course(
            course_id=self.allocator.next_id(IdKind.COURSE),
            code=code,
            name=name,
            credits=credits,
            max_capacity=max_capacity,
            description=description,
            difficulty_level=difficulty_level,
        )
        self._courses[course.course_id] = course

        logger.info("course.added", course_id=course.course_id, code=code)
        self.audit.success("Add Course", f"Added course: {name} ({code})")
        return course

    def find_course(self, course_id: int) -> Course:
        """Get a course by ID.

        Raises:
            CourseNotFoundError: If the ID is unknown
        """
        course = self._courses.get(course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return course

    def increment_enrollment(self, course_id: int) -> int:
        """Take one seat. Returns the new count."""
        course = self.find_course(course_id)
        if course.current_enrollment + 1 > course.max_capacity:
            raise InvalidCapacityError(
                f"Course {course_id} enrollment would exceed capacity "
                f"({course.max_capacity})",
                {"course_id": course_id, "current_enrollment": course.current_enrollment},
            )
        course.current_enrollment += 1
        return course.current_enrollment

    def decrement_enrollment(self, course_id: int) -> int:
        """Release one seat. Returns the new count."""
        course = self.find_course(course_id)
        if course.current_enrollment - 1 < 0:
            raise InvalidCapacityError(
                f"Course {course_id} enrollment cannot go below zero",
                {"course_id": course_id, "current_enrollment": course.current_enrollment},
            )
        course.current_enrollment -= 1
        return course.current_enrollment

    def list_courses(self) -> list[Course]:
        """Courses in creation order."""
        return list(self._courses.values())

    def __len__(self) -> int:
        return len(self._courses)
