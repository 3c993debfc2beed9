"""Analytics over the academic records.

Read-only aggregation recomputed on every call:
- student_gpa: mean grade points over a student's completed enrollments
- class_statistics: grade distribution of a course's completed enrollments
- system_statistics: counts and system-wide averages

"No data" is reported as None, never as 0.0: a student with no completed
course has no GPA, which is different from a GPA of zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean
from typing import TYPE_CHECKING, Any

from registrar.core.enrollment import Enrollment

if TYPE_CHECKING:
    from registrar.core.records import AcademicRecords


@dataclass(frozen=True)
class GPAReport:
    """GPA of one student."""

    student_id: int
    name: str
    completed_courses: int
    gpa: float | None

    @property
    def has_data(self) -> bool:
        return self.gpa is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "student_id": self.student_id,
            "name": self.name,
            "completed_courses": self.completed_courses,
            "gpa": self.gpa,
        }


@dataclass(frozen=True)
class ClassStatistics:
    """Grade statistics for one course."""

    course_id: int
    code: str
    name: str
    total_enrollment: int
    count_graded: int
    average: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    range: float | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "course_id": self.course_id,
            "code": self.code,
            "name": self.name,
            "total_enrollment": self.total_enrollment,
            "count_graded": self.count_graded,
        }
        if self.count_graded:
            result.update(
                {
                    "average": self.average,
                    "minimum": self.minimum,
                    "maximum": self.maximum,
                    "range": self.range,
                }
            )
        return result


@dataclass(frozen=True)
class SystemStatistics:
    """System-wide counts and averages."""

    student_count: int
    course_count: int
    enrollment_count: int
    log_entry_count: int
    average_system_gpa: float | None
    average_enrollment_rate: float | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "student_count": self.student_count,
            "course_count": self.course_count,
            "enrollment_count": self.enrollment_count,
            "log_entry_count": self.log_entry_count,
            "average_system_gpa": self.average_system_gpa,
            "average_enrollment_rate": self.average_enrollment_rate,
        }


def _completed(enrollments: list[Enrollment]) -> list[Enrollment]:
    return [e for e in enrollments if e.is_completed]


def student_gpa(records: AcademicRecords, student_id: int) -> GPAReport:
    """Compute a student's GPA.

    Inactive students are included: their history still has a GPA.

    Raises:
        StudentNotFoundError: If the student ID is unknown
    """
    student = records.registry.get_student(student_id)
    completed = _completed(records.engine.enrollments_by_student(student_id))

    gpa = fmean(e.credit_points for e in completed) if completed else None
    return GPAReport(
        student_id=student_id,
        name=student.name,
        completed_courses=len(completed),
        gpa=gpa,
    )


def class_statistics(records: AcademicRecords, course_id: int) -> ClassStatistics:
    """Compute grade statistics over a course's completed enrollments.

    Raises:
        CourseNotFoundError: If the course ID is unknown
    """
    course = records.catalog.find_course(course_id)
    grades = [e.grade for e in _completed(records.engine.enrollments_by_course(course_id))]

    if not grades:
        return ClassStatistics(
            course_id=course_id,
            code=course.code,
            name=course.name,
            total_enrollment=course.current_enrollment,
            count_graded=0,
        )

    highest = max(grades)
    lowest = min(grades)
    return ClassStatistics(
        course_id=course_id,
        code=course.code,
        name=course.name,
        total_enrollment=course.current_enrollment,
        count_graded=len(grades),
        average=fmean(grades),
        minimum=lowest,
        maximum=highest,
        range=highest - lowest,
    )


def system_statistics(records: AcademicRecords) -> SystemStatistics:
    """Compute system-wide statistics.

    average_enrollment_rate averages current/max over courses, skipping
    courses whose capacity is zero; it is None when there are no courses.
    """
    enrollments = records.engine.list_enrollments()
    completed = _completed(enrollments)
    courses = records.catalog.list_courses()

    rates = [c.enrollment_rate for c in courses if c.enrollment_rate is not None]

    return SystemStatistics(
        student_count=records.registry.active_count(),
        course_count=len(courses),
        enrollment_count=len(enrollments),
        log_entry_count=len(records.audit),
        average_system_gpa=fmean(e.credit_points for e in completed) if completed else None,
        average_enrollment_rate=fmean(rates) if rates else None,
    )
