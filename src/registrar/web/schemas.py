"""Pydantic schemas for Web API.

Serialization models for Student, Course, Enrollment, analytics reports
and audit entries.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# =============================================================================
# STUDENT SCHEMAS
# =============================================================================


class StudentCreate(BaseModel):
    """Request body for registering a student."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(default="", max_length=100)
    phone: str = Field(default="", max_length=20)
    address: str = Field(default="", max_length=500)
    admission_year: int | None = Field(default=None, ge=1900, le=2100)
    major: str = Field(default="", max_length=100)


class StudentResponse(BaseModel):
    """Response for a student."""

    student_id: int
    name: str
    email: str
    phone: str
    address: str
    admission_year: int | None
    major: str
    registration_date: str
    is_active: bool

    model_config = {"from_attributes": True}


class StudentListResponse(BaseModel):
    """Response for list of students."""

    students: list[StudentResponse]
    count: int


# =============================================================================
# COURSE SCHEMAS
# =============================================================================


class CourseCreate(BaseModel):
    """Request body for adding a course."""

    code: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    credits: int
    max_capacity: int
    difficulty_level: float = 0.0


class CourseResponse(BaseModel):
    """Response for a course."""

    course_id: int
    code: str
    name: str
    description: str
    credits: int
    max_capacity: int
    current_enrollment: int
    available_seats: int
    difficulty_level: float
    created_date: str

    model_config = {"from_attributes": True}


class CourseListResponse(BaseModel):
    """Response for list of courses."""

    courses: list[CourseResponse]
    count: int


# =============================================================================
# ENROLLMENT SCHEMAS
# =============================================================================


class EnrollmentCreate(BaseModel):
    """Request body for enrolling a student in a course."""

    student_id: int
    course_id: int


class GradeRequest(BaseModel):
    """Request body for recording a grade.

    Range is checked by the engine so the failure is audited.
    """

    grade: float


class EnrollmentResponse(BaseModel):
    """Response for an enrollment."""

    enrollment_id: int
    student_id: int
    course_id: int
    status: str
    grade: float | None
    letter_grade: str | None
    credit_points: float | None
    enrollment_date: str
    graded_at: str | None = None
    dropped_at: str | None = None


class EnrollmentListResponse(BaseModel):
    """Response for list of enrollments."""

    enrollments: list[EnrollmentResponse]
    count: int


# =============================================================================
# ANALYTICS SCHEMAS
# =============================================================================


class GPAResponse(BaseModel):
    """Student GPA; gpa is null when no course is completed."""

    student_id: int
    name: str
    completed_courses: int
    gpa: float | None


class ClassStatisticsResponse(BaseModel):
    """Grade statistics of a course; numeric fields null when nothing graded."""

    course_id: int
    code: str
    name: str
    total_enrollment: int
    count_graded: int
    average: float | None = None
    minimum: float | None = None
    maximum: float | None = None
    range: float | None = None


class SystemStatisticsResponse(BaseModel):
    """System-wide counts and averages."""

    student_count: int
    course_count: int
    enrollment_count: int
    log_entry_count: int
    average_system_gpa: float | None
    average_enrollment_rate: float | None


# =============================================================================
# AUDIT / HEALTH SCHEMAS
# =============================================================================


class AuditEntryResponse(BaseModel):
    """A single audit log entry."""

    log_id: int
    level: str
    timestamp: str
    operation: str
    details: str


class AuditLogResponse(BaseModel):
    """Response for the audit log."""

    entries: list[AuditEntryResponse]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
