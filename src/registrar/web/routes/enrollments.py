"""Enrollment endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from registrar.core.errors import RegistrarError
from registrar.web.schemas import (
    EnrollmentCreate,
    EnrollmentListResponse,
    EnrollmentResponse,
    GradeRequest,
)
from registrar.web.state import RecordsStore, get_store, http_error

router = APIRouter(prefix="/api/enrollments", tags=["enrollments"])


@router.get("", response_model=EnrollmentListResponse)
def list_enrollments(store: RecordsStore = Depends(get_store)) -> EnrollmentListResponse:
    """List every enrollment record."""
    with store.session() as records:
        enrollments = [
            EnrollmentResponse(**e.to_dict()) for e in records.engine.list_enrollments()
        ]
    return EnrollmentListResponse(enrollments=enrollments, count=len(enrollments))


@router.get("/live", response_model=EnrollmentResponse)
def live_enrollment(
    student_id: int,
    course_id: int,
    store: RecordsStore = Depends(get_store),
) -> EnrollmentResponse:
    """The non-dropped enrollment of a student in a course."""
    with store.session() as records:
        enrollment = records.engine.live_enrollment(student_id, course_id)
        if enrollment is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No live enrollment for student {student_id} in course {course_id}",
            )
        return EnrollmentResponse(**enrollment.to_dict())


@router.post("", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
def enroll(
    request: EnrollmentCreate,
    store: RecordsStore = Depends(get_store),
) -> EnrollmentResponse:
    """Enroll a student in a course."""
    with store.session() as records:
        try:
            enrollment = records.engine.enroll(request.student_id, request.course_id)
        except RegistrarError as e:
            raise http_error(e) from e
        return EnrollmentResponse(**enrollment.to_dict())


@router.get("/{enrollment_id}", response_model=EnrollmentResponse)
def get_enrollment(
    enrollment_id: int, store: RecordsStore = Depends(get_store)
) -> EnrollmentResponse:
    """Get an enrollment by ID."""
    with store.session() as records:
        try:
            enrollment = records.engine.get_enrollment(enrollment_id)
        except RegistrarError as e:
            raise http_error(e) from e
        return EnrollmentResponse(**enrollment.to_dict())


@router.put("/{enrollment_id}/grade", response_model=EnrollmentResponse)
def record_grade(
    enrollment_id: int,
    request: GradeRequest,
    store: RecordsStore = Depends(get_store),
) -> EnrollmentResponse:
    """Record the final grade; a graded enrollment cannot be graded again."""
    with store.session() as records:
        try:
            enrollment = records.engine.record_grade(enrollment_id, request.grade)
        except RegistrarError as e:
            raise http_error(e) from e
        return EnrollmentResponse(**enrollment.to_dict())


@router.post("/{enrollment_id}/drop", response_model=EnrollmentResponse)
def drop_enrollment(
    enrollment_id: int, store: RecordsStore = Depends(get_store)
) -> EnrollmentResponse:
    """Drop a pending enrollment and free its seat."""
    with store.session() as records:
        try:
            enrollment = records.engine.drop_enrollment(enrollment_id)
        except RegistrarError as e:
            raise http_error(e) from e
        return EnrollmentResponse(**enrollment.to_dict())
