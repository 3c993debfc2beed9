"""Course endpoints."""

from fastapi import APIRouter, Depends, status

from registrar.core.errors import RegistrarError
from registrar.web.schemas import (
    CourseCreate,
    CourseListResponse,
    CourseResponse,
    EnrollmentListResponse,
    EnrollmentResponse,
)
from registrar.web.state import RecordsStore, get_store, http_error

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.get("", response_model=CourseListResponse)
def list_courses(store: RecordsStore = Depends(get_store)) -> CourseListResponse:
    """List all courses."""
    with store.session() as records:
        courses = [CourseResponse.model_validate(c) for c in records.catalog.list_courses()]
    return CourseListResponse(courses=courses, count=len(courses))


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(
    course_data: CourseCreate,
    store: RecordsStore = Depends(get_store),
) -> CourseResponse:
    """Add a course to the catalog."""
    with store.session() as records:
        try:
            course = records.catalog.add_course(**course_data.model_dump())
        except RegistrarError as e:
            raise http_error(e) from e
        return CourseResponse.model_validate(course)


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(course_id: int, store: RecordsStore = Depends(get_store)) -> CourseResponse:
    """Get a course by ID."""
    with store.session() as records:
        try:
            course = records.catalog.find_course(course_id)
        except RegistrarError as e:
            raise http_error(e) from e
        return CourseResponse.model_validate(course)


@router.get("/{course_id}/enrollments", response_model=EnrollmentListResponse)
def course_enrollments(
    course_id: int, store: RecordsStore = Depends(get_store)
) -> EnrollmentListResponse:
    """All enrollments in a course, every status included."""
    with store.session() as records:
        try:
            records.catalog.find_course(course_id)
        except RegistrarError as e:
            raise http_error(e) from e
        enrollments = [
            EnrollmentResponse(**e.to_dict())
            for e in records.engine.enrollments_by_course(course_id)
        ]
    return EnrollmentListResponse(enrollments=enrollments, count=len(enrollments))
