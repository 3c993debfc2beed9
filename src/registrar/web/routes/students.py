"""Student endpoints."""

from fastapi import APIRouter, Depends, status

from registrar.core.errors import RegistrarError
from registrar.web.schemas import (
    EnrollmentListResponse,
    EnrollmentResponse,
    StudentCreate,
    StudentListResponse,
    StudentResponse,
)
from registrar.web.state import RecordsStore, get_store, http_error

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", response_model=StudentListResponse)
def list_students(
    include_inactive: bool = False,
    name: str | None = None,
    store: RecordsStore = Depends(get_store),
) -> StudentListResponse:
    """List students, optionally filtered by a name substring."""
    with store.session() as records:
        if name is not None:
            found = records.registry.search_by_name(name)
        else:
            found = records.registry.list_students(include_inactive=include_inactive)
        students = [StudentResponse.model_validate(s) for s in found]
    return StudentListResponse(students=students, count=len(students))


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(
    student_data: StudentCreate,
    store: RecordsStore = Depends(get_store),
) -> StudentResponse:
    """Register a new student."""
    with store.session() as records:
        try:
            student = records.registry.add_student(**student_data.model_dump())
        except RegistrarError as e:
            raise http_error(e) from e
        return StudentResponse.model_validate(student)


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(student_id: int, store: RecordsStore = Depends(get_store)) -> StudentResponse:
    """Get a student by ID (inactive students included)."""
    with store.session() as records:
        try:
            student = records.registry.get_student(student_id)
        except RegistrarError as e:
            raise http_error(e) from e
        return StudentResponse.model_validate(student)


@router.delete("/{student_id}", response_model=StudentResponse)
def deactivate_student(
    student_id: int, store: RecordsStore = Depends(get_store)
) -> StudentResponse:
    """Soft-delete a student. The record and its history are kept."""
    with store.session() as records:
        try:
            student = records.registry.deactivate_student(student_id)
        except RegistrarError as e:
            raise http_error(e) from e
        return StudentResponse.model_validate(student)


@router.post("/{student_id}/reactivate", response_model=StudentResponse)
def reactivate_student(
    student_id: int, store: RecordsStore = Depends(get_store)
) -> StudentResponse:
    """Undo a soft-delete."""
    with store.session() as records:
        try:
            student = records.registry.reactivate_student(student_id)
        except RegistrarError as e:
            raise http_error(e) from e
        return StudentResponse.model_validate(student)


@router.get("/{student_id}/enrollments", response_model=EnrollmentListResponse)
def student_enrollments(
    student_id: int, store: RecordsStore = Depends(get_store)
) -> EnrollmentListResponse:
    """All enrollments of a student, every status included."""
    with store.session() as records:
        try:
            records.registry.get_student(student_id)
        except RegistrarError as e:
            raise http_error(e) from e
        enrollments = [
            EnrollmentResponse(**e.to_dict())
            for e in records.engine.enrollments_by_student(student_id)
        ]
    return EnrollmentListResponse(enrollments=enrollments, count=len(enrollments))
