"""Analytics endpoints."""

from fastapi import APIRouter, Depends

from registrar.core.analytics import class_statistics, student_gpa, system_statistics
from registrar.core.errors import RegistrarError
from registrar.web.schemas import (
    ClassStatisticsResponse,
    GPAResponse,
    SystemStatisticsResponse,
)
from registrar.web.state import RecordsStore, get_store, http_error

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/students/{student_id}/gpa", response_model=GPAResponse)
def get_student_gpa(student_id: int, store: RecordsStore = Depends(get_store)) -> GPAResponse:
    with store.session() as records:
        try:
            report = student_gpa(records, student_id)
        except RegistrarError as e:
            raise http_error(e) from e
    return GPAResponse(**report.to_dict())


@router.get("/courses/{course_id}", response_model=ClassStatisticsResponse)
def get_class_statistics(
    course_id: int, store: RecordsStore = Depends(get_store)
) -> ClassStatisticsResponse:
    with store.session() as records:
        try:
            stats = class_statistics(records, course_id)
        except RegistrarError as e:
            raise http_error(e) from e
    return ClassStatisticsResponse(**stats.to_dict())


@router.get("/system", response_model=SystemStatisticsResponse)
def get_system_statistics(store: RecordsStore = Depends(get_store)) -> SystemStatisticsResponse:
    with store.session() as records:
        stats = system_statistics(records)
    return SystemStatisticsResponse(**stats.to_dict())
