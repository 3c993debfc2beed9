"""Route handlers for Web API."""

from registrar.web.routes.analytics import router as analytics_router
from registrar.web.routes.courses import router as courses_router
from registrar.web.routes.enrollments import router as enrollments_router
from registrar.web.routes.health import router as health_router
from registrar.web.routes.reports import router as reports_router
from registrar.web.routes.students import router as students_router

__all__ = [
    "analytics_router",
    "courses_router",
    "enrollments_router",
    "health_router",
    "reports_router",
    "students_router",
]
