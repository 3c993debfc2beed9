"""Academic records system: students, courses, enrollments, grades and analytics."""

__version__ = "0.1.0"
