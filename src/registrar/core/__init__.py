"""Core records engine.

Modules:
- ids: per-kind identity allocation
- grading: score -> letter grade -> grade points
- audit: bounded audit log
- students: student registry
- courses: course catalog
- enrollment: enrollment engine and state machine
- analytics: GPA, class and system statistics
- records: facade wiring the components together
- exporter: plain-text export
"""

__all__ = [
    "ids",
    "grading",
    "audit",
    "students",
    "courses",
    "enrollment",
    "analytics",
    "records",
    "exporter",
    "errors",
]
