"""Shared records state for the Web API.

The records engine is single-threaded. Sync endpoints run on a worker
pool, so every request goes through RecordsStore.session(), which holds
one lock around the whole registry + catalog + engine state for the
duration of the request.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Generator

from fastapi import HTTPException, Request, status

from registrar.config.app_config import AppConfig
from registrar.core.errors import (
    AlreadyGradedError,
    CapacityExceededError,
    DuplicateEnrollmentError,
    InvalidCapacityError,
    InvalidGradeError,
    InvalidTransitionError,
    NotFoundError,
    RegistrarError,
)
from registrar.core.records import AcademicRecords

# Checked in order; first matching class wins
ERROR_STATUS: list[tuple[type[RegistrarError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateEnrollmentError, status.HTTP_409_CONFLICT),
    (AlreadyGradedError, status.HTTP_409_CONFLICT),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (CapacityExceededError, status.HTTP_409_CONFLICT),
    (InvalidGradeError, 422),
    (InvalidCapacityError, 422),
]


class RecordsStore:
    """Owns one AcademicRecords instance and the lock guarding it."""

    def __init__(self, config: AppConfig | None = None):
        self._records = AcademicRecords(config)
        self._lock = threading.Lock()

    @contextmanager
    def session(self) -> Generator[AcademicRecords, None, None]:
        """Exclusive access to the records for one request."""
        with self._lock:
            yield self._records


def get_store(request: Request) -> RecordsStore:
    """FastAPI dependency returning the app's RecordsStore."""
    return request.app.state.records_store


def http_error(error: RegistrarError) -> HTTPException:
    """Translate an engine error into an HTTPException."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
