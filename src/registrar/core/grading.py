"""Grade conversion.

Fixed, non-configurable mapping from a 0-100 score to a letter grade and
to the grade points used for GPA averaging. Thresholds are inclusive lower
bounds.
"""

from __future__ import annotations

MIN_GRADE = 0.0
MAX_GRADE = 100.0

# (lower bound, letter), checked top-down
LETTER_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (90.0, "A"),
    (80.0, "B"),
    (70.0, "C"),
    (60.0, "D"),
)

GRADE_POINTS: dict[str, float] = {
    "A": 4.0,
    "B": 3.0,
    "C": 2.0,
    "D": 1.0,
    "F": 0.0,
}


def is_valid_grade(grade: float) -> bool:
    """Check that a score lies in [0, 100]."""
    return MIN_GRADE <= grade <= MAX_GRADE


def letter_grade(grade: float) -> str:
    """Convert a numeric score to its letter grade.

    Args:
        grade: Score in [0, 100]; range is not checked here.

    Returns:
        One of "A", "B", "C", "D", "F".
    """
    for lower, letter in LETTER_THRESHOLDS:
        if grade >= lower:
            return letter
    return "F"


def grade_points(letter: str) -> float:
    """Grade points for a letter grade (A=4.0 ... F=0.0)."""
    return GRADE_POINTS[letter]
