"""Letter grades and the score -> grade classifier."""

from __future__ import annotations

from enum import Enum

from ...errors import ValidationError
from .roles import StaffRole, is_immeasurable


class LetterGrade(str, Enum):
    SSS_PLUS = "SSS+"
    S_PLUS = "S+"
    S = "S"
    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    E_MINUS = "E-"


# Inclusive lower bounds, checked from highest to lowest.
GRADE_THRESHOLDS: list[tuple[float, LetterGrade]] = [
    (9.5, LetterGrade.S_PLUS),
    (8.5, LetterGrade.S),
    (7.5, LetterGrade.A_PLUS),
    (6.5, LetterGrade.A),
    (5.5, LetterGrade.B_PLUS),
    (4.5, LetterGrade.B),
    (3.5, LetterGrade.C),
    (2.5, LetterGrade.D),
    (1.0, LetterGrade.E),
]

# Best first. Display/sorting only, never arithmetic.
GRADE_ORDER: list[LetterGrade] = list(LetterGrade)

# Older rows and clients spell the maximal grade this way.
LEGACY_GRADE_ALIASES = {
    "immeasurable": LetterGrade.SSS_PLUS,
}

_CSS_CLASSES = {
    LetterGrade.SSS_PLUS: "grade-sss",
    LetterGrade.S_PLUS: "grade-splus",
    LetterGrade.S: "grade-s",
    LetterGrade.A_PLUS: "grade-aplus",
    LetterGrade.A: "grade-a",
    LetterGrade.B_PLUS: "grade-bplus",
    LetterGrade.B: "grade-b",
    LetterGrade.C: "grade-c",
    LetterGrade.D: "grade-d",
    LetterGrade.E: "grade-e",
    LetterGrade.E_MINUS: "grade-eminus",
}


def classify(score: float, role: StaffRole | None = None) -> LetterGrade:
    """Map a 0-10 score to its letter grade.

    Managers and Owners are immeasurable and always get ``SSS+``; the score is
    not consulted for them.
    """
    if role is not None and is_immeasurable(role):
        return LetterGrade.SSS_PLUS
    value = float(score)
    for lower_bound, grade in GRADE_THRESHOLDS:
        if value >= lower_bound:
            return grade
    return LetterGrade.E_MINUS


def parse_grade(value: str | LetterGrade) -> LetterGrade:
    if isinstance(value, LetterGrade):
        return value
    text = str(value or "").strip()
    alias = LEGACY_GRADE_ALIASES.get(text.lower())
    if alias is not None:
        return alias
    try:
        return LetterGrade(text)
    except ValueError:
        raise ValidationError(f"Unknown letter grade: {value!r}") from None


def grade_rank(grade: LetterGrade | str) -> int:
    """0 for the best grade, increasing towards ``E-``."""
    return GRADE_ORDER.index(parse_grade(grade))


def grade_css_class(grade: LetterGrade | str) -> str:
    try:
        return _CSS_CLASSES[parse_grade(grade)]
    except ValidationError:
        return "grade-c"
