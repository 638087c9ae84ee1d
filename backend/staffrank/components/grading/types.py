"""In-memory staff records produced by the grading engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .grades import LetterGrade
from .roles import StaffRole


@dataclass(frozen=True)
class PerformanceMetric:
    id: str
    name: str
    score: float
    letter_grade: LetterGrade


@dataclass(frozen=True)
class AggregateResult:
    overall_score: float
    overall_grade: LetterGrade


@dataclass
class StaffDraft:
    """Caller-supplied staff data before the role-rank policy has run.

    ``metrics`` may hold plain scores or metrics; any letter grades supplied
    are ignored and recomputed.
    """

    name: str
    role: StaffRole
    rank: Optional[str] = None
    id: Optional[str] = None
    avatar: Optional[str] = None
    staff_code: Optional[str] = None
    metrics: Dict[str, Union[float, int, PerformanceMetric]] = field(default_factory=dict)


@dataclass
class StaffMember:
    id: Optional[str]
    name: str
    role: StaffRole
    rank: str
    avatar: Optional[str]
    metrics: Dict[str, PerformanceMetric]
    overall_score: float
    overall_grade: LetterGrade
    staff_code: Optional[str] = None

    def to_draft(self) -> StaffDraft:
        return StaffDraft(
            id=self.id,
            name=self.name,
            role=self.role,
            rank=self.rank,
            avatar=self.avatar,
            staff_code=self.staff_code,
            metrics=dict(self.metrics),
        )
