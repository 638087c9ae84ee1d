from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..components.grading.grades import LetterGrade, grade_css_class
from ..components.grading.roles import StaffRole
from ..components.grading.types import StaffMember


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MetricResponse(_CamelModel):
    id: str
    name: str
    score: float
    letter_grade: LetterGrade


class StaffResponse(_CamelModel):
    id: str
    staff_code: Optional[str] = None
    name: str
    role: StaffRole
    rank: str
    avatar: Optional[str] = None
    metrics: Dict[str, MetricResponse]
    overall_score: float
    overall_grade: LetterGrade
    grade_class: str

    @classmethod
    def from_member(cls, staff: StaffMember) -> "StaffResponse":
        return cls(
            id=staff.id,
            staff_code=staff.staff_code,
            name=staff.name,
            role=staff.role,
            rank=staff.rank,
            avatar=staff.avatar,
            metrics={
                key: MetricResponse(
                    id=metric.id,
                    name=metric.name,
                    score=metric.score,
                    letter_grade=metric.letter_grade,
                )
                for key, metric in staff.metrics.items()
            },
            overall_score=staff.overall_score,
            overall_grade=staff.overall_grade,
            grade_class=grade_css_class(staff.overall_grade),
        )


class StaffCreate(_CamelModel):
    name: str = Field(min_length=1, max_length=200)
    role: StaffRole
    rank: Optional[str] = Field(default=None, max_length=100)
    avatar: Optional[str] = Field(default=None, max_length=2000)
    metrics: Dict[str, float] = Field(default_factory=dict)


class StaffUpdate(_CamelModel):
    """Partial update. ``role`` selects the storage partition and cannot move a record."""

    role: StaffRole
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    rank: Optional[str] = Field(default=None, max_length=100)
    avatar: Optional[str] = Field(default=None, max_length=2000)
    metrics: Optional[Dict[str, float]] = None


class RemoveStaffResponse(_CamelModel):
    success: bool = True
    deleted: bool


class AccessCodeRequest(_CamelModel):
    access_code: str = Field(default="", max_length=200)


class AccessCodeResponse(_CamelModel):
    access_granted: bool
    is_admin: bool
