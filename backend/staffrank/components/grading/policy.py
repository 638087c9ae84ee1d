"""Role-rank policy: the one place that makes a staff record consistent with its role.

Every boundary crossing (row read from the store, pre-write, post-write return)
goes through :func:`enforce`. For Manager and Owner it overwrites whatever the
caller supplied with the immeasurable values; for Moderator and Builder it
validates the rank and metric keys and recomputes every grade.
"""

from __future__ import annotations

from typing import Union

from ...errors import ValidationError
from .aggregator import IMMEASURABLE_RESULT, aggregate, build_metric
from .roles import (
    StaffRole,
    allowed_ranks,
    canonical_rank,
    default_rank,
    is_immeasurable,
    metric_keys,
)
from .types import PerformanceMetric, StaffDraft, StaffMember

DEFAULT_METRIC_SCORE = 5.0


def parse_role(value) -> StaffRole:
    try:
        return StaffRole(value)
    except ValueError:
        allowed = ", ".join(r.value for r in StaffRole)
        raise ValidationError(f"Unknown role {value!r}. Allowed roles: {allowed}") from None


def resolve_rank(role: StaffRole, rank: str | None) -> str:
    if is_immeasurable(role):
        return default_rank(role)
    if rank is None or not str(rank).strip():
        return default_rank(role)
    candidate = canonical_rank(role, str(rank))
    allowed = allowed_ranks(role)
    if candidate not in allowed:
        raise ValidationError(
            f"Invalid Rank: {rank!r} is not allowed for {role.value}. "
            f"Allowed ranks: {', '.join(allowed)}"
        )
    return candidate


def immeasurable_metrics(role: StaffRole) -> dict[str, PerformanceMetric]:
    return {key: build_metric(key, 10, role) for key in metric_keys(role)}


def _graded_metrics(role: StaffRole, supplied: dict, default_score: float) -> dict[str, PerformanceMetric]:
    keys = metric_keys(role)
    unknown = sorted(set(supplied) - set(keys))
    if unknown:
        raise ValidationError(f"Unknown metrics for {role.value}: {', '.join(unknown)}")
    metrics = {}
    for key in keys:
        value = supplied.get(key, default_score)
        if isinstance(value, PerformanceMetric):
            value = value.score
        metrics[key] = build_metric(key, value)
    return metrics


def enforce(
    staff: Union[StaffDraft, StaffMember],
    *,
    default_score: float = DEFAULT_METRIC_SCORE,
) -> StaffMember:
    role = parse_role(staff.role)
    name = (staff.name or "").strip()
    if not name:
        raise ValidationError("Staff name is required")

    rank = resolve_rank(role, staff.rank)

    if is_immeasurable(role):
        metrics = immeasurable_metrics(role)
        result = IMMEASURABLE_RESULT
    else:
        metrics = _graded_metrics(role, dict(staff.metrics or {}), default_score)
        result = aggregate(metrics, role)

    return StaffMember(
        id=staff.id,
        name=name,
        role=role,
        rank=rank,
        avatar=staff.avatar,
        metrics=metrics,
        overall_score=result.overall_score,
        overall_grade=result.overall_grade,
        staff_code=staff.staff_code,
    )
