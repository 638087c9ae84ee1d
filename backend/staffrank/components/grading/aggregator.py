"""Metric construction and overall score/grade aggregation."""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping

from ...errors import ValidationError
from .grades import LetterGrade, classify
from .roles import StaffRole, is_immeasurable, metric_label
from .types import AggregateResult, PerformanceMetric

MIN_SCORE = 0.0
MAX_SCORE = 10.0

IMMEASURABLE_RESULT = AggregateResult(overall_score=MAX_SCORE, overall_grade=LetterGrade.SSS_PLUS)


def round1(value: float) -> float:
    """Half-up rounding to one decimal place (9.25 -> 9.3, unlike ``round``)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _metric_id(label: str) -> str:
    return label.lower().replace(" ", "-")


def _coerce_score(key: str, score) -> float:
    try:
        value = float(score)
    except (TypeError, ValueError):
        raise ValidationError(f"Score for {key} must be a number") from None
    if math.isnan(value) or value < MIN_SCORE or value > MAX_SCORE:
        raise ValidationError(f"Score for {key} must be between 0 and 10")
    return value


def build_metric(key: str, score, role: StaffRole | None = None) -> PerformanceMetric:
    label = metric_label(key)
    if role is not None and is_immeasurable(role):
        return PerformanceMetric(
            id=_metric_id(label),
            name=label,
            score=MAX_SCORE,
            letter_grade=LetterGrade.SSS_PLUS,
        )
    value = _coerce_score(key, score)
    return PerformanceMetric(id=_metric_id(label), name=label, score=value, letter_grade=classify(value))


def aggregate(metrics: Mapping[str, PerformanceMetric], role: StaffRole) -> AggregateResult:
    if is_immeasurable(role):
        return IMMEASURABLE_RESULT
    if not metrics:
        raise ValidationError(f"{StaffRole(role).value} record has no metrics to aggregate")
    scores = [float(metric.score) for metric in metrics.values()]
    overall = round1(sum(scores) / len(scores))
    return AggregateResult(overall_score=overall, overall_grade=classify(overall))
