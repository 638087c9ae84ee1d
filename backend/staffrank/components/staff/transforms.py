"""Translation between the role-partitioned staff tables and StaffMember records."""

from __future__ import annotations

import logging
import math
import secrets
from typing import Any, Dict, Type

from ...models.staff import BuilderRow, ManagerRow, ModeratorRow
from ..grading.aggregator import MAX_SCORE, MIN_SCORE
from ..grading.policy import enforce
from ..grading.roles import (
    StaffRole,
    allowed_ranks,
    canonical_rank,
    default_rank,
    metric_column,
    metric_keys,
    partition_for,
)
from ..grading.types import StaffDraft, StaffMember

logger = logging.getLogger(__name__)

PLACEHOLDER_AVATAR = "/placeholder.svg"
UNNAMED_STAFF = "Unnamed staff"

PARTITION_MODELS: Dict[str, Type] = {
    "moderators": ModeratorRow,
    "builders": BuilderRow,
    "managers": ManagerRow,
}


def model_for_role(role: StaffRole) -> Type:
    return PARTITION_MODELS[partition_for(role)]


def manager_row_role(row: ManagerRow) -> StaffRole:
    """Owner only when explicitly tagged; anything else in ``managers`` is a Manager."""
    tag = (getattr(row, "role", None) or "").strip()
    return StaffRole.OWNER if tag == StaffRole.OWNER.value else StaffRole.MANAGER


def row_role(row: Any) -> StaffRole:
    if isinstance(row, ModeratorRow):
        return StaffRole.MODERATOR
    if isinstance(row, BuilderRow):
        return StaffRole.BUILDER
    return manager_row_role(row)


def generate_staff_code() -> str:
    return f"BDZ-{100 + secrets.randbelow(900)}"


def _stored_score(row: Any, key: str) -> float:
    value = getattr(row, metric_column(key), None)
    if value is None:
        return 0.0
    score = float(value)
    if math.isnan(score):
        score = MIN_SCORE
    clamped = min(max(score, MIN_SCORE), MAX_SCORE)
    if clamped != value:
        logger.warning("Stored %s=%r out of range for staff %s; using %s", key, value, row.id, clamped)
    return clamped


def row_to_staff(row: Any) -> StaffMember:
    """Build a StaffMember from a stored row. The stored overall grade is ignored.

    Bad stored values are repaired with a warning so a single row cannot
    break a directory listing.
    """
    role = row_role(row)
    metrics = {key: _stored_score(row, key) for key in metric_keys(role)}
    rank = row.rank
    if rank and canonical_rank(role, rank) not in allowed_ranks(role):
        logger.warning("Stored rank %r is not valid for %s %s; using %s", rank, role.value, row.id, default_rank(role))
        rank = None
    name = (row.name or "").strip()
    if not name:
        name = row.staff_id or UNNAMED_STAFF
        logger.warning("Stored staff %s has no name; using %r", row.id, name)
    draft = StaffDraft(
        id=row.id,
        name=name,
        role=role,
        rank=rank,
        avatar=row.profile_image_url or PLACEHOLDER_AVATAR,
        staff_code=row.staff_id,
        metrics=metrics,
    )
    return enforce(draft)


def staff_to_row_values(staff: StaffMember) -> dict:
    """Column values for an already-enforced StaffMember."""
    values = {
        "name": staff.name,
        "rank": staff.rank,
        "overall_grade": staff.overall_grade.value,
        "profile_image_url": None if staff.avatar in (None, "", PLACEHOLDER_AVATAR) else staff.avatar,
    }
    for key, metric in staff.metrics.items():
        values[metric_column(key)] = metric.score
    if partition_for(staff.role) == "managers":
        values["role"] = staff.role.value
    return values
