"""Staff directory store adapter.

Reads and writes the three role-partitioned staff tables and hands back
policy-enforced ``StaffMember`` records. Every read and every write passes
through :func:`enforce`, so callers never see a Manager or Owner with
anything but the immeasurable values.
"""

from __future__ import annotations

import logging
from typing import List, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import NotFound, StorageFailure
from ...platform.config import settings
from ..avatars.service import cleanup_previous_avatars
from ..grading.policy import enforce, parse_role
from ..grading.roles import StaffRole
from ..grading.types import StaffDraft, StaffMember
from .transforms import (
    PARTITION_MODELS,
    generate_staff_code,
    model_for_role,
    row_to_staff,
    staff_to_row_values,
)

logger = logging.getLogger(__name__)


class StaffDirectory:
    def __init__(self, db: Session):
        self.db = db

    def fetch_all(self) -> List[StaffMember]:
        try:
            staff: List[StaffMember] = []
            for table in ("moderators", "builders", "managers"):
                model = PARTITION_MODELS[table]
                rows = self.db.query(model).order_by(model.created_at, model.name).all()
                staff.extend(row_to_staff(row) for row in rows)
        except SQLAlchemyError as exc:
            logger.error("Failed to load staff directory: %s", exc)
            raise StorageFailure("Failed to load staff members") from exc
        logger.info("Loaded %d staff members", len(staff))
        return staff

    def get(self, staff_id: str) -> StaffMember:
        try:
            for model in PARTITION_MODELS.values():
                row = self.db.get(model, staff_id)
                if row is not None:
                    return row_to_staff(row)
        except SQLAlchemyError as exc:
            logger.error("Failed to load staff %s: %s", staff_id, exc)
            raise StorageFailure("Failed to load staff member") from exc
        raise NotFound(f"Staff member {staff_id} not found")

    def create(self, draft: Union[StaffDraft, StaffMember]) -> StaffMember:
        staff = enforce(draft, default_score=settings.DEFAULT_METRIC_SCORE)
        model = model_for_role(staff.role)
        row = model(
            staff_id=staff.staff_code or generate_staff_code(),
            **staff_to_row_values(staff),
        )
        if staff.id:
            row.id = staff.id
        self.db.add(row)
        self._commit(f"create {staff.role.value} {staff.name}")
        self.db.refresh(row)
        created = row_to_staff(row)
        logger.info("Created %s %s (%s)", created.role.value, created.id, created.rank)
        self._reclaim_avatars(created)
        return created

    def update(self, staff: Union[StaffDraft, StaffMember]) -> StaffMember:
        if not staff.id:
            raise NotFound("Staff member id is required for update")
        role = parse_role(staff.role)
        model = model_for_role(role)
        try:
            row = self.db.get(model, staff.id)
        except SQLAlchemyError as exc:
            raise StorageFailure("Failed to load staff member") from exc
        if row is None:
            raise NotFound(f"{role.value} {staff.id} not found")

        enforced = enforce(staff, default_score=settings.DEFAULT_METRIC_SCORE)
        for column, value in staff_to_row_values(enforced).items():
            setattr(row, column, value)
        self._commit(f"update {enforced.role.value} {enforced.id}")
        self.db.refresh(row)
        updated = row_to_staff(row)
        logger.info("Updated %s %s", updated.role.value, updated.id)
        self._reclaim_avatars(updated)
        return updated

    def set_avatar(self, staff_id: str, role: Union[StaffRole, str], avatar_url: str) -> StaffMember:
        current = self.get(staff_id)
        if current.role != parse_role(role):
            raise NotFound(f"{parse_role(role).value} {staff_id} not found")
        draft = current.to_draft()
        draft.avatar = avatar_url
        return self.update(draft)

    def remove(self, staff_id: str, role: Union[StaffRole, str]) -> bool:
        model = model_for_role(parse_role(role))
        try:
            deleted = self.db.query(model).filter(model.id == staff_id).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to remove staff %s: %s", staff_id, exc)
            raise StorageFailure("Failed to remove staff member") from exc
        logger.info("Removed staff %s from %s (rows=%d)", staff_id, model.__tablename__, deleted)
        return deleted > 0

    def _commit(self, what: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to %s: %s", what, exc)
            raise StorageFailure(f"Failed to {what}") from exc

    def _reclaim_avatars(self, staff: StaffMember) -> None:
        if not staff.id:
            return
        try:
            cleanup_previous_avatars(staff.id, keep=staff.avatar)
        except Exception:
            logger.warning("Avatar cleanup failed for staff %s", staff.id, exc_info=True)
