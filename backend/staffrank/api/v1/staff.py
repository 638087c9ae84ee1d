from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from ...components.avatars.service import save_avatar
from ...components.grading.grades import grade_rank
from ...components.grading.policy import parse_role
from ...components.grading.roles import StaffRole, partition_for, role_metadata_payload
from ...components.grading.types import StaffDraft
from ...components.ledger.service import get_event_log, get_score, record_event
from ...components.staff.directory import StaffDirectory
from ...deps import require_admin
from ...errors import NotFound
from ...platform.database import get_db
from ...schemas.ledger import AdminEventCreate, ScoreEventResponse, StaffScoreResponse
from ...schemas.staff import RemoveStaffResponse, StaffCreate, StaffResponse, StaffUpdate

router = APIRouter(prefix="/staff", tags=["Staff"])


@router.get("", response_model=List[StaffResponse])
def list_staff(
    role: Optional[StaffRole] = None,
    sort: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """All staff across partitions. ``sort=grade`` orders best grade first, then by score."""
    members = StaffDirectory(db).fetch_all()
    if role is not None:
        members = [m for m in members if m.role == role]
    if sort == "grade":
        members.sort(key=lambda m: (grade_rank(m.overall_grade), -m.overall_score, m.name.lower()))
    return [StaffResponse.from_member(m) for m in members]


@router.get("/roles")
def list_roles():
    return role_metadata_payload()


@router.get("/{staff_id}", response_model=StaffResponse)
def get_staff(staff_id: str, db: Session = Depends(get_db)):
    return StaffResponse.from_member(StaffDirectory(db).get(staff_id))


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
def create_staff(
    data: StaffCreate,
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin),
):
    draft = StaffDraft(
        name=data.name,
        role=data.role,
        rank=data.rank,
        avatar=data.avatar,
        metrics=dict(data.metrics),
    )
    return StaffResponse.from_member(StaffDirectory(db).create(draft))


@router.put("/{staff_id}", response_model=StaffResponse)
def update_staff(
    staff_id: str,
    data: StaffUpdate,
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin),
):
    directory = StaffDirectory(db)
    current = directory.get(staff_id)
    if partition_for(current.role) != partition_for(data.role):
        # Records never move between partitions.
        raise NotFound(f"{data.role.value} {staff_id} not found")

    draft = current.to_draft()
    draft.role = data.role
    if data.name is not None:
        draft.name = data.name
    if data.avatar is not None:
        draft.avatar = data.avatar
    if data.rank is not None or data.role != current.role:
        # Manager <-> Owner: the previous rank belongs to the old role.
        draft.rank = data.rank
    if data.metrics is not None:
        scores = {key: metric.score for key, metric in current.metrics.items()}
        scores.update(data.metrics)
        draft.metrics = scores
    return StaffResponse.from_member(directory.update(draft))


@router.delete("/{role}/{staff_id}", response_model=RemoveStaffResponse)
def remove_staff(
    role: str,
    staff_id: str,
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin),
):
    deleted = StaffDirectory(db).remove(staff_id, parse_role(role))
    return RemoveStaffResponse(deleted=deleted)


@router.post("/{role}/{staff_id}/avatar", response_model=StaffResponse)
def upload_avatar(
    role: str,
    staff_id: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin),
):
    staff_role = parse_role(role)
    directory = StaffDirectory(db)
    current = directory.get(staff_id)
    if partition_for(current.role) != partition_for(staff_role):
        raise NotFound(f"{staff_role.value} {staff_id} not found")
    content = file.file.read()
    avatar_url = save_avatar(staff_id, current.role, file.filename or "", content)
    return StaffResponse.from_member(directory.set_avatar(staff_id, current.role, avatar_url))


@router.get("/{staff_id}/score", response_model=StaffScoreResponse)
def staff_score(staff_id: str, db: Session = Depends(get_db)):
    events = get_event_log(db, staff_id)
    return StaffScoreResponse(
        staff_id=staff_id,
        score=get_score(db, staff_id),
        events=[ScoreEventResponse.model_validate(e) for e in events],
    )


@router.post("/{staff_id}/events", response_model=ScoreEventResponse, status_code=status.HTTP_201_CREATED)
def create_staff_event(
    staff_id: str,
    data: AdminEventCreate,
    db: Session = Depends(get_db),
    _admin: None = Depends(require_admin),
):
    event = record_event(
        db,
        staff_id=staff_id,
        action=data.action,
        source=data.source,
        metadata=data.metadata,
        points_override=data.points,
    )
    return ScoreEventResponse.model_validate(event)
