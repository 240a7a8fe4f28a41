from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from ..app_logger import get_logger
from ..exceptions import InvalidStateError, NotFoundError, ValidationError
from ..models.sick_leave import SickLeave, SickLeaveStatus, duration_days
from ..models.student import utcnow
from ..schemas.sick_leave import SickLeaveCreate
from .students import get_student

logger = get_logger("sick_leave")


def create_sick_leave(db: Session, data: SickLeaveCreate, created_by: str) -> SickLeave:
    if not data.student_id:
        raise ValidationError("Student is required")
    if not data.reason:
        raise ValidationError("Reason is required")
    if data.end_date < data.start_date:
        raise ValidationError("End date must not be before start date")

    get_student(db, data.student_id)

    leave = SickLeave(
        **data.model_dump(),
        status=SickLeaveStatus.PENDING,
        created_by=created_by,
    )
    db.add(leave)
    db.commit()
    db.refresh(leave)

    logger.info(
        "Created sick leave %s for student %s (%d day(s))",
        leave.id, leave.student_id, duration_days(leave.start_date, leave.end_date),
    )
    return leave


def list_sick_leaves(
    db: Session,
    status: Optional[SickLeaveStatus] = None,
    student_id: Optional[str] = None,
) -> List[SickLeave]:
    query = db.query(SickLeave).options(joinedload(SickLeave.student))
    if status:
        query = query.filter(SickLeave.status == status)
    if student_id:
        query = query.filter(SickLeave.student_id == student_id)
    return query.order_by(SickLeave.start_date.desc(), SickLeave.created_at.desc()).all()


def get_sick_leave(db: Session, leave_id: str) -> SickLeave:
    leave = (
        db.query(SickLeave)
        .options(joinedload(SickLeave.student))
        .filter(SickLeave.id == leave_id)
        .first()
    )
    if not leave:
        raise NotFoundError("Sick leave not found")
    return leave


def transition_sick_leave(db: Session, leave_id: str, new_status: SickLeaveStatus) -> SickLeave:
    """Move a pending leave to approved or rejected. Terminal leaves are rejected with InvalidStateError."""
    leave = get_sick_leave(db, leave_id)

    if leave.status.is_terminal:
        raise InvalidStateError(f"Sick leave is already {leave.status.value}")
    if not new_status.is_terminal:
        raise InvalidStateError("Sick leave can only be approved or rejected")

    leave.status = new_status
    leave.updated_at = utcnow()
    db.commit()
    db.refresh(leave)

    logger.info("Sick leave %s moved to %s", leave.id, new_status.value)
    return leave
