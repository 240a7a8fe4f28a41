from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..models.sick_leave import SickLeaveStatus
from ..schemas.auth import CurrentUser
from ..schemas.sick_leave import (
    SickLeaveCreate, SickLeaveStatusUpdate, SickLeaveEnvelope, SickLeaveListEnvelope
)
from ..services import documents
from ..services import sick_leave as leave_service
from ..services.students import get_student
from ..utils.deps import get_current_user
from ..utils.errors import failure_boundary

router = APIRouter(prefix="/sick-leave", tags=["sick-leave"])

#Create a sick leave in pending status
@router.post("", response_model=SickLeaveEnvelope)
def create_sick_leave(
    leave_data: SickLeaveCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("create sick leave", db):
        leave = leave_service.create_sick_leave(db, leave_data, created_by=current_user.id)
    return SickLeaveEnvelope(leave=leave)

#All sick leaves, optionally one status or one student
@router.get("", response_model=SickLeaveListEnvelope)
def list_sick_leaves(
    status: Optional[SickLeaveStatus] = None,
    student_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Sick leaves ordered by start date, latest first."""
    with failure_boundary("get sick leaves", db):
        leaves = leave_service.list_sick_leaves(db, status=status, student_id=student_id)
    return SickLeaveListEnvelope(leaves=leaves)


@router.get("/{leave_id}", response_model=SickLeaveEnvelope)
def get_sick_leave(
    leave_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("get sick leave", db):
        leave = leave_service.get_sick_leave(db, leave_id)
    return SickLeaveEnvelope(leave=leave)

#Approve or reject a pending leave
@router.put("/{leave_id}", response_model=SickLeaveEnvelope)
def update_sick_leave_status(
    leave_id: str,
    status_update: SickLeaveStatusUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("update sick leave", db):
        leave = leave_service.transition_sick_leave(db, leave_id, status_update.status)
    return SickLeaveEnvelope(leave=leave)

#Printable certificate
@router.get("/{leave_id}/certificate", response_class=HTMLResponse)
def get_sick_leave_certificate(
    leave_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("generate sick leave certificate", db):
        leave = leave_service.get_sick_leave(db, leave_id)
        student = get_student(db, leave.student_id)
        html = documents.render_sick_leave_certificate(leave, student)
    return HTMLResponse(content=html)
