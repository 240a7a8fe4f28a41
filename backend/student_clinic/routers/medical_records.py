from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.auth import CurrentUser
from ..schemas.medical_record import MedicalRecordCreate, MedicalRecordEnvelope, MedicalRecordListEnvelope
from ..services import documents
from ..services import medical_records as record_service
from ..services.students import get_student
from ..utils.deps import get_current_user
from ..utils.errors import failure_boundary

router = APIRouter(prefix="/medical-records", tags=["medical-records"])

#Record a clinic visit
@router.post("", response_model=MedicalRecordEnvelope)
def create_medical_record(
    record_data: MedicalRecordCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("create medical record", db):
        record = record_service.create_medical_record(db, record_data, created_by=current_user.id)
    return MedicalRecordEnvelope(record=record)

#Visit history for one student, latest visit first
@router.get("/student/{student_id}", response_model=MedicalRecordListEnvelope)
def list_medical_records_for_student(
    student_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("get medical records", db):
        records = record_service.list_medical_records_for_student(db, student_id)
    return MedicalRecordListEnvelope(records=records)


@router.get("/{record_id}", response_model=MedicalRecordEnvelope)
def get_medical_record(
    record_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("get medical record", db):
        record = record_service.get_medical_record(db, record_id)
    return MedicalRecordEnvelope(record=record)

#Printable permission letter for a visit
@router.get("/{record_id}/permission-letter", response_class=HTMLResponse)
def get_permission_letter(
    record_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    with failure_boundary("generate permission letter", db):
        record = record_service.get_medical_record(db, record_id)
        student = get_student(db, record.student_id)
        html = documents.render_permission_letter(record, student)
    return HTMLResponse(content=html)
