from datetime import date
from typing import List

from sqlalchemy.orm import Session, joinedload

from ..app_logger import get_logger
from ..exceptions import NotFoundError, ValidationError
from ..models.medical_record import MedicalRecord
from ..schemas.medical_record import MedicalRecordCreate
from .students import get_student

logger = get_logger("medical_records")


def create_medical_record(db: Session, data: MedicalRecordCreate, created_by: str) -> MedicalRecord:
    values = data.model_dump()
    missing = [f for f in ("student_id", "diagnosis", "symptoms", "treatment") if not values.get(f)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    # Raises NotFoundError for unknown students
    get_student(db, data.student_id)

    if values["visit_date"] is None:
        values["visit_date"] = date.today()

    record = MedicalRecord(**values, created_by=created_by)
    db.add(record)
    db.commit()
    db.refresh(record)

    logger.info("Recorded visit %s for student %s", record.id, record.student_id)
    return record


def list_medical_records_for_student(db: Session, student_id: str) -> List[MedicalRecord]:
    return (
        db.query(MedicalRecord)
        .options(joinedload(MedicalRecord.student))
        .filter(MedicalRecord.student_id == student_id)
        .order_by(MedicalRecord.visit_date.desc(), MedicalRecord.created_at.desc())
        .all()
    )


def get_medical_record(db: Session, record_id: str) -> MedicalRecord:
    record = (
        db.query(MedicalRecord)
        .options(joinedload(MedicalRecord.student))
        .filter(MedicalRecord.id == record_id)
        .first()
    )
    if not record:
        raise NotFoundError("Medical record not found")
    return record
