import re
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..app_logger import get_logger
from ..config import settings
from ..exceptions import ConflictError, NotFoundError, ValidationError
from ..models.student import Student, utcnow
from ..schemas.student import StudentCreate, StudentUpdate

logger = get_logger("students")

RECORD_NUMBER_SEPARATOR = " -- "
_SEQUENCE_SUFFIX = re.compile(r"--\s*(\d+)\s*$")

REQUIRED_FIELDS = (
    "full_name",
    "institution_id",
    "date_of_birth",
    "gender",
    "grade",
    "emergency_contact_name",
    "emergency_contact_phone",
)


def sequence_suffix(record_number: str) -> Optional[int]:
    match = _SEQUENCE_SUFFIX.search(record_number or "")
    return int(match.group(1)) if match else None


def next_record_number(db: Session, institution_id: str) -> str:
    """Next free "<institution id> -- <n>" where n is one past the largest suffix in use."""
    suffixes = []
    for (record_number,) in db.query(Student.record_number).all():
        suffix = sequence_suffix(record_number)
        if suffix is not None:
            suffixes.append(suffix)
    next_sequence = max(suffixes, default=0) + 1
    return f"{institution_id}{RECORD_NUMBER_SEPARATOR}{next_sequence}"


def _check_required(values: dict, fields) -> None:
    missing = [field for field in fields if values.get(field) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def register_student(db: Session, data: StudentCreate, auto_sequence: Optional[bool] = None) -> Student:
    values = data.model_dump()
    _check_required(values, REQUIRED_FIELDS)

    if auto_sequence is None:
        auto_sequence = settings.record_number_auto_sequence
    if auto_sequence:
        values["record_number"] = next_record_number(db, data.institution_id)
    elif not values.get("record_number"):
        values["record_number"] = data.institution_id

    if db.query(Student.id).filter(Student.record_number == values["record_number"]).first():
        raise ConflictError(f"Record number {values['record_number']} already exists")

    student = Student(**values)
    db.add(student)
    try:
        db.commit()
    except IntegrityError:
        #a concurrent registration took the same number between read and write
        db.rollback()
        raise ConflictError(f"Record number {values['record_number']} already exists")
    db.refresh(student)

    logger.info("Registered student %s with record number %s", student.id, student.record_number)
    return student


def list_students(db: Session, search: Optional[str] = None) -> List[Student]:
    query = db.query(Student)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Student.full_name.ilike(pattern),
                Student.record_number.ilike(pattern),
                Student.institution_id.ilike(pattern),
            )
        )
    return query.order_by(Student.created_at.desc(), Student.full_name).all()


def get_student(db: Session, student_id: str) -> Student:
    student = db.query(Student).filter(Student.id == student_id).first()
    if not student:
        raise NotFoundError("Student not found")
    return student


def update_student(db: Session, student_id: str, data: StudentUpdate) -> Student:
    student = get_student(db, student_id)

    update_data = data.model_dump(exclude_unset=True)
    #required fields may be changed but not blanked
    _check_required(update_data, [f for f in REQUIRED_FIELDS + ("record_number",) if f in update_data])

    new_number = update_data.get("record_number")
    if new_number and new_number != student.record_number:
        taken = db.query(Student.id).filter(
            Student.record_number == new_number, Student.id != student.id
        ).first()
        if taken:
            raise ConflictError(f"Record number {new_number} already exists")

    for field, value in update_data.items():
        setattr(student, field, value)
    student.updated_at = utcnow()

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Record number {new_number} already exists")
    db.refresh(student)

    logger.info("Updated student %s (%s)", student.id, ", ".join(sorted(update_data)) or "no fields")
    return student
