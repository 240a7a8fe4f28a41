from pydantic import BaseModel, validator
from typing import Optional, List
from datetime import date, datetime
from ..utils.validators import SecureTextValidator, optional_text


class MedicalRecordBase(BaseModel):
    student_id: str
    #defaults to the day the record is created
    visit_date: Optional[date] = None
    diagnosis: str
    symptoms: str
    treatment: str
    medicine_name: Optional[str] = None
    dosage: Optional[str] = None
    doctor_notes: Optional[str] = None
    needs_permission_letter: bool = False

    @validator('diagnosis')
    def validate_diagnosis(cls, v):
        return SecureTextValidator.sanitize_name(v)

    @validator('symptoms', 'treatment')
    def validate_clinical_text(cls, v):
        return SecureTextValidator.sanitize_notes(v)

    @validator('medicine_name', 'dosage', 'doctor_notes')
    def validate_optional_text(cls, v):
        return optional_text(v)


class MedicalRecordCreate(MedicalRecordBase):
    pass


class MedicalRecordResponse(MedicalRecordBase):
    id: str
    visit_date: date
    student_name: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class MedicalRecordEnvelope(BaseModel):
    success: bool = True
    record: MedicalRecordResponse

class MedicalRecordListEnvelope(BaseModel):
    success: bool = True
    records: List[MedicalRecordResponse]
