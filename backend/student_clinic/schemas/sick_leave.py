from pydantic import BaseModel, validator
from typing import Optional, List
from datetime import date, datetime
from ..models.sick_leave import SickLeaveStatus
from ..utils.validators import SecureTextValidator, optional_text


class SickLeaveBase(BaseModel):
    student_id: str
    start_date: date
    end_date: date
    reason: str
    notes: Optional[str] = None

    @validator('student_id')
    def strip_student_id(cls, v):
        return v.strip()

    @validator('reason')
    def validate_reason(cls, v):
        return SecureTextValidator.sanitize_notes(v)

    @validator('notes')
    def validate_notes(cls, v):
        return optional_text(v)


class SickLeaveCreate(SickLeaveBase):
    pass

#body of PUT /sick-leave/{id}
class SickLeaveStatusUpdate(BaseModel):
    status: SickLeaveStatus


class SickLeaveResponse(SickLeaveBase):
    id: str
    status: SickLeaveStatus
    duration_days: int
    student_name: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SickLeaveEnvelope(BaseModel):
    success: bool = True
    leave: SickLeaveResponse

class SickLeaveListEnvelope(BaseModel):
    success: bool = True
    leaves: List[SickLeaveResponse]
