from pydantic import BaseModel, validator
from typing import Optional, List
from datetime import date, datetime
from ..models.student import Gender, BloodType
from ..utils.validators import SecureTextValidator, optional_text

#shared student data + sanitising
class StudentBase(BaseModel):
    full_name: str
    institution_id: str
    date_of_birth: date
    gender: Gender
    grade: str
    blood_type: Optional[BloodType] = None
    allergies: Optional[str] = None
    emergency_contact_name: str
    emergency_contact_phone: str
    email: Optional[str] = None
    address: Optional[str] = None

    @validator('full_name', 'grade', 'emergency_contact_name')
    def validate_names(cls, v):
        return SecureTextValidator.sanitize_name(v)

    @validator('institution_id')
    def validate_institution_id(cls, v):
        return SecureTextValidator.validate_code_field(v)

    @validator('emergency_contact_phone')
    def validate_emergency_phone(cls, v):
        #empty is reported by the registration check, not here
        return SecureTextValidator.validate_phone_field(v) if v.strip() else ""

    @validator('blood_type', pre=True)
    def blank_blood_type(cls, v):
        #the form sends "" for "Select..."
        return v or None

    @validator('allergies', 'email', 'address')
    def validate_text_fields(cls, v):
        return optional_text(v)

#registration contract
class StudentCreate(StudentBase):
    #only used when record-number auto sequencing is switched off
    record_number: Optional[str] = None

    @validator('record_number')
    def validate_record_number(cls, v):
        if not v:
            return None
        return SecureTextValidator.validate_code_field(v) or None

#safe partial updates
class StudentUpdate(BaseModel):
    full_name: Optional[str] = None
    institution_id: Optional[str] = None
    record_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    grade: Optional[str] = None
    blood_type: Optional[BloodType] = None
    allergies: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    @validator('full_name', 'grade', 'emergency_contact_name')
    def validate_names(cls, v):
        return SecureTextValidator.sanitize_name(v) if v else v

    @validator('institution_id', 'record_number')
    def validate_codes(cls, v):
        return SecureTextValidator.validate_code_field(v) if v else v

    @validator('emergency_contact_phone')
    def validate_emergency_phone(cls, v):
        return SecureTextValidator.validate_phone_field(v) if v else v

    @validator('allergies', 'email', 'address')
    def validate_text_fields(cls, v):
        return optional_text(v)

#standard API output
class StudentResponse(StudentBase):
    id: str
    record_number: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

#{success, student} envelope the dashboard expects
class StudentEnvelope(BaseModel):
    success: bool = True
    student: StudentResponse

class StudentListEnvelope(BaseModel):
    success: bool = True
    students: List[StudentResponse]
