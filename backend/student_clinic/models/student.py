#Define table columns and types.
from sqlalchemy import Column, String, Date, Text, DateTime, Enum
from sqlalchemy.orm import relationship
#to define controlled value sets.
import enum
import uuid
from datetime import datetime, timezone
from ..database import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _CaseInsensitiveEnum(enum.Enum):
    #accepts "Male" as well as "male" from the registration form
    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        return None


class Gender(_CaseInsensitiveEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class BloodType(_CaseInsensitiveEnum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"


class Student(Base):
    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String, nullable=False, index=True)
    #ID issued by the school; the record number is derived from it
    institution_id = Column(String, nullable=False, index=True)
    record_number = Column(String, unique=True, nullable=False, index=True)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(Enum(Gender), nullable=False)
    grade = Column(String, nullable=False)
    blood_type = Column(Enum(BloodType))
    allergies = Column(Text)
    emergency_contact_name = Column(String, nullable=False)
    emergency_contact_phone = Column(String, nullable=False)
    email = Column(String)
    address = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    # Relationships
    medical_records = relationship("MedicalRecord", back_populates="student")
    sick_leaves = relationship("SickLeave", back_populates="student")
