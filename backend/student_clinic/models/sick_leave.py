from sqlalchemy import Column, String, Date, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
import enum
from datetime import date
from ..database import Base
from .student import new_id, utcnow


class SickLeaveStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    #older clients still send active/completed/cancelled
    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value == wanted:
                    return member
            return _LEGACY_STATUS_NAMES.get(wanted)
        return None

    @property
    def is_terminal(self) -> bool:
        return self is not SickLeaveStatus.PENDING


_LEGACY_STATUS_NAMES = {
    "active": SickLeaveStatus.PENDING,
    "completed": SickLeaveStatus.APPROVED,
    "cancelled": SickLeaveStatus.REJECTED,
}


def duration_days(start_date: date, end_date: date) -> int:
    """Length of a leave in days, counting both the first and the last day."""
    return (end_date - start_date).days + 1


class SickLeave(Base):
    __tablename__ = "sick_leaves"

    id = Column(String(36), primary_key=True, default=new_id)
    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)
    reason = Column(Text, nullable=False)
    notes = Column(Text)
    status = Column(Enum(SickLeaveStatus), nullable=False, default=SickLeaveStatus.PENDING, index=True)
    created_by = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    student = relationship("Student", back_populates="sick_leaves")

    @property
    def duration_days(self) -> int:
        return duration_days(self.start_date, self.end_date)

    @property
    def student_name(self):
        return self.student.full_name if self.student else None
