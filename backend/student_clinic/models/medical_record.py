from sqlalchemy import Column, String, Date, Text, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from datetime import date
from ..database import Base
from .student import new_id, utcnow

#One row per clinic visit. Rows are never edited after creation.
class MedicalRecord(Base):
    __tablename__ = "medical_records"

    id = Column(String(36), primary_key=True, default=new_id)
    student_id = Column(String(36), ForeignKey("students.id"), nullable=False, index=True)
    visit_date = Column(Date, nullable=False, default=date.today, index=True)
    diagnosis = Column(String, nullable=False)
    symptoms = Column(Text, nullable=False)
    treatment = Column(Text, nullable=False)
    medicine_name = Column(String)
    dosage = Column(String)
    doctor_notes = Column(Text)
    needs_permission_letter = Column(Boolean, default=False, nullable=False)
    #subject id of the staff member who recorded the visit
    created_by = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    student = relationship("Student", back_populates="medical_records")

    @property
    def student_name(self):
        return self.student.full_name if self.student else None
