#used to control how models are exposed when the package is imported.
from .student import Student, Gender, BloodType
from .medical_record import MedicalRecord
from .sick_leave import SickLeave, SickLeaveStatus
from .medicine import Medicine, MedicineTransaction, MedicineUnit, TransactionType
from .kv_entry import KvEntry

#all public models
__all__ = [
    "Student", "Gender", "BloodType",
    "MedicalRecord",
    "SickLeave", "SickLeaveStatus",
    "Medicine", "MedicineTransaction", "MedicineUnit", "TransactionType",
    "KvEntry",
]
