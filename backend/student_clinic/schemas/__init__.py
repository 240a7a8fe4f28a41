from .auth import CurrentUser, UserProfile, UserProfileEnvelope
from .student import StudentCreate, StudentUpdate, StudentResponse, StudentEnvelope, StudentListEnvelope
from .medical_record import (
    MedicalRecordCreate, MedicalRecordResponse, MedicalRecordEnvelope, MedicalRecordListEnvelope
)
from .sick_leave import (
    SickLeaveCreate, SickLeaveStatusUpdate, SickLeaveResponse, SickLeaveEnvelope, SickLeaveListEnvelope
)
from .medicine import (
    MedicineCreate, MedicineUpdate, MedicineResponse, MedicineEnvelope, MedicineListEnvelope,
    TransactionCreate, TransactionResponse, TransactionEnvelope, TransactionListEnvelope
)
from .report import IllnessCount, MonthlyStatistics, StatisticsEnvelope

#defines what gets exported when someone imports from this module
__all__ = [
    "CurrentUser", "UserProfile", "UserProfileEnvelope",
    "StudentCreate", "StudentUpdate", "StudentResponse", "StudentEnvelope", "StudentListEnvelope",
    "MedicalRecordCreate", "MedicalRecordResponse", "MedicalRecordEnvelope", "MedicalRecordListEnvelope",
    "SickLeaveCreate", "SickLeaveStatusUpdate", "SickLeaveResponse", "SickLeaveEnvelope",
    "SickLeaveListEnvelope",
    "MedicineCreate", "MedicineUpdate", "MedicineResponse", "MedicineEnvelope", "MedicineListEnvelope",
    "TransactionCreate", "TransactionResponse", "TransactionEnvelope", "TransactionListEnvelope",
    "IllnessCount", "MonthlyStatistics", "StatisticsEnvelope",
]
