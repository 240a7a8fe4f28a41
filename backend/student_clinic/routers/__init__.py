#router package initializer
#Each imported router is renamed
from .auth import router as auth_router
from .students import router as students_router
from .medical_records import router as medical_records_router
from .sick_leave import router as sick_leave_router
from .medicine import router as medicine_router, transactions_router as medicine_transactions_router
from .reports import router as reports_router

#defines what is publicly exposed when someone imports this package
__all__ = [
    "auth_router",
    "students_router",
    "medical_records_router",
    "sick_leave_router",
    "medicine_router",
    "medicine_transactions_router",
    "reports_router",
]
