import calendar
from collections import Counter
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ..app_logger import get_logger
from ..config import settings
from ..exceptions import ValidationError
from ..models.medical_record import MedicalRecord
from ..models.sick_leave import SickLeave, SickLeaveStatus
from ..models.student import Student
from ..schemas.report import IllnessCount, MonthlyStatistics

logger = get_logger("statistics")

UNKNOWN_DIAGNOSIS = "Unknown"


def month_bounds(month: int, year: int):
    """First and last calendar day of the month, both inclusive."""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise ValidationError("Invalid year")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def compute_monthly_statistics(
    db: Session,
    month: int,
    year: int,
    limit: Optional[int] = None,
) -> MonthlyStatistics:
    """Visits and most common diagnoses for one month.

    Diagnoses are counted by exact string, so "Flu" and "flu" are separate
    entries. ``total_students`` and ``active_sick_leaves`` are totals across
    all time, not limited to the month.
    """
    start, end = month_bounds(month, year)
    limit = limit or settings.top_illnesses_limit

    diagnoses = [
        diagnosis
        for (diagnosis,) in db.query(MedicalRecord.diagnosis)
        .filter(MedicalRecord.visit_date >= start, MedicalRecord.visit_date <= end)
        .order_by(MedicalRecord.visit_date, MedicalRecord.created_at)
        .all()
    ]

    # most_common keeps first-seen order between equal counts
    counts = Counter(diagnosis or UNKNOWN_DIAGNOSIS for diagnosis in diagnoses)
    top_illnesses = [IllnessCount(name=name, count=count) for name, count in counts.most_common(limit)]

    total_students = db.query(Student).count()
    active_sick_leaves = db.query(SickLeave).filter(SickLeave.status == SickLeaveStatus.PENDING).count()

    logger.debug("Statistics for %02d/%d: %d visit(s)", month, year, len(diagnoses))
    return MonthlyStatistics(
        month=month,
        year=year,
        total_visits=len(diagnoses),
        total_students=total_students,
        active_sick_leaves=active_sick_leaves,
        top_illnesses=top_illnesses,
    )
