from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from ..database import get_db
from ..schemas.auth import CurrentUser
from ..schemas.report import StatisticsEnvelope
from ..services.statistics import compute_monthly_statistics
from ..utils.deps import get_current_user
from ..utils.errors import failure_boundary

router = APIRouter(prefix="/reports", tags=["reports"])

#Monthly health report
@router.get("/statistics", response_model=StatisticsEnvelope)
def get_statistics(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1, le=9999),
    limit: Optional[int] = Query(None, ge=5, le=10),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Visits and top illnesses for a month (defaults to the current month)."""
    today = date.today()
    with failure_boundary("get statistics", db):
        statistics = compute_monthly_statistics(
            db,
            month=month or today.month,
            year=year or today.year,
            limit=limit,
        )
    return StatisticsEnvelope(statistics=statistics)
