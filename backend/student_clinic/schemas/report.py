from pydantic import BaseModel
from typing import List


class IllnessCount(BaseModel):
    name: str
    count: int

#monthly health report; visits are month-scoped, the other two counts are global
class MonthlyStatistics(BaseModel):
    month: int
    year: int
    total_visits: int
    total_students: int
    active_sick_leaves: int
    top_illnesses: List[IllnessCount]


class StatisticsEnvelope(BaseModel):
    success: bool = True
    statistics: MonthlyStatistics
