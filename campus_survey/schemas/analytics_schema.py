from typing import Any, List, Optional

from pydantic import BaseModel, Field


# One `$group` result row, e.g. {"_id": "CS", "count": 3}
class GroupCount(BaseModel):
    id: Any = Field(None, alias="_id")
    count: int = 0


class OverviewResponse(BaseModel):
    total: int
    byDepartment: List[GroupCount]
    byYear: List[GroupCount]


# Averages are null when no survey carries a numeric value for the field
class BudgetAverages(BaseModel):
    id: Any = Field(None, alias="_id")
    avgAcademics: Optional[float] = None
    avgFacilities: Optional[float] = None
    avgTechnology: Optional[float] = None
    avgSupport: Optional[float] = None
    avgInfrastructure: Optional[float] = None


class DetailedAnalyticsResponse(BaseModel):
    priorityAnalysis: List[GroupCount]
    budgetAnalysis: List[BudgetAverages]


class FeedbackStatsResponse(BaseModel):
    total: int
    averageRating: float
    categories: List[GroupCount]
