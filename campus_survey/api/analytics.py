from fastapi import APIRouter, Depends, HTTPException, status
from typing import Any, Dict, List
import logging

from campus_survey.db.collections import SURVEYS
from campus_survey.db.mongodb import get_store
from campus_survey.db.store import DocumentStore
from campus_survey.schemas.analytics_schema import (
    BudgetAverages,
    DetailedAnalyticsResponse,
    GroupCount,
    OverviewResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)

# Fields returned for interview candidates
INTERVIEW_PROJECTION = {
    "_id": 0,
    "name": 1,
    "email": 1,
    "department": 1,
    "year": 1,
    "topPriorities": 1,
    "suggestions": 1,
    "submittedAt": 1,
}

BUDGET_FIELDS = ["academics", "facilities", "technology", "support", "infrastructure"]


def _count_by(field: str) -> List[Dict[str, Any]]:
    return [{"$group": {"_id": f"${field}", "count": {"$sum": 1}}}]


def _read_failure(label: str, e: Exception) -> HTTPException:
    logger.error(f"{label} error: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(e)
    )


@router.get("/overview", response_model=OverviewResponse, summary="Survey totals by department and year")
async def get_overview(store: DocumentStore = Depends(get_store)):
    try:
        total = await store.count(SURVEYS)
        by_department = await store.aggregate(SURVEYS, _count_by("department"))
        by_year = await store.aggregate(SURVEYS, _count_by("year"))
    except Exception as e:
        raise _read_failure("Analytics overview", e)

    return OverviewResponse(
        total=total,
        byDepartment=[GroupCount(**item) for item in by_department],
        byYear=[GroupCount(**item) for item in by_year]
    )


@router.get("/interview-candidates", response_model=List[Dict[str, Any]], summary="Respondents open to an interview")
async def get_interview_candidates(store: DocumentStore = Depends(get_store)):
    try:
        return await store.find(
            SURVEYS,
            filter={"contactForInterview": True},
            projection=INTERVIEW_PROJECTION,
        )
    except Exception as e:
        raise _read_failure("Interview candidates", e)


@router.get("/detailed", response_model=DetailedAnalyticsResponse, summary="Priority ranking and budget averages")
async def get_detailed_analytics(store: DocumentStore = Depends(get_store)):
    """
    - priorityAnalysis: how often each value appears in `topPriorities`, most frequent first
    - budgetAnalysis: mean of every `budgetAllocation` weight across all surveys
    """
    priority_pipeline = [
        {"$unwind": "$topPriorities"},
        {"$group": {"_id": "$topPriorities", "count": {"$sum": 1}}},
        {"$sort": {"count": -1}}
    ]
    budget_pipeline = [
        {
            "$group": {
                "_id": None,
                **{
                    f"avg{name.capitalize()}": {"$avg": f"$budgetAllocation.{name}"}
                    for name in BUDGET_FIELDS
                },
            }
        }
    ]

    try:
        priority_result = await store.aggregate(SURVEYS, priority_pipeline)
        budget_result = await store.aggregate(SURVEYS, budget_pipeline)
    except Exception as e:
        raise _read_failure("Detailed analytics", e)

    return DetailedAnalyticsResponse(
        priorityAnalysis=[GroupCount(**item) for item in priority_result],
        budgetAnalysis=[BudgetAverages(**item) for item in budget_result]
    )
