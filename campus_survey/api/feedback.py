from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import Any, Dict, List
import logging

from campus_survey.db.collections import FEEDBACK
from campus_survey.db.mongodb import get_store
from campus_survey.db.store import DocumentStore
from campus_survey.schemas.analytics_schema import FeedbackStatsResponse, GroupCount

router = APIRouter()
logger = logging.getLogger(__name__)

FEEDBACK_LIST_LIMIT = 100


@router.post("/feedback", status_code=status.HTTP_201_CREATED)
async def submit_feedback(request: Request, store: DocumentStore = Depends(get_store)):
    # Validation and database failures both answer 400
    try:
        payload = await request.json()
        inserted_id = await store.insert(FEEDBACK, payload)

    except Exception as e:
        logger.error(f"Error saving feedback: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"Feedback submitted: {payload.get('name')} {payload.get('category')}")
    return {
        "message": "Feedback submitted successfully!",
        "id": inserted_id
    }


@router.get("/feedback", response_model=List[Dict[str, Any]], summary="Latest feedback entries")
async def list_feedback(store: DocumentStore = Depends(get_store)):
    """
    Newest entries first, at most 100.
    """
    try:
        return await store.find(
            FEEDBACK,
            sort=[("timestamp", -1)],
            limit=FEEDBACK_LIST_LIMIT,
        )

    except Exception as e:
        logger.error(f"Get feedback error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get("/feedback/stats", response_model=FeedbackStatsResponse, summary="Feedback statistics")
async def get_feedback_stats(store: DocumentStore = Depends(get_store)):
    try:
        total = await store.count(FEEDBACK)
        rating_result = await store.aggregate(FEEDBACK, [
            {"$group": {"_id": None, "avgRating": {"$avg": "$rating"}}}
        ])
        category_result = await store.aggregate(FEEDBACK, [
            {"$group": {"_id": "$category", "count": {"$sum": 1}}}
        ])

    except Exception as e:
        logger.error(f"Feedback stats error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    # no entries -> no group row; a null average also reads as 0
    average_rating = (rating_result[0].get("avgRating") if rating_result else None) or 0

    return FeedbackStatsResponse(
        total=total,
        averageRating=average_rating,
        categories=[GroupCount(**item) for item in category_result]
    )
