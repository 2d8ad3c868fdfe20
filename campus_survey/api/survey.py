from fastapi import APIRouter, Depends, HTTPException, Request, status
import logging

from campus_survey.db.collections import SURVEYS
from campus_survey.db.mongodb import get_store
from campus_survey.db.store import DocumentStore


router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/survey", status_code=status.HTTP_201_CREATED)
async def submit_survey(request: Request, store: DocumentStore = Depends(get_store)):
    # Validation and database failures both answer 400
    try:
        payload = await request.json()
        inserted_id = await store.insert(SURVEYS, payload)

    except Exception as e:
        logger.error(f"Error saving survey: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"Survey submitted: {payload.get('name')} {payload.get('department')}")
    return {
        "message": "Survey submitted successfully!",
        "id": inserted_id
    }
