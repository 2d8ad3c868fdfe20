from fastapi import APIRouter
from . import analytics
from . import feedback
from . import health
from . import survey

router = APIRouter()

router.include_router(survey.router, tags=["Survey"])
router.include_router(feedback.router, tags=["Feedback"])
router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
router.include_router(health.router, tags=["Health"])
