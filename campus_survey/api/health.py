from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from campus_survey.db.mongodb import get_store
from campus_survey.db.store import DocumentStore

router = APIRouter()


@router.get("/health")
async def health(store: DocumentStore = Depends(get_store)):
    connected = await store.is_connected()
    return {
        "status": "OK",
        "message": "Campus Survey API is running!",
        "timestamp": datetime.now(timezone.utc),
        "database": "Connected" if connected else "Disconnected"
    }
