from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campus_survey.schemas.survey_schema import as_utc, utc_now


# Body of POST /api/feedback, stored in the `feedback` collection
class FeedbackEntry(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    message: str = Field(..., min_length=1)
    timestamp: datetime = Field(default_factory=utc_now)
    userAgent: Optional[str] = None

    # Set later by the admin workflow
    status: str = "new"
    response: Optional[str] = None

    @field_validator("rating", mode="before")
    @classmethod
    def _rating_not_boolean(cls, value):
        if isinstance(value, bool):
            raise ValueError("rating must be an integer, not a boolean")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value):
        return "new" if value is None else value

    @field_validator("timestamp", mode="before")
    @classmethod
    def _default_timestamp(cls, value):
        return utc_now() if value is None else value

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
