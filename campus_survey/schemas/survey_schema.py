from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # Naive timestamps from clients are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Campus resource budget split chosen by the respondent
class BudgetAllocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    academics: float = 0
    facilities: float = 0
    technology: float = 0
    support: float = 0
    infrastructure: float = 0

    @field_validator(
        "academics", "facilities", "technology", "support", "infrastructure",
        mode="before",
    )
    @classmethod
    def _null_weight_is_zero(cls, value):
        return 0 if value is None else value


# Body of POST /api/survey, stored in the `surveys` collection
class SurveyResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    # Demographics
    studentId: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    year: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    program: str = Field(..., min_length=1)
    accommodation: Optional[str] = None

    # Academic resources
    libraryUsage: Optional[str] = None
    libraryNeeds: List[str] = Field(default_factory=list)
    labAccess: Optional[float] = None
    labNeeds: List[str] = Field(default_factory=list)
    softwareNeeds: List[str] = Field(default_factory=list)

    # Digital resources
    internetQuality: Optional[float] = None
    deviceAccess: List[str] = Field(default_factory=list)
    digitalPlatforms: List[str] = Field(default_factory=list)

    # Campus facilities
    diningNeeds: List[str] = Field(default_factory=list)
    recreationNeeds: List[str] = Field(default_factory=list)
    transportNeeds: List[str] = Field(default_factory=list)
    healthcareNeeds: List[str] = Field(default_factory=list)

    # Priorities and budget
    topPriorities: List[str] = Field(default_factory=list)
    budgetAllocation: BudgetAllocation = Field(default_factory=BudgetAllocation)

    # Engagement
    suggestions: Optional[str] = None
    volunteerInterest: bool = False
    contactForInterview: bool = False

    # Metadata
    submittedAt: datetime = Field(default_factory=utc_now)
    deviceInfo: Optional[Dict[str, Any]] = None
    userAgent: Optional[str] = None

    @field_validator(
        "libraryNeeds", "labNeeds", "softwareNeeds", "deviceAccess",
        "digitalPlatforms", "diningNeeds", "recreationNeeds", "transportNeeds",
        "healthcareNeeds", "topPriorities", "budgetAllocation",
        "volunteerInterest", "contactForInterview", "submittedAt",
        mode="before",
    )
    @classmethod
    def _null_means_default(cls, value, info):
        if value is None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return value

    @field_validator("submittedAt")
    @classmethod
    def _submitted_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
