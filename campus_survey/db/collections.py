from typing import Any, Dict, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from campus_survey.core.errors import ValidationError
from campus_survey.schemas.feedback_schema import FeedbackEntry
from campus_survey.schemas.survey_schema import SurveyResponse

SURVEYS = "surveys"
FEEDBACK = "feedback"

COLLECTION_SCHEMAS: Dict[str, Type[BaseModel]] = {
    SURVEYS: SurveyResponse,
    FEEDBACK: FeedbackEntry,
}


def prepare_document(collection: str, data: Any) -> Dict[str, Any]:
    """
    Validate `data` against the collection's schema and return the document
    to store: defaults filled in, unknown fields dropped, absent optional
    fields left out.
    """
    schema = COLLECTION_SCHEMAS.get(collection)
    if schema is None:
        raise ValueError(f"Unknown collection: {collection}")

    if not isinstance(data, dict):
        raise ValidationError(collection, None, "document must be a JSON object")

    try:
        record = schema.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError(collection, field, first["msg"]) from e

    return record.model_dump(exclude_none=True)
