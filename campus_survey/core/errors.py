class StoreError(Exception):
    """
    Groups the failures raised by the document stores.

    Route handlers catch `Exception` and never this class directly;
    callers that only want store failures can catch it.
    """


class ValidationError(StoreError):
    """A document does not satisfy its collection's schema."""

    def __init__(self, collection: str, field: str | None, message: str):
        self.collection = collection
        self.field = field
        self.message = message
        location = f"{field}: " if field else ""
        super().__init__(f"{collection} validation failed: {location}{message}")


class InfrastructureError(StoreError):
    """The database is unreachable or rejected an operation."""
