"""Errors raised for structurally malformed contract input."""


class InvalidInput(ValueError):
    """A contract record or request body is missing a required field or has the wrong type.

    Degenerate but well-formed records (zero value, no end date, unknown
    category) are scored with fallbacks and never raise this.
    """

    def __init__(self, message: str, field: str | None = None, record_id: str | None = None):
        super().__init__(message)
        self.field = field
        self.record_id = record_id

    def to_dict(self) -> dict[str, str | None]:
        return {"error": str(self), "field": self.field, "recordId": self.record_id}
