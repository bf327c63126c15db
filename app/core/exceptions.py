# app/core/exceptions.py


class AppError(Exception):
    """Base class for errors the HTTP layer knows how to render."""


class InvalidRecord(AppError):
    """A record failed validation and was not written."""

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        summary = "; ".join(
            f"{field} {msg}" for field, msgs in errors.items() for msg in msgs
        )
        super().__init__(f"Validation failed: {summary}")


class RecordNotFound(AppError):
    def __init__(self, model: str, record_id):
        self.model = model
        self.record_id = record_id
        super().__init__(f"{model} not found")


class AuthRequired(AppError):
    def __init__(self, reason: str = "Authentication required"):
        self.reason = reason
        super().__init__(reason)
