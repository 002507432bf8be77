"""Input-validation errors raised by the plan editor.

Each error carries a stable ``code`` that the REST layer returns verbatim.
"""
from __future__ import annotations


class ValidationError(ValueError):
    code = "ValidationError"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        return {"error": self.code, "message": str(self), "field": self.field}


class PercentageOutOfRange(ValidationError):
    code = "PercentageOutOfRange"


class CommissionSumExceeded(ValidationError):
    code = "CommissionSumExceeded"


class UnknownField(ValidationError):
    code = "UnknownField"


class ReadOnlyField(ValidationError):
    code = "ReadOnlyField"


class UnknownAgent(ValidationError):
    code = "UnknownAgent"


class DuplicateAgent(ValidationError):
    code = "DuplicateAgent"


class UnsupportedTimeFrame(ValidationError):
    code = "UnsupportedTimeFrame"
