"""Validation result types."""

from pydantic import BaseModel, Field


class ValidationReport(BaseModel):
    """Outcome of validating a realized plan.

    Attributes:
        valid: True when no check reported an error
        errors: Error messages from every failing check, in check order
    """

    valid: bool = True
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationReport":
        return cls(valid=not errors, errors=list(errors))
