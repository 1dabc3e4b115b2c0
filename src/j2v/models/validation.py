"""Validation result model."""

from typing import Iterable, List, Optional
from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    """Outcome of validating one element or a collection of elements."""

    is_valid: bool = Field(default=True, description="True when there are no errors")
    errors: List[str] = Field(default_factory=list, description="Error messages")
    warnings: List[str] = Field(default_factory=list, description="Warning messages")

    class Config:
        """Pydantic config."""
        frozen = False

    @classmethod
    def from_messages(
        cls,
        errors: Iterable[str],
        warnings: Optional[Iterable[str]] = None,
    ) -> "ValidationResult":
        """Build a result whose validity follows from the error list."""
        errors = list(errors)
        return cls(is_valid=not errors, errors=errors, warnings=list(warnings or []))

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        """Build an invalid result with a single error."""
        return cls(is_valid=False, errors=[message], warnings=[])

    def with_prefix(self, prefix: str) -> "ValidationResult":
        """Return a copy with every message prefixed."""
        return ValidationResult(
            is_valid=self.is_valid,
            errors=[f"{prefix}{error}" for error in self.errors],
            warnings=[f"{prefix}{warning}" for warning in self.warnings],
        )

    @classmethod
    def combine(cls, results: Iterable["ValidationResult"]) -> "ValidationResult":
        """Concatenate results; valid only if every result is valid."""
        errors: List[str] = []
        warnings: List[str] = []
        is_valid = True
        for result in results:
            is_valid = is_valid and result.is_valid
            errors.extend(result.errors)
            warnings.extend(result.warnings)
        return cls(is_valid=is_valid, errors=errors, warnings=warnings)
