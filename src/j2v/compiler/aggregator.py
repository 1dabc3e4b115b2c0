"""Validation error aggregation.

Collections are validated as a whole before anything is processed; every
invalid item contributes one line to a single report, numbered from 1 in
input order, with that item's errors joined by commas.
"""

from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..models import ValidationResult
from .errors import ElementValidationError


def collect_errors(results: Iterable[ValidationResult], label: str) -> List[str]:
    """Return one ``<label> <n>: <errors>`` line per invalid result."""
    lines: List[str] = []
    for index, result in enumerate(results):
        if result.is_valid:
            continue
        lines.append(f"{label} {index + 1}: {', '.join(result.errors)}")
    return lines


def raise_for_errors(
    results: Iterable[ValidationResult],
    label: str,
    item_label: Optional[str] = None,
) -> None:
    """Raise one ElementValidationError if any result is invalid.

    Args:
        results: Per-item validation results, in input order.
        label: Collection label used in the report header.
        item_label: Prefix for each item line; defaults to ``label``.

    Raises:
        ElementValidationError: With the message
            ``<label> validation errors:\\n<item_label> <n>: <errors>...``.
    """
    lines = collect_errors(results, item_label or label)
    if lines:
        raise ElementValidationError(f"{label} validation errors:\n" + "\n".join(lines))


def validate_collection(
    elements: Sequence[Any],
    validator: Callable[[Any], ValidationResult],
    label: str,
    item_label: Optional[str] = None,
) -> List[ValidationResult]:
    """Validate every element and raise the aggregated report on failure.

    Returns:
        The per-element results, for callers that surface warnings.
    """
    results = [validator(element) for element in elements]
    raise_for_errors(results, label, item_label)
    return results
