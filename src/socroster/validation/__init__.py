"""Validation module for reporting data-quality anomalies."""

from socroster.validation.validator import (
    DataQualityValidator,
    IssueType,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "DataQualityValidator",
    "IssueType",
    "ValidationIssue",
    "ValidationResult",
]
