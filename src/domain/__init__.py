"""Domain layer: errors, schemas, constants."""

from .errors import ErrorCodes, PolicyRejectError
from .schemas import (
    DirectoryType,
    FieldType,
    GenerationResult,
    OutputFormat,
    QuestionnaireData,
    TemplateDefinition,
    TemplateField,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "ErrorCodes",
    "PolicyRejectError",
    "DirectoryType",
    "FieldType",
    "OutputFormat",
    "TemplateField",
    "TemplateDefinition",
    "ValidationIssue",
    "ValidationResult",
    "GenerationResult",
    "QuestionnaireData",
]
