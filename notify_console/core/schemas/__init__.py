"""Shared API schemas."""

from .problem_details import FieldError, ProblemDetails, ValidationProblemDetails

__all__ = [
    "FieldError",
    "ProblemDetails",
    "ValidationProblemDetails",
]
