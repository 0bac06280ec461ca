"""RFC 7807 Problem Details response bodies.

See: https://datatracker.ietf.org/doc/html/rfc7807
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """Error body returned by every failing API call.

    ``type`` is a short identifier such as ``template-not-found`` rather than
    a URI; extension members (``template_ids``, ``errors``, ...) are added
    next to the standard ones.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "type": "invalid-import-payload",
                "title": "Validation Error",
                "status": 422,
                "detail": "Import payload is not valid JSON",
                "instance": "/api/v1/templates/import",
                "line": 1,
                "column": 2,
            }
        },
    )

    type: str = Field(default="about:blank", min_length=1, description="Problem type identifier")
    title: str = Field(min_length=1, description="Summary of the problem type")
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(default=None, description="What went wrong in this request")
    instance: str | None = Field(default=None, description="Path of the failing request")


class FieldError(BaseModel):
    """One invalid request field."""

    field: str
    message: str
    type: str
    value: Any = None


class ValidationProblemDetails(ProblemDetails):
    errors: list[FieldError] = Field(default_factory=list)
