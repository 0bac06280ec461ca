"""Application exception hierarchy.

Every exception maps onto an RFC 7807 Problem Details document; the HTTP
layer renders them in ``app/exception_handlers.py`` and the CLI prints their
``detail``.
"""

from __future__ import annotations

from typing import Any, ClassVar

_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


class AppException(Exception):
    """Base application exception.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Problem type identifier.
        title: Short summary of the problem type.
        instance: URI of the request that failed, filled in by the HTTP layer
            when left empty.
        extra: Additional members merged into the problem document.

    Example:
        ```python
        raise AppException(
            status_code=404,
            detail="Template welcome not found",
            type="template-not-found",
            extra={"template_id": "welcome"},
        )
        ```
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        return _TITLES.get(status_code, "Error")


class _FixedStatusException(AppException):
    """AppException whose status code and title are set by the subclass."""

    status: ClassVar[int]
    default_type: ClassVar[str]
    default_title: ClassVar[str]

    def __init__(
        self,
        detail: str,
        type: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=self.status,
            detail=detail,
            type=type or self.default_type,
            title=self.default_title,
            instance=instance,
            extra=extra,
        )


class NotFoundException(_FixedStatusException):
    """A requested template (or other resource) does not exist."""

    status = 404
    default_type = "not-found"
    default_title = "Not Found"


class ValidationException(_FixedStatusException):
    """Input was syntactically valid HTTP but unusable, e.g. a broken import payload."""

    status = 422
    default_type = "validation-error"
    default_title = "Validation Error"


class ExternalServiceException(_FixedStatusException):
    """An upstream service, such as the relay admin API, rejected or failed a call."""

    status = 502
    default_type = "external-service-error"
    default_title = "Bad Gateway"
