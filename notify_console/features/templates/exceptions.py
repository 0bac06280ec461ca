"""Custom exceptions for the templates feature."""

from __future__ import annotations

from typing import Any

from notify_console.core.exceptions import ExternalServiceException, ValidationException

# Relay admin API business codes for templates.
RELAY_TEMPLATE_NOT_FOUND = 3001
RELAY_TEMPLATE_EXISTS = 3002


class TemplateStoreError(ExternalServiceException):
    """Raised when the template store rejects or fails an operation.

    Attributes:
        code: Relay business code, when the relay answered with one.
        template_id: Template the failing operation targeted.
    """

    def __init__(
        self,
        detail: str,
        *,
        code: int | None = None,
        template_id: str | None = None,
        type: str = "template-store-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.template_id = template_id
        context = {"code": code, "template_id": template_id}
        context.update(extra or {})
        super().__init__(
            detail=detail,
            type=type,
            extra={k: v for k, v in context.items() if v is not None},
        )

    @property
    def not_found(self) -> bool:
        return self.code == RELAY_TEMPLATE_NOT_FOUND

    @property
    def already_exists(self) -> bool:
        return self.code == RELAY_TEMPLATE_EXISTS


class TemplatePayloadError(ValidationException):
    """Raised when an import payload cannot be decoded into templates."""

    def __init__(self, detail: str, *, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail=detail, type="invalid-import-payload", extra=extra)
