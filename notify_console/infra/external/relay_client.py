"""Template store backed by the notify relay admin API.

The relay wraps every response as ``{"code": int, "msg": str, "data": ...}``
where ``code == 0`` means success. Business errors usually arrive with HTTP 200
and a non-zero code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from notify_console.core.settings import get_relay_settings
from notify_console.features.templates.exceptions import TemplateStoreError
from notify_console.features.templates.schemas import Template
from notify_console.infra.external.base_client import BaseHTTPClient
from notify_console.utils.retry import RetryError

if TYPE_CHECKING:
    from notify_console.core.settings.relay import RelaySettings

logger = logging.getLogger(__name__)

SUCCESS_CODE = 0


class RelayTemplateStore(BaseHTTPClient):
    """TemplateStore implementation over the relay's ``/admin/templates``.

    Usage:
        async with RelayTemplateStore() as store:
            templates = await store.list()
    """

    def __init__(
        self,
        settings: RelaySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        retry_delay: float = 1.0,
    ) -> None:
        """Initialize the relay template client.

        Args:
            settings: Relay connection settings. Loaded from the environment
                when omitted.
            transport: Optional httpx transport override.
            retry_delay: Initial backoff delay between transport retries.
        """
        settings = settings or get_relay_settings()
        self.templates_path = settings.templates_path.rstrip("/")
        super().__init__(
            base_url=settings.base_url,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            headers=settings.auth_headers,
            transport=transport,
            retry_delay=retry_delay,
        )

    def _item_path(self, template_id: str) -> str:
        return f"{self.templates_path}/{quote(template_id, safe='')}"

    async def _call(
        self,
        method: str,
        path: str,
        *,
        template_id: str | None = None,
        **kwargs: Any,
    ) -> Any:
        """Send a request and unwrap the relay envelope.

        Raises:
            TemplateStoreError: On transport failure, HTTP error status,
                malformed body or a non-zero relay code.
        """
        try:
            body = await self.request(method, path, **kwargs)
        except RetryError as e:
            raise TemplateStoreError(
                f"Relay unreachable: {e.last_exception}",
                template_id=template_id,
                type="relay-unavailable",
            ) from e
        except httpx.HTTPStatusError as e:
            code, message = _envelope_error(e.response)
            raise TemplateStoreError(
                message or f"Relay returned HTTP {e.response.status_code}",
                code=code,
                template_id=template_id,
                extra={"status_code": e.response.status_code},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise TemplateStoreError(
                f"Relay request failed: {e}",
                template_id=template_id,
            ) from e

        if not isinstance(body, dict) or "code" not in body:
            raise TemplateStoreError(
                "Relay returned an unexpected response body",
                template_id=template_id,
            )
        if body["code"] != SUCCESS_CODE:
            raise TemplateStoreError(
                body.get("msg") or f"Relay returned code {body['code']}",
                code=body["code"],
                template_id=template_id,
            )
        return body.get("data")

    async def list(self) -> dict[str, Template]:
        data = await self._call("GET", self.templates_path)
        if isinstance(data, dict):
            # The map key is the stored id; records may omit or disagree with it
            records = [
                {**record, "id": key} if isinstance(record, dict) else record
                for key, record in data.items()
            ]
        else:
            records = data or []
        try:
            templates = [Template.model_validate(record) for record in records]
        except ValidationError as e:
            raise TemplateStoreError(f"Relay returned an invalid template: {e}") from e
        return {t.id: t for t in templates}

    async def create(self, template: Template) -> None:
        await self._call(
            "POST",
            self.templates_path,
            template_id=template.id,
            json=template.model_dump(),
        )

    async def update(self, template_id: str, template: Template) -> None:
        payload = template.model_dump()
        payload["id"] = template_id
        await self._call(
            "PUT",
            self._item_path(template_id),
            template_id=template_id,
            json=payload,
        )

    async def delete(self, template_id: str) -> None:
        await self._call("DELETE", self._item_path(template_id), template_id=template_id)


def _envelope_error(response: httpx.Response) -> tuple[int | None, str | None]:
    try:
        body = response.json()
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None
    return body.get("code"), body.get("msg")
