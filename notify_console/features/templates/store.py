"""Template store protocol and in-memory implementation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from notify_console.features.templates.exceptions import (
    RELAY_TEMPLATE_EXISTS,
    RELAY_TEMPLATE_NOT_FOUND,
    TemplateStoreError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from notify_console.features.templates.schemas import Template

logger = logging.getLogger(__name__)


@runtime_checkable
class TemplateStore(Protocol):
    """Persistence boundary for templates.

    Every method raises TemplateStoreError when the operation fails.
    """

    async def list(self) -> dict[str, Template]: ...

    async def create(self, template: Template) -> None: ...

    async def update(self, template_id: str, template: Template) -> None: ...

    async def delete(self, template_id: str) -> None: ...


class InMemoryTemplateStore:
    """Dict-backed TemplateStore for tests and offline use.

    Mirrors the relay's rules: creating an existing id and updating or
    deleting a missing id both fail.
    """

    def __init__(self, templates: Iterable[Template] = ()) -> None:
        self._templates: dict[str, Template] = {t.id: t for t in templates}

    async def list(self) -> dict[str, Template]:
        return dict(self._templates)

    async def create(self, template: Template) -> None:
        if template.id in self._templates:
            raise TemplateStoreError(
                f"Template {template.id} already exists",
                code=RELAY_TEMPLATE_EXISTS,
                template_id=template.id,
            )
        self._templates[template.id] = template
        logger.debug("Created template %s", template.id)

    async def update(self, template_id: str, template: Template) -> None:
        if template_id not in self._templates:
            raise TemplateStoreError(
                f"Template {template_id} not found",
                code=RELAY_TEMPLATE_NOT_FOUND,
                template_id=template_id,
            )
        self._templates[template_id] = template.model_copy(update={"id": template_id})
        logger.debug("Updated template %s", template_id)

    async def delete(self, template_id: str) -> None:
        if self._templates.pop(template_id, None) is None:
            raise TemplateStoreError(
                f"Template {template_id} not found",
                code=RELAY_TEMPLATE_NOT_FOUND,
                template_id=template_id,
            )
        logger.debug("Deleted template %s", template_id)
