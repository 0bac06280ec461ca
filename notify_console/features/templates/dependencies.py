"""FastAPI dependencies for the templates feature.

Example usage:
    from notify_console.features.templates.dependencies import TemplateServiceDep

    @router.post("/templates/import")
    async def import_templates(service: TemplateServiceDep) -> ImportSummary:
        ...
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends

from notify_console.features.templates.service import TemplateService
from notify_console.features.templates.store import TemplateStore
from notify_console.infra.external.relay_client import RelayTemplateStore


async def get_template_store() -> AsyncIterator[TemplateStore]:
    """Yield a relay-backed template store, closed after the request."""
    async with RelayTemplateStore() as store:
        yield store


TemplateStoreDep = Annotated[TemplateStore, Depends(get_template_store)]


def get_template_service(store: TemplateStoreDep) -> TemplateService:
    return TemplateService(store)


TemplateServiceDep = Annotated[TemplateService, Depends(get_template_service)]
