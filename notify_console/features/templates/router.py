"""Template preview, import and export REST endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Query

from notify_console.features.templates.dependencies import TemplateServiceDep
from notify_console.features.templates.schemas import (
    ImportRequest,
    ImportSummary,
    PreviewRequest,
    PreviewResponse,
    RenderedTemplate,
    TemplateExport,
    TemplatePreviewRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.post(
    "/preview",
    response_model=PreviewResponse,
    summary="Preview a template body",
    description="Render a template body against sample data merged with caller values.",
)
async def preview_template(
    body: PreviewRequest,
    service: TemplateServiceDep,
) -> PreviewResponse:
    return PreviewResponse(rendered=service.preview(body.content, body.data))


@router.post(
    "/preview/fields",
    response_model=RenderedTemplate,
    summary="Preview every rendered field of a template",
)
async def preview_template_fields(
    body: TemplatePreviewRequest,
    service: TemplateServiceDep,
) -> RenderedTemplate:
    return service.preview_fields(body.template, body.data)


@router.post(
    "/import",
    response_model=ImportSummary,
    summary="Import templates",
    description=(
        "Reconcile a batch of templates against the relay store. Conflicting ids "
        "are overwritten, imported under a generated id, or skipped."
    ),
)
async def import_templates(
    body: ImportRequest,
    service: TemplateServiceDep,
) -> ImportSummary:
    summary = await service.import_templates(
        body.candidates,
        overwrite=body.overwrite,
        generate_new_ids=body.generate_new_ids,
    )
    logger.info(summary.message)
    return summary


@router.get(
    "/export",
    response_model=TemplateExport,
    response_model_by_alias=True,
    summary="Export templates",
    description="Export all templates, or only the ones named by repeated `ids` parameters.",
)
async def export_templates(
    service: TemplateServiceDep,
    ids: Annotated[list[str] | None, Query(description="Template ids to export")] = None,
) -> TemplateExport:
    return await service.export(ids)
