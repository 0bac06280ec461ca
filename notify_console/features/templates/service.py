"""Template preview, import and export orchestration.

Used by both the HTTP API and the CLI; presentation layers decide how to
report the structured results returned here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from notify_console.core.exceptions import NotFoundException
from notify_console.core.settings import get_template_settings
from notify_console.features.templates.executor import run_import
from notify_console.features.templates.reconciler import (
    ImportReconciler,
    UniqueIdFactory,
    plan_import,
)
from notify_console.features.templates.renderer import PreviewRenderer, get_preview_renderer
from notify_console.features.templates.transfer import build_export_payload

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from notify_console.features.templates.schemas import (
        ImportSummary,
        PlannedImport,
        RenderedTemplate,
        Template,
        TemplateExport,
    )
    from notify_console.features.templates.store import TemplateStore

logger = logging.getLogger(__name__)


class TemplateService:
    """Service layer over a TemplateStore."""

    def __init__(
        self,
        store: TemplateStore,
        renderer: PreviewRenderer | None = None,
        id_factory: UniqueIdFactory | None = None,
    ) -> None:
        self.store = store
        self.renderer = renderer or get_preview_renderer()
        self.id_factory = id_factory or UniqueIdFactory(
            random_length=get_template_settings().rename_random_length,
        )

    # ──────────────────────────────────────────────────────────────
    # Preview
    # ──────────────────────────────────────────────────────────────

    def preview(self, content: str, data: Mapping[str, Any] | None = None) -> str:
        return self.renderer.render(content, data)

    def preview_fields(
        self,
        template: Template,
        data: Mapping[str, Any] | None = None,
    ) -> RenderedTemplate:
        return self.renderer.render_fields(template, data)

    # ──────────────────────────────────────────────────────────────
    # Import / export
    # ──────────────────────────────────────────────────────────────

    async def plan_import(
        self,
        candidates: Sequence[Template],
        *,
        overwrite: bool = False,
        generate_new_ids: bool = False,
    ) -> list[PlannedImport]:
        """Preview the decisions for ``candidates`` without changing the store.

        Every non-skip item is assumed to succeed; ``import_templates`` may
        decide differently for later items when a store call fails.
        """
        existing = await self.store.list()
        return plan_import(
            candidates,
            existing.keys(),
            overwrite,
            generate_new_ids,
            id_factory=self.id_factory,
        )

    async def import_templates(
        self,
        candidates: Sequence[Template],
        *,
        overwrite: bool = False,
        generate_new_ids: bool = False,
    ) -> ImportSummary:
        """Reconcile and apply candidates one at a time.

        Args:
            candidates: Templates to import, in order.
            overwrite: Replace templates whose id already exists.
            generate_new_ids: Import conflicting templates under a new id.

        Returns:
            Summary of the batch.
        """
        logger.info(
            "Importing templates",
            extra={
                "candidates": len(candidates),
                "overwrite": overwrite,
                "generate_new_ids": generate_new_ids,
            },
        )
        reconciler = ImportReconciler(
            overwrite=overwrite,
            generate_new_ids=generate_new_ids,
            id_factory=self.id_factory,
        )
        return await run_import(candidates, self.store, reconciler=reconciler)

    async def export(self, ids: Iterable[str] | None = None) -> TemplateExport:
        """Export all templates, or only ``ids`` in the given order.

        Raises:
            NotFoundException: If any requested id is not in the store.
        """
        templates = await self.store.list()
        if not ids:
            return build_export_payload(templates.values())

        wanted = list(dict.fromkeys(ids))
        missing = [template_id for template_id in wanted if template_id not in templates]
        if missing:
            raise NotFoundException(
                detail=f"Templates not found: {', '.join(missing)}",
                type="template-not-found",
                extra={"template_ids": missing},
            )
        return build_export_payload(templates[template_id] for template_id in wanted)
