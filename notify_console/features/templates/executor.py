"""Reconcile and apply an import batch against a template store.

Items are decided and committed one at a time. The live view only learns an
id after the store accepted it, so a failed create never blocks, renames or
turns into an overwrite for a later item carrying the same id.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from notify_console.features.templates.exceptions import TemplateStoreError
from notify_console.features.templates.reconciler import ImportReconciler, LiveStoreView
from notify_console.features.templates.schemas import ImportAction, ImportFailure, ImportSummary
from notify_console.infra.logging import remove_from_log_context, set_log_context

if TYPE_CHECKING:
    from collections.abc import Iterable

    from notify_console.features.templates.schemas import PlannedImport, Template
    from notify_console.features.templates.store import TemplateStore

logger = logging.getLogger(__name__)


async def _apply(item: PlannedImport, store: TemplateStore, summary: ImportSummary) -> None:
    action = item.decision.action
    template = item.template

    if action is ImportAction.SKIP:
        summary.skipped += 1
        logger.debug("Skipped existing template %s", item.source_id)
        return

    if action is ImportAction.OVERWRITE:
        await store.update(item.source_id, template)
        summary.overwritten += 1
    else:
        await store.create(template)
        summary.created += 1
        if action is ImportAction.RENAME:
            summary.renamed += 1
    summary.accepted.append(template)


def _sync_view(view: LiveStoreView, item: PlannedImport, error: TemplateStoreError) -> None:
    """Bring ``view`` in line with what a rejected store call revealed."""
    if error.already_exists:
        view.add(item.template.id)
    elif error.not_found and item.decision.action is ImportAction.OVERWRITE:
        view.discard(item.source_id)


async def run_import(
    candidates: Iterable[Template],
    store: TemplateStore,
    *,
    reconciler: ImportReconciler | None = None,
    existing: Iterable[str] | None = None,
    batch_id: str | None = None,
) -> ImportSummary:
    """Decide and apply each candidate against ``store`` one at a time.

    A TemplateStoreError fails only its own item; the batch continues and the
    failure is recorded in the summary. Any other exception propagates.

    Args:
        candidates: Templates to import, in order.
        store: Target template store.
        reconciler: Conflict policy; the default skips conflicting ids.
        existing: Ids already in the store; read from ``store`` when omitted.
        batch_id: Identifier attached to log records of this batch.

    Returns:
        Counters, accepted templates and per-item failures.
    """
    reconciler = reconciler or ImportReconciler()
    if existing is None:
        existing = (await store.list()).keys()
    view = LiveStoreView(existing)

    batch_id = batch_id or uuid.uuid4().hex[:12]
    set_log_context(batch_id=batch_id)
    summary = ImportSummary()

    try:
        for template in candidates:
            item = reconciler.resolve(template, view)
            try:
                await _apply(item, store, summary)
            except TemplateStoreError as e:
                _sync_view(view, item, e)
                summary.failed += 1
                summary.failures.append(
                    ImportFailure(
                        template_id=item.template.id,
                        action=item.decision.action,
                        reason=e.detail,
                    )
                )
                logger.warning(
                    "Template import item failed",
                    extra={
                        "template_id": item.template.id,
                        "action": str(item.decision.action),
                        "code": e.code,
                        "reason": e.detail,
                    },
                )
                continue

            if item.decision.action is not ImportAction.SKIP:
                view.add(item.template.id)

        logger.info(
            summary.message,
            extra={
                "created_count": summary.created,
                "renamed_count": summary.renamed,
                "overwritten_count": summary.overwritten,
                "skipped_count": summary.skipped,
                "failed_count": summary.failed,
            },
        )
        return summary
    finally:
        remove_from_log_context("batch_id")
