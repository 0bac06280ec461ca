"""Template preview, import and export commands.

Commands talk to the relay admin API by default. ``--store-file`` points them
at a local export document instead, which is read as the store and rewritten
after an import.
"""

from __future__ import annotations

import json
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from notify_console.cli.utils import coro, detail, error, header, info, success, warning
from notify_console.core.exceptions import AppException
from notify_console.features.templates.renderer import PreviewRenderer
from notify_console.features.templates.service import TemplateService
from notify_console.features.templates.store import InMemoryTemplateStore
from notify_console.features.templates.transfer import (
    build_export_payload,
    dump_export_payload,
    parse_import_payload,
)
from notify_console.infra.external.relay_client import RelayTemplateStore

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from notify_console.features.templates.store import TemplateStore


@asynccontextmanager
async def open_store(
    store_file: Path | None, *, persist: bool = False
) -> AsyncIterator[TemplateStore]:
    """Yield the relay store, or a local file-backed one when ``store_file`` is set."""
    if store_file is None:
        async with RelayTemplateStore() as store:
            yield store
        return

    templates = parse_import_payload(store_file.read_bytes()) if store_file.exists() else []
    store = InMemoryTemplateStore(templates)
    yield store
    if persist:
        current = await store.list()
        document = dump_export_payload(build_export_payload(current.values()))
        store_file.write_text(document, encoding="utf-8")


def _load_data(data: str | None, data_file: Path | None) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for source, text in (
        ("--data-file", data_file.read_text(encoding="utf-8") if data_file else None),
        ("--data", data),
    ):
        if text is None:
            continue
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e.msg}", param_hint=source) from e
        if not isinstance(decoded, dict):
            raise click.BadParameter("must be a JSON object", param_hint=source)
        values.update(decoded)
    return values


store_file_option = click.option(
    "--store-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Use a local export document as the template store instead of the relay",
)


@click.group(name="templates")
def templates() -> None:
    """Message template preview, import and export."""


@templates.command(name="preview")
@click.argument("body")
@click.option("--data", type=str, default=None, help="JSON object of variable values")
@click.option(
    "--data-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="File holding a JSON object of variable values (--data wins on conflicts)",
)
def preview(body: str, data: str | None, data_file: Path | None) -> None:
    """Render BODY against sample data.

    Examples:

    \b
      notify-console templates preview '{{ .title | upper }}'
      notify-console templates preview '{{if .url}}link: {{ .url }}{{end}}' \\
          --data '{"url": "https://x"}'
    """
    values = _load_data(data, data_file)
    click.echo(PreviewRenderer().render(body, values))


@templates.command(name="import")
@click.argument("source", type=click.File("rb"))
@click.option("--overwrite", is_flag=True, help="Replace templates whose id already exists")
@click.option(
    "--generate-new-ids",
    is_flag=True,
    help="Import conflicting templates under a generated id",
)
@click.option("--dry-run", is_flag=True, help="Show the plan without changing the store")
@store_file_option
@coro
async def import_templates(
    source: Any,
    overwrite: bool,
    generate_new_ids: bool,
    dry_run: bool,
    store_file: Path | None,
) -> None:
    """Import templates from SOURCE (an export document or a template list, '-' for stdin).

    Conflicting ids are skipped unless --overwrite or --generate-new-ids is
    given; --overwrite wins when both are set.

    Examples:

    \b
      notify-console templates import templates.json --generate-new-ids
      pbpaste | notify-console templates import - --overwrite --dry-run
    """
    try:
        candidates = parse_import_payload(source.read())
        async with open_store(store_file, persist=not dry_run) as store:
            service = TemplateService(store)
            if dry_run:
                plan = await service.plan_import(
                    candidates,
                    overwrite=overwrite,
                    generate_new_ids=generate_new_ids,
                )
                header(f"Import plan ({len(plan)} templates)")
                for item in plan:
                    target = f" -> {item.template.id}" if item.decision.new_id else ""
                    click.echo(f"  {item.decision.action.value:<9} {item.source_id}{target}")
                return

            summary = await service.import_templates(
                candidates,
                overwrite=overwrite,
                generate_new_ids=generate_new_ids,
            )
    except AppException as e:
        error(e.detail)
        sys.exit(1)

    header("Import summary")
    detail("created", summary.created)
    detail("renamed", summary.renamed)
    detail("overwritten", summary.overwritten)
    detail("skipped", summary.skipped)
    detail("failed", summary.failed)
    for failure in summary.failures:
        warning(f"{failure.template_id} ({failure.action.value}): {failure.reason}")

    if summary.failed:
        error(summary.message)
        sys.exit(1)
    success(summary.message)


@templates.command(name="export")
@click.option("--id", "ids", multiple=True, help="Template id to export (repeatable; default all)")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file path (default: stdout)",
)
@store_file_option
@coro
async def export_templates(
    ids: tuple[str, ...], output: Path | None, store_file: Path | None
) -> None:
    """Export templates as a shareable JSON document.

    Examples:

    \b
      notify-console templates export -o templates.json
      notify-console templates export --id welcome --id alert
    """
    try:
        async with open_store(store_file) as store:
            export = await TemplateService(store).export(ids)
    except AppException as e:
        error(e.detail)
        sys.exit(1)

    document = dump_export_payload(export)
    if output is None:
        click.echo(document)
        return

    output.write_text(document, encoding="utf-8")
    info(f"Wrote {len(export.templates)} templates to {output}")
