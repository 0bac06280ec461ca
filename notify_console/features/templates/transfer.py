"""Build and parse template export documents.

The export document is what the console copies to the clipboard:

    {"version": "1.0", "exportTime": "...", "exportType": "templates", "templates": [...]}

Imports accept either that document or a bare list of templates.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import TypeAdapter, ValidationError

from notify_console.core.settings import get_template_settings
from notify_console.features.templates.exceptions import TemplatePayloadError
from notify_console.features.templates.schemas import EXPORT_TYPE, Template, TemplateExport

logger = logging.getLogger(__name__)

_template_list = TypeAdapter(list[Template])


def build_export_payload(
    templates: Iterable[Template],
    *,
    now: datetime | None = None,
    version: str | None = None,
) -> TemplateExport:
    """Wrap templates in an export document."""
    return TemplateExport(
        version=version or get_template_settings().export_version,
        export_time=now or datetime.now(UTC),
        templates=list(templates),
    )


def dump_export_payload(export: TemplateExport, *, indent: int | None = 2) -> str:
    """Serialize an export document with its camelCase keys."""
    document = export.model_dump(mode="json", by_alias=True)
    return json.dumps(document, ensure_ascii=False, indent=indent)


def _decode(raw: bytes | str) -> Any:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TemplatePayloadError("Import payload is not valid UTF-8") from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise TemplatePayloadError(
            f"Import payload is not valid JSON: {e.msg}",
            extra={"line": e.lineno, "column": e.colno},
        ) from e


def _validation_errors(error: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
        for err in error.errors()
    ]


def parse_import_payload(raw: bytes | str | Mapping[str, Any] | list[Any]) -> list[Template]:
    """Extract the candidate templates from an import payload.

    Args:
        raw: JSON text, or an already decoded export document or template list.

    Returns:
        Templates in payload order.

    Raises:
        TemplatePayloadError: If the payload is not JSON, is an export document
            of another type, lacks ``templates`` or holds invalid records.
    """
    data = _decode(raw) if isinstance(raw, (bytes, str)) else raw

    if isinstance(data, Mapping):
        export_type = data.get("exportType", EXPORT_TYPE)
        if export_type != EXPORT_TYPE:
            raise TemplatePayloadError(
                f"Unsupported export type: {export_type!r}",
                extra={"export_type": export_type},
            )
        if "templates" not in data:
            raise TemplatePayloadError("Import payload has no 'templates' list")
        data = data["templates"]

    if not isinstance(data, list):
        raise TemplatePayloadError(
            "Import payload must be an export document or a list of templates",
            extra={"received": type(data).__name__},
        )

    try:
        templates = _template_list.validate_python(data)
    except ValidationError as e:
        raise TemplatePayloadError(
            f"Import payload holds {e.error_count()} invalid template field(s)",
            extra={"errors": _validation_errors(e)},
        ) from e

    logger.debug("Parsed import payload with %d templates", len(templates))
    return templates
