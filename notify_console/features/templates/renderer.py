"""Preview interpreter for relay message templates.

Templates use a small subset of Go ``text/template`` syntax:

- ``{{ .key }}``                      substitute a variable
- ``{{ .key | upper }}``              substitute an upper-cased variable
- ``{{if .key}}...{{end}}``           keep the body only when the variable is truthy

A body is tokenized once into a flat node list and evaluated in a single pass,
so inserted values are never expanded again. Directives that reference an
unknown variable, and anything that is not one of the forms above, are kept
verbatim. Conditional bodies may hold text, variables and filters, but no
nested conditionals and no other ``{``.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from numbers import Number
from typing import TYPE_CHECKING, Any

from notify_console.core.settings import get_template_settings
from notify_console.features.templates.schemas import RENDERED_FIELDS, RenderedTemplate
from notify_console.features.templates.variables import resolve_variables
from notify_console.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from notify_console.core.settings.templates import TemplateSettings
    from notify_console.features.templates.schemas import Template

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

OPEN = "{{"
CLOSE = "}}"

_KEY = r"\.(?P<key>[^\s{}|]+)"
_VAR_RE = re.compile(rf"^\s*{_KEY}\s*$")
_FILTER_RE = re.compile(rf"^\s*{_KEY}\s*\|\s*(?P<name>\w+)\s*$")
_IF_RE = re.compile(rf"^\s*if\s+{_KEY}\s*$")
_END_RE = re.compile(r"^\s*end\s*$")

FILTERS = {
    "upper": str.upper,
}


# ──────────────────────────────────────────────────────────────
# Nodes
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Literal:
    text: str


@dataclass(frozen=True, slots=True)
class Var:
    key: str
    source: str


@dataclass(frozen=True, slots=True)
class Filter:
    key: str
    name: str
    source: str


@dataclass(frozen=True, slots=True)
class Conditional:
    key: str
    body: tuple[Literal | Var | Filter, ...]
    source: str


Node = Literal | Var | Filter | Conditional


@dataclass(frozen=True, slots=True)
class _IfOpen:
    key: str
    source: str


@dataclass(frozen=True, slots=True)
class _End:
    source: str


_Token = Literal | Var | Filter | _IfOpen | _End


# ──────────────────────────────────────────────────────────────
# Tokenizer / parser
# ──────────────────────────────────────────────────────────────


def _classify(source: str) -> _Token:
    inner = source[len(OPEN) : -len(CLOSE)]
    if match := _VAR_RE.match(inner):
        return Var(match["key"], source)
    if match := _FILTER_RE.match(inner):
        return Filter(match["key"], match["name"], source)
    if match := _IF_RE.match(inner):
        return _IfOpen(match["key"], source)
    if _END_RE.match(inner):
        return _End(source)
    return Literal(source)


def _lex(body: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    length = len(body)
    while pos < length:
        start = body.find(OPEN, pos)
        if start == -1:
            tokens.append(Literal(body[pos:]))
            break
        if start > pos:
            tokens.append(Literal(body[pos:start]))

        close = body.find(CLOSE, start + len(OPEN))
        if close == -1:
            tokens.append(Literal(body[start:]))
            break

        # "{{ {{.a}}": the first opener is plain text
        reopen = body.find(OPEN, start + 1)
        if reopen != -1 and reopen < close:
            tokens.append(Literal(body[start:reopen]))
            pos = reopen
            continue

        end = close + len(CLOSE)
        tokens.append(_classify(body[start:end]))
        pos = end
    return tokens


def _parse_conditional(
    opener: _IfOpen, tokens: list[_Token], index: int
) -> tuple[Conditional, int] | None:
    """Parse the conditional that ``opener`` opens at ``tokens[index]``.

    Returns the node and the index after its ``{{end}}``, or None when the
    block is malformed.
    """
    body: list[Literal | Var | Filter] = []
    for cursor in range(index + 1, len(tokens)):
        token = tokens[cursor]
        if isinstance(token, _End):
            source = opener.source + "".join(_source_of(node) for node in body) + token.source
            return Conditional(opener.key, tuple(body), source), cursor + 1
        if isinstance(token, Literal):
            if "{" in token.text:
                return None
            body.append(token)
        elif isinstance(token, (Var, Filter)):
            body.append(token)
        else:
            return None
    return None


def _source_of(node: Node) -> str:
    if isinstance(node, Literal):
        return node.text
    return node.source


def tokenize(body: str) -> list[Node]:
    """Tokenize a template body into a flat list of nodes."""
    tokens = _lex(body)
    nodes: list[Node] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if isinstance(token, _IfOpen):
            parsed = _parse_conditional(token, tokens, index)
            if parsed is not None:
                node, index = parsed
                nodes.append(node)
                continue
            nodes.append(Literal(token.source))
        elif isinstance(token, _End):
            nodes.append(Literal(token.source))
        else:
            nodes.append(token)
        index += 1
    return nodes


# ──────────────────────────────────────────────────────────────
# Evaluation
# ──────────────────────────────────────────────────────────────


def is_truthy(value: Any) -> bool:
    """Truthiness of a context value.

    ``None``, ``False``, numeric zero, NaN and ``""`` are falsy. Everything
    else is truthy, including the string ``"0"`` and empty containers.
    """
    if value is None or value is False:
        return False
    if isinstance(value, bool):
        return True
    if isinstance(value, Number):
        return value == value and value != 0
    if isinstance(value, str):
        return value != ""
    return True


def stringify(value: Any) -> str:
    """String form of a context value as inserted into rendered text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


def _evaluate_node(node: Node, context: Mapping[str, Any]) -> str:
    if isinstance(node, Literal):
        return node.text
    if node.key not in context:
        return node.source
    value = context[node.key]
    if isinstance(node, Var):
        return stringify(value)
    if isinstance(node, Filter):
        apply = FILTERS.get(node.name)
        if apply is None:
            return node.source
        return apply(stringify(value))
    if not is_truthy(value):
        return ""
    return "".join(_evaluate_node(child, context) for child in node.body)


def evaluate(nodes: list[Node], context: Mapping[str, Any]) -> str:
    """Evaluate a node list against a render context."""
    return "".join(_evaluate_node(node, context) for node in nodes)


def render_template(
    body: str | None,
    context: Mapping[str, Any],
    *,
    fallback: str | None = None,
) -> str:
    """Render a template body, returning ``fallback`` instead of raising.

    Args:
        body: Template body.
        context: Variables available to directives.
        fallback: Text returned when rendering fails. Defaults to the
            configured preview fallback.

    Returns:
        Rendered text.
    """
    if not body:
        return ""
    try:
        nodes = tokenize(body)
        lazy_logger.debug(lambda: f"Tokenized template into {len(nodes)} nodes")
        return evaluate(nodes, context)
    except Exception:
        logger.warning(
            "Template preview failed",
            exc_info=True,
            extra={"template_length": len(body)},
        )
        if fallback is None:
            fallback = get_template_settings().preview_fallback
        return fallback


def render_template_fields(
    template: Template,
    context: Mapping[str, Any],
    *,
    fallback: str | None = None,
) -> RenderedTemplate:
    """Render every field of a template that the relay renders on dispatch."""
    rendered = {
        field: render_template(getattr(template, field), context, fallback=fallback)
        for field in RENDERED_FIELDS
    }
    return RenderedTemplate(**rendered)


class PreviewRenderer:
    """Render template previews against sample data merged with caller values."""

    def __init__(self, settings: TemplateSettings | None = None) -> None:
        self._settings = settings or get_template_settings()

    def build_context(self, data: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return resolve_variables(caller_data=data, settings=self._settings)

    def render(self, body: str | None, data: Mapping[str, Any] | None = None) -> str:
        """Render one template body."""
        return render_template(
            body,
            self.build_context(data),
            fallback=self._settings.preview_fallback,
        )

    def render_fields(
        self,
        template: Template,
        data: Mapping[str, Any] | None = None,
    ) -> RenderedTemplate:
        """Render all dispatch fields of ``template``."""
        return render_template_fields(
            template,
            self.build_context(data),
            fallback=self._settings.preview_fallback,
        )


_renderer: PreviewRenderer | None = None


def get_preview_renderer() -> PreviewRenderer:
    """Get or create the singleton PreviewRenderer instance."""
    global _renderer
    if _renderer is None:
        _renderer = PreviewRenderer()
    return _renderer
