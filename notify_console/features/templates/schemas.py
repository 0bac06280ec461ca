"""Pydantic schemas for message templates, import plans and transfer payloads."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

EXPORT_TYPE = "templates"

# Fields of a template that the relay renders before dispatch.
RENDERED_FIELDS = ("title", "content", "url", "image", "targets")


class Template(BaseModel):
    """A stored message blueprint with placeholder directives.

    ``id`` is the identity key; it is opaque and immutable once the template
    exists in the store.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1, description="Unique template identifier")
    name: str = Field(default="", description="Display name")
    content: str = Field(default="", description="Template body")
    title: str = Field(default="", description="Title template")
    image: str = Field(default="", description="Image URL template (may be empty)")
    url: str = Field(default="", description="Link URL template (may be empty)")
    targets: str = Field(default="", description="Destination selector template")

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "template id must not be blank"
            raise ValueError(msg)
        return v

    @field_validator("name", "content", "title", "image", "url", "targets", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class ImportAction(StrEnum):
    """What the batch executor does with one imported template."""

    CREATE = "create"
    OVERWRITE = "overwrite"
    RENAME = "rename"
    SKIP = "skip"


class ImportDecision(BaseModel):
    """Outcome of reconciling a single candidate against the live store view."""

    model_config = ConfigDict(frozen=True)

    action: ImportAction
    new_id: str | None = None

    @model_validator(mode="after")
    def _new_id_only_for_rename(self) -> ImportDecision:
        if (self.action is ImportAction.RENAME) != (self.new_id is not None):
            msg = "new_id is required for rename decisions and forbidden otherwise"
            raise ValueError(msg)
        return self

    @classmethod
    def create(cls) -> ImportDecision:
        return cls(action=ImportAction.CREATE)

    @classmethod
    def overwrite(cls) -> ImportDecision:
        return cls(action=ImportAction.OVERWRITE)

    @classmethod
    def rename(cls, new_id: str) -> ImportDecision:
        return cls(action=ImportAction.RENAME, new_id=new_id)

    @classmethod
    def skip(cls) -> ImportDecision:
        return cls(action=ImportAction.SKIP)


class PlannedImport(BaseModel):
    """A candidate paired with its decision.

    For renames ``template`` already carries the generated id and
    ``source_id`` keeps the id the candidate arrived with.
    """

    model_config = ConfigDict(frozen=True)

    template: Template
    decision: ImportDecision
    source_id: str


class ImportFailure(BaseModel):
    """A store operation that failed during an import batch."""

    template_id: str
    action: ImportAction
    reason: str


class ImportSummary(BaseModel):
    """Per-action counters for one import batch plus what was accepted."""

    created: int = 0
    overwritten: int = 0
    renamed: int = 0
    skipped: int = 0
    failed: int = 0
    accepted: list[Template] = Field(default_factory=list)
    failures: list[ImportFailure] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        # renamed items are already counted in created
        return self.created + self.overwritten + self.skipped + self.failed

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        return (
            f"Import finished: {self.created} created ({self.renamed} renamed), "
            f"{self.overwritten} overwritten, {self.skipped} skipped, {self.failed} failed"
        )


class TemplateExport(BaseModel):
    """Clipboard-shared export document."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = "1.0"
    export_time: datetime = Field(alias="exportTime")
    export_type: Literal["templates"] = Field(default=EXPORT_TYPE, alias="exportType")
    templates: list[Template] = Field(default_factory=list)


class RenderedTemplate(BaseModel):
    """Preview of every rendered field of a template."""

    title: str = ""
    content: str = ""
    url: str = ""
    image: str = ""
    targets: str = ""


# ──────────────────────────────────────────────────────────────
# API request / response bodies
# ──────────────────────────────────────────────────────────────


class PreviewRequest(BaseModel):
    """Render a template body against sample data."""

    content: str = Field(..., description="Template body using {{ .key }} directives")
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Caller values overriding the built-in sample variables",
    )


class PreviewResponse(BaseModel):
    rendered: str


class TemplatePreviewRequest(BaseModel):
    """Render every field of a template against sample data."""

    template: Template
    data: dict[str, Any] = Field(default_factory=dict)


class ImportRequest(BaseModel):
    """Import a batch of templates under a conflict policy.

    Either an export document (``payload``) or a bare ``templates`` list.
    """

    payload: TemplateExport | None = None
    templates: list[Template] | None = None
    overwrite: bool = Field(default=False, description="Replace templates whose id already exists")
    generate_new_ids: bool = Field(
        default=False,
        description="Import conflicting templates under a freshly generated id",
    )

    @model_validator(mode="after")
    def _exactly_one_source(self) -> ImportRequest:
        if (self.payload is None) == (self.templates is None):
            msg = "provide exactly one of 'payload' or 'templates'"
            raise ValueError(msg)
        return self

    @property
    def candidates(self) -> list[Template]:
        if self.payload is not None:
            return list(self.payload.templates)
        return list(self.templates or [])
