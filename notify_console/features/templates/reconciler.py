"""Reconcile imported templates against the live template store.

Each candidate is decided in input order against a ``LiveStoreView`` seeded
with the ids already in the store. The batch executor adds an id to the view
only once its create or update has been committed, so duplicates inside one
batch and generated rename ids are checked against what the store really
holds. ``plan_import`` previews a batch assuming every store call succeeds.
"""

from __future__ import annotations

import logging
import random
import re
import string
import time
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from notify_console.features.templates.schemas import ImportAction, ImportDecision, PlannedImport
from notify_console.infra.logging import lazy

if TYPE_CHECKING:
    from notify_console.features.templates.schemas import Template

logger = logging.getLogger(__name__)

BASE36_DIGITS = string.digits + string.ascii_lowercase
DEFAULT_BASE = "template"
DEFAULT_RANDOM_LENGTH = 6

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def to_base36(value: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""
    if value < 0:
        msg = f"cannot encode negative value {value} in base 36"
        raise ValueError(msg)
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def fraction_to_base36(fraction: float, length: int) -> str:
    """First ``length`` base-36 digits of a fraction in ``[0, 1)``."""
    digits: list[str] = []
    for _ in range(length):
        fraction *= 36
        digit = int(fraction)
        digits.append(BASE36_DIGITS[min(digit, 35)])
        fraction -= digit
    return "".join(digits)


def sanitize_id(template_id: str) -> str:
    """Strip every character outside ``[A-Za-z0-9_-]``."""
    return _UNSAFE_ID_CHARS.sub("", template_id) or DEFAULT_BASE


class LiveStoreView:
    """Ids that exist in the store or were committed earlier in the batch."""

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids = set(ids)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def add(self, template_id: str) -> None:
        self._ids.add(template_id)

    def discard(self, template_id: str) -> None:
        self._ids.discard(template_id)

    def snapshot(self) -> frozenset[str]:
        return frozenset(self._ids)


class UniqueIdFactory:
    """Generate rename ids of the form ``<base>_<ms36>_<rand36>``.

    Args:
        clock: Returns the current time in milliseconds.
        rng: Returns a float in ``[0, 1)``.
        random_length: Number of random base-36 characters.
    """

    def __init__(
        self,
        clock: Callable[[], int] | None = None,
        rng: Callable[[], float] | None = None,
        random_length: int = DEFAULT_RANDOM_LENGTH,
    ) -> None:
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._rng = rng or random.random
        self._random_length = random_length

    def candidate(self, template_id: str) -> str:
        base = sanitize_id(template_id)
        stamp = to_base36(int(self._clock()))
        suffix = fraction_to_base36(self._rng(), self._random_length)
        return f"{base}_{stamp}_{suffix}"

    def generate(self, template_id: str, view: LiveStoreView) -> str:
        """Return an id derived from ``template_id`` that is not in ``view``.

        Collisions are resolved by appending ``_1``, ``_2``, ... to the
        candidate. The view is not modified.
        """
        candidate = self.candidate(template_id)
        unique = candidate
        counter = 1
        while unique in view:
            unique = f"{candidate}_{counter}"
            counter += 1
        return unique


def decide(
    template_id: str,
    view: LiveStoreView,
    *,
    overwrite: bool,
    generate_new_ids: bool,
    id_factory: UniqueIdFactory,
) -> ImportDecision:
    """Decide what to do with one candidate. Does not modify ``view``."""
    if template_id not in view:
        return ImportDecision.create()
    if overwrite:
        return ImportDecision.overwrite()
    if generate_new_ids:
        return ImportDecision.rename(id_factory.generate(template_id, view))
    return ImportDecision.skip()


class ImportReconciler:
    """Plan an import batch under one conflict policy.

    ``overwrite`` takes precedence over ``generate_new_ids`` when both are set.
    """

    def __init__(
        self,
        *,
        overwrite: bool = False,
        generate_new_ids: bool = False,
        id_factory: UniqueIdFactory | None = None,
    ) -> None:
        self.overwrite = overwrite
        self.generate_new_ids = generate_new_ids
        self.id_factory = id_factory or UniqueIdFactory()

    def resolve(self, template: Template, view: LiveStoreView) -> PlannedImport:
        """Decide one candidate against ``view`` without modifying it.

        For a rename the returned template already carries the new id.
        """
        decision = decide(
            template.id,
            view,
            overwrite=self.overwrite,
            generate_new_ids=self.generate_new_ids,
            id_factory=self.id_factory,
        )
        resolved = template
        if decision.new_id is not None:
            resolved = template.model_copy(update={"id": decision.new_id})
            logger.debug("Renaming imported template %s to %s", template.id, decision.new_id)
        return PlannedImport(template=resolved, decision=decision, source_id=template.id)

    def plan(self, candidates: Iterable[Template], existing: Iterable[str]) -> list[PlannedImport]:
        """Dry-run a batch: every non-skip item is treated as committed."""
        view = LiveStoreView(existing)
        planned: list[PlannedImport] = []

        for template in candidates:
            item = self.resolve(template, view)
            if item.decision.action is not ImportAction.SKIP:
                view.add(item.template.id)
            planned.append(item)

        logger.info(
            "Planned template import",
            extra={
                "candidates": len(planned),
                "overwrite": self.overwrite,
                "generate_new_ids": self.generate_new_ids,
            },
        )
        logger.debug(
            "Import plan: %s",
            lazy(lambda: ", ".join(_describe(p) for p in planned)),
        )
        return planned


def plan_import(
    candidates: Iterable[Template],
    existing: Iterable[str],
    overwrite: bool = False,
    generate_new_ids: bool = False,
    *,
    id_factory: UniqueIdFactory | None = None,
) -> list[PlannedImport]:
    """Decide Create / Overwrite / Rename / Skip for each candidate, in order.

    Args:
        candidates: Templates to import.
        existing: Ids already present in the store.
        overwrite: Replace templates whose id is already live.
        generate_new_ids: Import conflicting templates under a new id.
        id_factory: Rename id generator; inject one for deterministic ids.

    Returns:
        One PlannedImport per candidate, in input order.
    """
    reconciler = ImportReconciler(
        overwrite=overwrite,
        generate_new_ids=generate_new_ids,
        id_factory=id_factory,
    )
    return reconciler.plan(candidates, existing)


def _describe(item: PlannedImport) -> str:
    return f"{item.source_id}->{item.template.id} ({item.decision.action})"
