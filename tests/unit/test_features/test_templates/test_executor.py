"""Tests for the sequential import batch executor."""

from __future__ import annotations

import pytest

from notify_console.features.templates.exceptions import TemplateStoreError
from notify_console.features.templates.executor import run_import
from notify_console.features.templates.reconciler import ImportReconciler, UniqueIdFactory
from notify_console.features.templates.schemas import ImportAction, Template
from notify_console.features.templates.store import InMemoryTemplateStore
from notify_console.infra.logging import get_log_context


class RejectingStore(InMemoryTemplateStore):
    """Store that refuses to create the given ids.

    Ids in ``reject_once`` are refused on their first create only.
    """

    def __init__(self, templates=(), reject=(), reject_once=()) -> None:
        super().__init__(templates)
        self.reject = set(reject)
        self.reject_once = set(reject_once)
        self.calls: list[tuple[str, str]] = []

    async def create(self, template: Template) -> None:
        self.calls.append(("create", template.id))
        if template.id in self.reject_once:
            self.reject_once.discard(template.id)
            raise TemplateStoreError("relay timed out", code=3003, template_id=template.id)
        if template.id in self.reject:
            raise TemplateStoreError("relay said no", code=3003, template_id=template.id)
        await super().create(template)

    async def update(self, template_id: str, template: Template) -> None:
        self.calls.append(("update", template_id))
        await super().update(template_id, template)


class BrokenStore(InMemoryTemplateStore):
    async def create(self, template: Template) -> None:
        raise RuntimeError("bug")


async def _import(store, candidates, *, existing=None, id_factory=None, **policy):
    reconciler = ImportReconciler(id_factory=id_factory, **policy)
    return await run_import(candidates, store, reconciler=reconciler, existing=existing)


@pytest.mark.unit
class TestRunImport:
    async def test_counts_every_action(
        self, store: InMemoryTemplateStore, id_factory: UniqueIdFactory
    ):
        candidates = [Template(id="new"), Template(id="welcome"), Template(id="alert")]

        summary = await _import(store, candidates, generate_new_ids=True, id_factory=id_factory)

        assert (summary.created, summary.renamed, summary.overwritten) == (3, 2, 0)
        assert (summary.skipped, summary.failed) == (0, 0)
        assert len(await store.list()) == 5
        assert [t.id for t in summary.accepted][0] == "new"
        assert all(t.id.startswith(("welcome_", "alert_")) for t in summary.accepted[1:])

    async def test_default_policy_skips_conflicts(self, store: InMemoryTemplateStore):
        summary = await run_import([Template(id="welcome"), Template(id="x")], store)

        assert (summary.created, summary.skipped) == (1, 1)

    async def test_skip_makes_no_store_call(self):
        store = RejectingStore([Template(id="a")])

        summary = await _import(store, [Template(id="a")])

        assert summary.skipped == 1
        assert store.calls == []
        assert summary.accepted == []

    async def test_overwrite_updates_under_original_id(self):
        store = RejectingStore([Template(id="a", content="old")])

        summary = await _import(store, [Template(id="a", content="new")], overwrite=True)

        assert summary.overwritten == 1
        assert store.calls == [("update", "a")]
        assert (await store.list())["a"].content == "new"

    async def test_store_error_fails_only_that_item(self):
        store = RejectingStore(reject={"b"})

        summary = await _import(store, [Template(id="a"), Template(id="b"), Template(id="c")])

        assert summary.created == 2
        assert summary.failed == 1
        assert summary.failures[0].template_id == "b"
        assert summary.failures[0].action is ImportAction.CREATE
        assert summary.failures[0].reason == "relay said no"
        assert set(await store.list()) == {"a", "c"}

    async def test_duplicate_in_batch_renames_against_committed_ids(
        self, id_factory: UniqueIdFactory
    ):
        store = InMemoryTemplateStore()

        summary = await _import(
            store,
            [Template(id="t1", content="a"), Template(id="t1", content="b")],
            generate_new_ids=True,
            id_factory=id_factory,
        )

        assert (summary.created, summary.renamed) == (2, 1)
        stored = await store.list()
        assert stored["t1"].content == "a"
        assert len(stored) == 2

    async def test_failed_create_does_not_reserve_its_id_for_rename(
        self, id_factory: UniqueIdFactory
    ):
        store = RejectingStore(reject_once={"t1"})

        summary = await _import(
            store,
            [Template(id="t1", content="a"), Template(id="t1", content="b")],
            generate_new_ids=True,
            id_factory=id_factory,
        )

        assert (summary.created, summary.renamed, summary.failed) == (1, 0, 1)
        stored = await store.list()
        assert list(stored) == ["t1"]
        assert stored["t1"].content == "b"

    async def test_failed_create_does_not_turn_duplicate_into_overwrite(self):
        store = RejectingStore(reject_once={"t1"})

        summary = await _import(
            store,
            [Template(id="t1", content="a"), Template(id="t1", content="b")],
            overwrite=True,
        )

        assert (summary.created, summary.overwritten, summary.failed) == (1, 0, 1)
        assert store.calls == [("create", "t1"), ("create", "t1")]
        assert (await store.list())["t1"].content == "b"

    async def test_create_rejected_as_existing_reserves_the_id(self, id_factory: UniqueIdFactory):
        # The store holds "a" although the caller's snapshot did not list it
        store = InMemoryTemplateStore([Template(id="a", content="old")])

        summary = await _import(
            store,
            [Template(id="a"), Template(id="a", content="copy")],
            existing=set(),
            generate_new_ids=True,
            id_factory=id_factory,
        )

        assert summary.failed == 1
        assert summary.failures[0].action is ImportAction.CREATE
        assert summary.renamed == 1
        assert summary.accepted[0].id.startswith("a_")

    async def test_overwrite_of_vanished_template_frees_the_id(self):
        store = InMemoryTemplateStore()

        summary = await _import(
            store,
            [Template(id="gone", content="v1"), Template(id="gone", content="v2")],
            existing={"gone"},
            overwrite=True,
        )

        assert summary.failed == 1
        assert summary.failures[0].action is ImportAction.OVERWRITE
        assert summary.created == 1
        assert (await store.list())["gone"].content == "v2"

    async def test_programming_errors_propagate(self):
        with pytest.raises(RuntimeError, match="bug"):
            await _import(BrokenStore(), [Template(id="a")])

    async def test_message(self, store: InMemoryTemplateStore, id_factory: UniqueIdFactory):
        summary = await _import(
            store,
            [Template(id="welcome"), Template(id="x")],
            generate_new_ids=True,
            id_factory=id_factory,
        )

        assert summary.message == (
            "Import finished: 2 created (1 renamed), 0 overwritten, 0 skipped, 0 failed"
        )
        assert summary.total == 2

    async def test_overwrite_batch_is_idempotent(self, store: InMemoryTemplateStore):
        candidates = [Template(id="welcome", content="v2"), Template(id="fresh", content="f")]

        await _import(store, candidates, overwrite=True)
        first_state = await store.list()
        summary = await _import(store, candidates, overwrite=True)

        assert summary.overwritten == 2
        assert summary.created == 0
        assert await store.list() == first_state

    async def test_batch_id_is_scoped_to_the_run(self, store: InMemoryTemplateStore):
        await run_import([], store, batch_id="b-1")

        assert "batch_id" not in get_log_context()
