from __future__ import annotations

from datetime import datetime, timedelta, timezone

from cosmo_notes.domain.filters import TaskFilters
from cosmo_notes.infra.repository import TaskRepository


def test_create_computes_overdue_and_defaults(repo: TaskRepository, clock) -> None:
    past = repo.create_task({"title": "Late", "due_date": clock.now - timedelta(days=1)})
    future = repo.create_task({"title": "Soon", "due_date": clock.now + timedelta(days=1)})
    undated = repo.create_task({"title": "Whenever", "content": ""})

    assert past.is_overdue is True
    assert future.is_overdue is False
    assert undated.is_overdue is False
    assert undated.content is None
    assert undated.tags is None
    assert undated.is_public is False
    assert undated.share_id is None
    assert undated.created_at == undated.updated_at == clock.now


def test_aware_due_date_is_stored_as_utc(repo: TaskRepository) -> None:
    due = datetime(2026, 3, 11, 9, 0, tzinfo=timezone(timedelta(hours=2)))

    task = repo.create_task({"title": "Call", "due_date": due})

    assert task.due_date == datetime(2026, 3, 11, 7, 0)


def test_tags_round_trip_in_order(repo: TaskRepository) -> None:
    created = repo.create_task({"title": "Tagged", "tags": ["b", "a", "b-2"]})

    assert repo.get_task(created.id).tags == ["b", "a", "b-2"]


def test_empty_tag_list_is_kept(repo: TaskRepository) -> None:
    created = repo.create_task({"title": "No tags", "tags": []})

    assert repo.get_task(created.id).tags == []


def test_list_orders_newest_first_and_filters(repo: TaskRepository, clock) -> None:
    first = repo.create_task({"title": "One", "tags": ["work"]}, owner_id="alice")
    clock.advance(minutes=1)
    second = repo.create_task(
        {"title": "Two", "tags": ["workshop"], "due_date": clock.now - timedelta(hours=1)},
        owner_id="bob",
    )
    clock.advance(minutes=1)
    third = repo.create_task({"title": "Three", "tags": ["home", "work"]}, owner_id="alice")
    repo.make_public(third.id)

    assert [t.id for t in repo.list_tasks(TaskFilters())] == [third.id, second.id, first.id]
    assert [t.id for t in repo.list_tasks(TaskFilters(tag="work"))] == [third.id, first.id]
    assert [t.id for t in repo.list_tasks(TaskFilters(tag="wor"))] == []
    assert [t.id for t in repo.list_tasks(TaskFilters(overdue=True))] == [second.id]
    assert [t.id for t in repo.list_tasks(TaskFilters(overdue=False))] == [third.id, first.id]
    assert [t.id for t in repo.list_tasks(TaskFilters(is_public=True))] == [third.id]
    assert [t.id for t in repo.list_tasks(TaskFilters(owner_id="alice"))] == [third.id, first.id]


def test_tag_filter_treats_like_wildcards_literally(repo: TaskRepository) -> None:
    literal = repo.create_task({"title": "Percent", "tags": ["100%"]})
    repo.create_task({"title": "Other", "tags": ["1000"]})

    assert [t.id for t in repo.list_tasks(TaskFilters(tag="100%"))] == [literal.id]
    assert repo.list_tasks(TaskFilters(tag="10_")) == []


def test_partial_update_only_touches_supplied_fields(repo: TaskRepository, clock) -> None:
    task = repo.create_task(
        {"title": "Buy milk", "due_date": clock.now - timedelta(days=1), "tags": ["errand"]}
    )
    clock.advance(minutes=5)

    updated = repo.update_task(task.id, {"content": "2 litres"})

    assert updated.title == "Buy milk"
    assert updated.content == "2 litres"
    assert updated.tags == ["errand"]
    assert updated.is_overdue is True
    assert updated.updated_at == clock.now
    assert updated.created_at == task.created_at


def test_update_due_date_recomputes_overdue(repo: TaskRepository, clock) -> None:
    task = repo.create_task({"title": "Plan", "due_date": clock.now - timedelta(days=1)})

    moved = repo.update_task(task.id, {"due_date": clock.now + timedelta(days=2)})
    assert moved.is_overdue is False

    cleared = repo.update_task(task.id, {"due_date": None})
    assert cleared.due_date is None
    assert cleared.is_overdue is False


def test_update_without_fields_returns_current_record(repo: TaskRepository, clock) -> None:
    task = repo.create_task({"title": "Still"})
    clock.advance(minutes=5)

    same = repo.update_task(task.id, {})

    assert same == task


def test_update_ignores_sharing_fields(repo: TaskRepository) -> None:
    task = repo.create_task({"title": "Private"})

    updated = repo.update_task(task.id, {"is_public": True, "share_id": "forged"})

    assert updated.is_public is False
    assert updated.share_id is None


def test_update_and_delete_unknown_task(repo: TaskRepository) -> None:
    assert repo.update_task("missing", {"title": "x"}) is None
    assert repo.delete_task("missing") is False


def test_delete_twice(repo: TaskRepository) -> None:
    task = repo.create_task({"title": "Gone"})

    assert repo.delete_task(task.id) is True
    assert repo.delete_task(task.id) is False
    assert repo.get_task(task.id) is None


def test_share_and_unshare_keep_share_id_consistent(repo: TaskRepository) -> None:
    task = repo.create_task({"title": "Share me"})

    first_share = repo.make_public(task.id)
    shared = repo.get_task(task.id)
    assert shared.is_public is True
    assert shared.share_id == first_share
    assert len(first_share) == 12
    assert repo.get_task_by_share_id(first_share).id == task.id

    second_share = repo.make_public(task.id)
    assert second_share != first_share
    assert repo.get_task_by_share_id(first_share) is None

    assert repo.make_private(task.id) is True
    private = repo.get_task(task.id)
    assert private.is_public is False
    assert private.share_id is None
    assert repo.get_task_by_share_id(second_share) is None


def test_sharing_unknown_task(repo: TaskRepository) -> None:
    assert repo.make_public("missing") is None
    assert repo.make_private("missing") is False


def test_sweep_counts_every_dated_row(repo: TaskRepository, clock) -> None:
    soon = repo.create_task({"title": "Soon", "due_date": clock.now + timedelta(hours=1)})
    late = repo.create_task({"title": "Late", "due_date": clock.now - timedelta(hours=1)})
    undated = repo.create_task({"title": "Undated"})
    repo.make_public(late.id)

    clock.advance(hours=2)
    written = repo.update_overdue_status()

    assert written == 2
    assert repo.get_task(soon.id).is_overdue is True
    assert repo.get_task(soon.id).updated_at == clock.now
    assert repo.get_task(undated.id).updated_at != clock.now
    # sweep leaves sharing state alone
    swept = repo.get_task(late.id)
    assert swept.is_public is True
    assert swept.share_id is not None


def test_list_overdue_orders_by_due_date(repo: TaskRepository, clock) -> None:
    older = repo.create_task({"title": "Older", "due_date": clock.now - timedelta(days=3)}, owner_id="a")
    newer = repo.create_task({"title": "Newer", "due_date": clock.now - timedelta(days=1)}, owner_id="b")
    repo.create_task({"title": "Future", "due_date": clock.now + timedelta(days=1)})

    assert [t.id for t in repo.list_overdue()] == [older.id, newer.id]
    assert [t.id for t in repo.list_overdue("b")] == [newer.id]


def test_ids_come_from_factories(session_factory, clock) -> None:
    ids = iter(["task-1", "task-2"])
    repo = TaskRepository(
        session_factory,
        clock=clock,
        id_factory=lambda: next(ids),
        share_id_factory=lambda: "fixedtoken12",
    )

    task = repo.create_task({"title": "Fixed"})

    assert task.id == "task-1"
    assert repo.make_public(task.id) == "fixedtoken12"
