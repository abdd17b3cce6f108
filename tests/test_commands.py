# tests/test_commands.py

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from fun_todo.cli.commands import (
    CELEBRATION,
    CommandRegistry,
    parse_due_date,
    registry,
    resolve_task_ref,
)

NOW = datetime(2024, 1, 10, 9, 30, tzinfo=UTC)


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_commands(state) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/add", "/list", "/done", "/del", "/status"):
        assert name in text


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("today", NOW),
        ("Tomorrow", NOW + timedelta(days=1)),
        ("+3", NOW + timedelta(days=3)),
        ("+10d", NOW + timedelta(days=10)),
        ("2024-02-29", datetime(2024, 2, 29, 9, 30, tzinfo=UTC)),
        ("2024-01-10", NOW),
    ],
)
def test_parse_due_date(raw: str, expected: datetime) -> None:
    assert parse_due_date(raw, NOW) == expected


@pytest.mark.parametrize("raw", ["2024-01-09", "2023-12-31"])
def test_parse_due_date_rejects_past_days(raw: str) -> None:
    with pytest.raises(ValueError, match="past"):
        parse_due_date(raw, NOW)


@pytest.mark.parametrize("raw", ["", "soon", "2024-13-01", "2024-02-30", "-1"])
def test_parse_due_date_rejects_garbage(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_due_date(raw, NOW)


def test_add_list_done_delete_flow(state) -> None:
    reply = registry.handle(state, "/add tomorrow buy oat milk") or ""
    assert reply.startswith("Added")
    registry.handle(state, "/add +5 call mom")

    tasks = state.task_store.tasks
    assert [t.text for t in tasks] == ["call mom", "buy oat milk"]

    listing = registry.handle(state, "/list") or ""
    assert listing.splitlines()[0] == "Today"
    assert " 1. [ ]" in listing and "call mom" in listing
    assert "(due soon)" in listing and "(comfortable)" in listing

    # Completing prints the celebration once (no emitter -> inline).
    done = registry.handle(state, "/done 2") or ""
    assert done.startswith(CELEBRATION)
    assert "Completed" in done
    assert state.task_store.celebrate is False

    again = registry.handle(state, "/done 2") or ""
    assert CELEBRATION not in again and "Reopened" in again

    emitted: list[str] = []
    registry.handle(state, "/done 2", emit=emitted.append)
    assert emitted == [CELEBRATION]

    gone = registry.handle(state, f"/del {tasks[0].id}") or ""
    assert gone.startswith("Deleted")
    assert [t.text for t in state.task_store.tasks] == ["buy oat milk"]


def test_add_usage_and_rejections(state) -> None:
    assert "Usage" in (registry.handle(state, "/add") or "")
    assert "Usage" in (registry.handle(state, "/add tomorrow") or "")
    assert "past" in (registry.handle(state, "/add 2000-01-01 time travel") or "")
    assert state.task_store.tasks == ()


def test_unknown_task_refs(state) -> None:
    registry.handle(state, "/add today one")
    assert registry.handle(state, "/done 9") == "No task 9."
    assert registry.handle(state, "/del abc") == "No task abc."
    assert "Usage" in (registry.handle(state, "/done") or "")
    assert state.task_store.count_tasks() == 1


def test_resolve_task_ref_by_number_or_id(state) -> None:
    registry.handle(state, "/add today one")
    registry.handle(state, "/add today two")
    newest, oldest = state.task_store.tasks

    assert resolve_task_ref(state, "1") is newest
    assert resolve_task_ref(state, "2") is oldest
    assert resolve_task_ref(state, oldest.id) is oldest
    assert resolve_task_ref(state, "0") is None
    assert resolve_task_ref(state, "3") is None


def test_list_empty_and_status(state) -> None:
    assert "No tasks yet" in (registry.handle(state, "/ls") or "")
    registry.handle(state, "/add today one")
    status = registry.handle(state, "/status") or ""
    assert "sqlite" in status
    assert "1 total, 0 done, 1 open" in status
