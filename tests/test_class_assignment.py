"""Tests for round-robin class assignment and the class roster."""

import pytest

from millionaire_app.core.services.class_assignment import ClassAssignmentEngine
from millionaire_app.core.services.class_roster import ClassRoster
from millionaire_app.core.store_keys import CLASSES_KEY, question_class_key

SESSION_ID = "game_1700000000000_abcdefghi"


@pytest.mark.asyncio
async def test_round_robin_follows_sorted_class_order(gateway, store):
    engine = ClassAssignmentEngine(gateway)
    engine.begin_session(SESSION_ID, ["C", "Alpha", "Beta"])

    assigned = [await engine.get_assigned_class(index) for index in range(4)]

    assert assigned == ["Alpha", "Beta", "C", "Alpha"]
    assert engine.classes == ["Alpha", "Beta", "C"]
    assert await store.get(question_class_key(SESSION_ID, 3)) == "Alpha"


@pytest.mark.asyncio
async def test_assignment_is_stable_once_made(gateway):
    engine = ClassAssignmentEngine(gateway)
    engine.begin_session(SESSION_ID, ["Alpha", "Beta"])

    first, writes = await engine.assign(1)
    again, second_writes = await engine.assign(1)

    assert first == again == "Beta"
    assert len(writes) == 1 and writes[0].ok
    assert second_writes == []


@pytest.mark.asyncio
async def test_override_replaces_assignment(gateway, store):
    engine = ClassAssignmentEngine(gateway)
    engine.begin_session(SESSION_ID, ["Alpha", "Beta"])
    await engine.assign(0)

    writes = await engine.override_assignment(0, " Beta ")

    assert all(write.ok for write in writes)
    assert await engine.get_assigned_class(0) == "Beta"
    assert await store.get(question_class_key(SESSION_ID, 0)) == "Beta"
    assert engine.assignments() == {0: "Beta"}


@pytest.mark.asyncio
async def test_override_rejects_blank_name_and_negative_index(gateway):
    engine = ClassAssignmentEngine(gateway)
    engine.begin_session(SESSION_ID, ["Alpha"])
    with pytest.raises(ValueError):
        await engine.override_assignment(0, "   ")
    with pytest.raises(ValueError):
        await engine.override_assignment(-1, "Alpha")


@pytest.mark.asyncio
async def test_no_classes_means_no_assignment(gateway):
    engine = ClassAssignmentEngine(gateway)
    engine.begin_session(SESSION_ID, [])
    assert await engine.get_assigned_class(0) is None


@pytest.mark.asyncio
async def test_stored_assignment_wins_over_round_robin(gateway, store):
    await store.set(question_class_key(SESSION_ID, 0), "Beta")
    engine = ClassAssignmentEngine(gateway)
    engine.begin_session(SESSION_ID, ["Alpha", "Beta"])
    assert await engine.get_assigned_class(0) == "Beta"


@pytest.mark.asyncio
async def test_new_session_forgets_previous_assignments(gateway):
    engine = ClassAssignmentEngine(gateway)
    engine.begin_session(SESSION_ID, ["Alpha", "Beta"])
    await engine.override_assignment(0, "Beta")

    engine.begin_session("game_1700000000001_abcdefghi", ["Alpha", "Beta"])

    assert await engine.get_assigned_class(0) == "Alpha"


@pytest.mark.asyncio
async def test_roster_normalizes_names(gateway, store):
    roster = ClassRoster(gateway)
    writes = await roster.save(["  Beta", "Alpha", "Beta", ""])

    assert writes[0].ok
    assert roster.classes == ["Alpha", "Beta"]
    assert await store.get(CLASSES_KEY) == ["Alpha", "Beta"]


@pytest.mark.asyncio
async def test_roster_ignores_malformed_record(gateway, store):
    await store.set(CLASSES_KEY, "Alpha,Beta")
    assert await ClassRoster(gateway).load() == []
