"""Tests for replaying stored votes into class scores."""

import pytest

from millionaire_app.constants.game_constants import PRIZE_LADDER
from millionaire_app.core.models import ClassScoreSummary, QuizQuestion
from millionaire_app.core.services.class_roster import ClassRoster
from millionaire_app.core.services.question_bank import QuestionBank
from millionaire_app.core.services.question_publisher import QuestionPublisher
from millionaire_app.core.services.score_calculator import ScoreCalculator, rank_class_scores
from millionaire_app.core.services.vote_aggregator import VoteAggregator
from millionaire_app.core.store_keys import CLASSES_KEY, class_scores_key

SESSION_ID = "game_1700000000000_abcdefghi"


@pytest.fixture
async def scoring(gateway, store):
    await store.set(class_scores_key(SESSION_ID), {"Alpha": 0, "Beta": 0})
    votes = VoteAggregator(gateway)
    publisher = QuestionPublisher(gateway, votes)
    bank = QuestionBank(gateway)
    calculator = ScoreCalculator(gateway, votes, publisher, bank, ClassRoster(gateway))
    return votes, publisher, bank, calculator


@pytest.mark.asyncio
async def test_correct_votes_score_prize_per_vote(scoring):
    votes, publisher, bank, calculator = scoring
    question = bank.get_question_at_index(0)
    await publisher.publish(SESSION_ID, 0, question.question_text, question.options, 0, "Alpha")
    await votes.record_vote(SESSION_ID, 0, 0, "Alpha")
    await votes.record_vote(SESSION_ID, 0, 0, "Alpha")

    scores = await calculator.compute_class_scores(SESSION_ID)

    assert scores == {
        "Alpha": ClassScoreSummary(total_score=200, correct_answers=2, total_questions=1),
        "Beta": ClassScoreSummary(),
    }


@pytest.mark.asyncio
async def test_recomputation_is_idempotent(scoring):
    votes, _, _, calculator = scoring
    await votes.record_vote(SESSION_ID, 1, 1, "Beta")
    await votes.record_vote(SESSION_ID, 1, 0, "Alpha")

    first = await calculator.compute_class_scores(SESSION_ID)
    second = await calculator.compute_class_scores(SESSION_ID)

    assert first == second
    assert first["Beta"].total_score == PRIZE_LADDER[1]
    assert first["Alpha"] == ClassScoreSummary(total_score=0, correct_answers=0, total_questions=1)


@pytest.mark.asyncio
async def test_late_vote_on_earlier_question_changes_only_that_class(scoring):
    votes, _, _, calculator = scoring
    await votes.record_vote(SESSION_ID, 0, 0, "Alpha")
    before = await calculator.compute_class_scores(SESSION_ID)

    await votes.record_vote(SESSION_ID, 5, 1, "Beta")
    after = await calculator.compute_class_scores(SESSION_ID)

    assert after["Alpha"] == before["Alpha"]
    assert after["Beta"].total_score == before["Beta"].total_score + 2000
    assert after["Beta"].correct_answers == 1


@pytest.mark.asyncio
async def test_snapshot_correct_index_wins_over_bank(scoring):
    votes, publisher, _, calculator = scoring
    await publisher.publish(SESSION_ID, 0, "Custom question", ["a", "b", "c", "d"], 3, "Alpha")
    await votes.record_vote(SESSION_ID, 0, 3, "Alpha")
    await votes.record_vote(SESSION_ID, 0, 0, "Alpha")

    scores = await calculator.compute_class_scores(SESSION_ID)

    assert scores["Alpha"].total_score == 100
    assert scores["Alpha"].correct_answers == 1


@pytest.mark.asyncio
async def test_unknown_correct_index_skips_question(gateway, store):
    votes = VoteAggregator(gateway)
    publisher = QuestionPublisher(gateway, votes)
    bank = QuestionBank(gateway, [QuizQuestion("What is 1 + 1?", ["1", "2", "3", "4"], 1)])
    calculator = ScoreCalculator(gateway, votes, publisher, bank, ClassRoster(gateway))
    await votes.record_vote(SESSION_ID, 4, 0, "Alpha")

    scores = await calculator.compute_class_scores(SESSION_ID)

    assert scores == {}


@pytest.mark.asyncio
async def test_classes_come_from_roster_without_score_record(gateway, store):
    await store.set(CLASSES_KEY, ["Gamma", "Alpha"])
    votes = VoteAggregator(gateway)
    publisher = QuestionPublisher(gateway, votes)
    calculator = ScoreCalculator(gateway, votes, publisher, QuestionBank(gateway), ClassRoster(gateway))

    scores = await calculator.compute_class_scores(SESSION_ID)

    assert list(scores) == ["Alpha", "Gamma"]


@pytest.mark.asyncio
async def test_voting_class_outside_roster_is_scored(scoring):
    votes, _, _, calculator = scoring
    await votes.record_vote(SESSION_ID, 0, 0, "Visitors")
    scores = await calculator.compute_class_scores(SESSION_ID)
    assert list(scores) == ["Alpha", "Beta", "Visitors"]
    assert scores["Visitors"].total_score == 100


@pytest.mark.asyncio
async def test_stored_score_values_are_ignored(gateway, store, scoring):
    _, _, _, calculator = scoring
    await store.set(class_scores_key(SESSION_ID), {"Alpha": 999, "Beta": 5})
    scores = await calculator.compute_class_scores(SESSION_ID)
    assert scores["Alpha"].total_score == 0
    assert scores["Beta"].total_score == 0


def test_rank_orders_by_score_then_name():
    standings = rank_class_scores(
        {
            "Gamma": ClassScoreSummary(total_score=300, correct_answers=2),
            "Alpha": ClassScoreSummary(total_score=100, correct_answers=1),
            "Beta": ClassScoreSummary(total_score=300, correct_answers=3),
        }
    )
    assert [(row.rank, row.class_name) for row in standings] == [(1, "Beta"), (2, "Gamma"), (3, "Alpha")]
    assert standings[0].correct_answers == 3

