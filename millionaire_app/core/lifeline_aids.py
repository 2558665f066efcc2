"""What each lifeline shows once it has been spent."""

from __future__ import annotations

import random
from typing import Sequence

from millionaire_app.constants.game_constants import (
    OPTION_COUNT,
    PHONE_FRIEND_CONFIDENCE_PERCENT,
    SIMULATED_AUDIENCE_MIN_PERCENT,
    SIMULATED_AUDIENCE_SPREAD_PERCENT,
)
from millionaire_app.core.percentages import vote_percentages


def fifty_fifty(correct_index: int, rng: random.Random) -> list[int]:
    """Remove two random wrong options; returns the indices still shown."""
    wrong = [index for index in range(OPTION_COUNT) if index != correct_index]
    removed = set(rng.sample(wrong, 2))
    return [index for index in range(OPTION_COUNT) if index not in removed]


def phone_a_friend(options: Sequence[str], correct_index: int) -> str:
    return (
        f"I'm pretty confident the answer is {options[correct_index]}. "
        f"I'd say about {PHONE_FRIEND_CONFIDENCE_PERCENT}% sure!"
    )


def simulated_audience_poll(correct_index: int, rng: random.Random) -> list[int]:
    """Poll used when nobody has voted yet; favours the correct option."""
    results = [0] * OPTION_COUNT
    results[correct_index] = SIMULATED_AUDIENCE_MIN_PERCENT + rng.randrange(SIMULATED_AUDIENCE_SPREAD_PERCENT)
    remaining = 100 - results[correct_index]
    for index in range(OPTION_COUNT):
        if index == correct_index:
            continue
        share = rng.randrange(remaining) if remaining > 0 else 0
        results[index] = share
        remaining -= share
    results[correct_index] += remaining
    return results


def ask_the_audience(
    votes: Sequence[int], correct_index: int, rng: random.Random
) -> tuple[list[int], bool]:
    """Return percentages and whether they were simulated."""
    if sum(votes) > 0:
        return vote_percentages(votes), False
    return simulated_audience_poll(correct_index, rng), True
