"""Percentage display policy for vote tallies."""

from __future__ import annotations

import math
from typing import Sequence


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def vote_percentages(votes: Sequence[int]) -> list[int]:
    """Convert counts to whole percentages that add up to 100.

    Any rounding surplus or deficit goes to the option with the largest share,
    the lowest index winning ties. An empty tally yields all zeros.
    """
    total = sum(votes)
    if total <= 0:
        return [0] * len(votes)

    percentages = [round_half_up(count / total * 100) for count in votes]
    difference = 100 - sum(percentages)
    if difference:
        largest = max(range(len(percentages)), key=lambda index: (percentages[index], -index))
        percentages[largest] += difference
    return percentages
