"""Game rules shared across the core services and the HTTP layer."""

from __future__ import annotations

PRIZE_LADDER: tuple[int, ...] = (
    100, 200, 300, 500, 1000, 2000, 4000, 8000, 16000, 32000,
    64000, 125000, 250000, 500000, 1000000,
)
MAX_QUESTIONS: int = len(PRIZE_LADDER)
OPTION_COUNT: int = 4

LIFELINE_FIFTY_FIFTY: str = "50-50"
LIFELINE_PHONE: str = "phone"
LIFELINE_AUDIENCE: str = "audience"
LIFELINE_TYPES: tuple[str, ...] = (LIFELINE_FIFTY_FIFTY, LIFELINE_PHONE, LIFELINE_AUDIENCE)

PHONE_FRIEND_CONFIDENCE_PERCENT: int = 85
SIMULATED_AUDIENCE_MIN_PERCENT: int = 60
SIMULATED_AUDIENCE_SPREAD_PERCENT: int = 20
