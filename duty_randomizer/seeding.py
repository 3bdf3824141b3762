"""Seed parsing and date-derived defaults for Duty Randomizer."""

import re
import time
from datetime import date, timedelta
from typing import Callable, NamedTuple, Optional


DATE_SEED_RE = re.compile(r"[0-9]{8}")
LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")

WEEKDAY_MEALS = ["Breakfast", "Lunch", "Dinner"]


class SeedInfo(NamedTuple):
    """A parsed seed and the date it encodes, if any."""

    seed: int
    is_date_seed: bool
    parsed_date: Optional[date]


def _calendar_date(year: int, month: int, day: int) -> date:
    """Build a date from YYYYMMDD fields, rolling over out of range months and days.

    Two digit years are read as 19xx and ``20250230`` becomes 2 March 2025,
    matching how browsers build dates from the same fields.
    """
    if year < 100:
        year += 1900
    extra_years, month_index = divmod(month - 1, 12)
    return date(year + extra_years, month_index + 1, 1) + timedelta(days=day - 1)


def _timestamp_seed(clock: Callable[[], float]) -> int:
    return int(clock() * 1000)


def parse_seed(
    seed_input: Optional[str],
    clock: Callable[[], float] = time.time,
) -> SeedInfo:
    """Parse seed input, recognising YYYYMMDD dates.

    An eight digit string is a date seed and keeps its numeric value as the
    seed. Out of range days or months roll over into neighbouring dates
    (``20251301`` is 1 January 2026). Other input is read as a
    leading integer (``"42abc"`` gives 42). Missing or unparseable input
    falls back to the current time in milliseconds, which is not
    reproducible.

    Args:
        seed_input: Raw seed text, or None
        clock: Source of the current time in seconds

    Returns:
        SeedInfo with the seed and parsed date
    """
    if not seed_input:
        return SeedInfo(_timestamp_seed(clock), False, None)

    if DATE_SEED_RE.fullmatch(seed_input):
        try:
            parsed = _calendar_date(int(seed_input[:4]), int(seed_input[4:6]), int(seed_input[6:]))
        except (ValueError, OverflowError):
            parsed = None
        if parsed is not None:
            return SeedInfo(int(seed_input), True, parsed)

    match = LEADING_INT_RE.match(seed_input)
    if match is None:
        return SeedInfo(_timestamp_seed(clock), False, None)

    return SeedInfo(int(match.group(1)), False, None)


def is_weekend(day: date) -> bool:
    """Check if a date falls on Saturday or Sunday."""
    return day.weekday() >= 5


def determine_rounds(parsed_date: Optional[date], user_rounds: Optional[int]) -> int:
    """Decide how many rounds to generate.

    An explicit positive round count always wins. Otherwise a date seed
    gives 2 rounds on weekends (brunch and dinner) and 3 on weekdays
    (breakfast, lunch and dinner); without a date there is a single round.
    """
    if user_rounds is not None and user_rounds > 0:
        return user_rounds

    if parsed_date is None:
        return 1

    return 2 if is_weekend(parsed_date) else 3


def get_meal_label(round_index: int, weekend: bool) -> str:
    """Get the meal label for a zero-based round index."""
    if weekend:
        return "Brunch" if round_index == 0 else "Dinner"
    if round_index < len(WEEKDAY_MEALS):
        return WEEKDAY_MEALS[round_index]
    return f"Round {round_index + 1}"
