"""Validation utilities for Duty Randomizer."""

from pathlib import Path
from typing import Iterable

import pandas as pd


def validate_roster_csv(csv_path: Path, column: str = "name") -> None:
    """Validate a roster CSV file.

    Ensures the CSV file has the correct structure for a participant pool:
    - Has a column holding participant names
    - Has at least 2 rows (participants)
    - No missing or blank names

    Args:
        csv_path: Path to the CSV file to validate
        column: Name of the column holding participant names

    Raises:
        FileNotFoundError: If the CSV file doesn't exist
        ValueError: If the CSV structure or content is invalid
    """
    if not csv_path.exists():
        raise FileNotFoundError(f"Roster file not found: {csv_path}")

    try:
        df = pd.read_csv(csv_path, dtype=str)
    except pd.errors.EmptyDataError:
        raise ValueError("Roster CSV file is empty")
    except Exception as e:
        raise ValueError(f"Failed to read CSV file: {e}")

    if column not in df.columns:
        raise ValueError(
            f"Roster CSV must contain a '{column}' column "
            f"(found: {', '.join(map(str, df.columns))})"
        )

    names = df[column]

    if names.isna().any():
        raise ValueError(f"Column '{column}' contains missing names")

    if (names.str.strip() == "").any():
        raise ValueError(f"Column '{column}' contains blank names")

    if len(names) < 2:
        raise ValueError("Roster CSV must contain at least 2 participants (rows)")


def validate_people_names(people: Iterable[str]) -> None:
    """Validate participant names for the pool.

    Args:
        people: Participant names to validate

    Raises:
        ValueError: If participant names are invalid
    """
    people = list(people)
    if not people:
        raise ValueError("No participants found in pool")

    # Check for empty or whitespace-only names
    for person in people:
        if not person or not person.strip():
            raise ValueError("Participant names cannot be empty or whitespace-only")

    # Check for very long names (likely data issue)
    for person in people:
        if len(person) > 100:
            raise ValueError(f"Participant name too long (max 100 chars): '{person[:50]}...'")


def validate_team_settings(
    team_size: int,
    rounds: int,
    min_appearances: int,
    max_appearances: int,
) -> None:
    """Validate the numeric team settings before building params.

    Pool-dependent checks (pool size, team size against pool size and
    min/max feasibility) are reported by the randomizer itself.

    Args:
        team_size: Members per team
        rounds: Number of rounds
        min_appearances: Minimum appearances per person
        max_appearances: Maximum appearances per person

    Raises:
        ValueError: If a setting is out of range
    """
    if team_size < 1:
        raise ValueError(f"Team size must be at least 1, got {team_size}")

    if rounds < 1:
        raise ValueError(f"Number of rounds must be at least 1, got {rounds}")

    if min_appearances < 0:
        raise ValueError(f"Minimum appearances cannot be negative, got {min_appearances}")

    if max_appearances < 1:
        raise ValueError(f"Maximum appearances must be at least 1, got {max_appearances}")

    if max_appearances < min_appearances:
        raise ValueError(
            f"Maximum appearances ({max_appearances}) cannot be lower than "
            f"minimum appearances ({min_appearances})"
        )
