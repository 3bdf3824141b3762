"""Core team randomization logic for Duty Randomizer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .rng import create_generator, shuffle


class FailureReason(Enum):
    """Reasons a randomization request can fail."""

    POOL_TOO_SMALL = "pool_too_small"
    TEAM_TOO_LARGE = "team_too_large"
    MIN_TOO_HIGH = "min_too_high"
    MAX_TOO_LOW = "max_too_low"
    CANNOT_SATISFY = "cannot_satisfy"
    MIN_NOT_SATISFIED = "min_not_satisfied"
    INTERNAL = "internal"


@dataclass(frozen=True)
class RandomizationParams:
    """Immutable parameters for a single randomization request."""

    pool: Tuple[str, ...]
    team_size: int
    rounds: int
    min_appearances: int
    max_appearances: int
    seed: int

    def __post_init__(self):
        object.__setattr__(self, "pool", tuple(self.pool))


@dataclass
class RandomizationResult:
    """Teams for each round plus how often each person was selected."""

    teams: List[List[str]]
    appearances: Dict[str, int] = field(default_factory=dict)


@dataclass
class RandomizationError:
    """A failed randomization request."""

    reason: FailureReason
    message: str


Outcome = Union[RandomizationResult, RandomizationError]


def check_feasibility(params: RandomizationParams) -> Optional[RandomizationError]:
    """Check the parameters before any team is generated.

    Args:
        params: Randomization parameters

    Returns:
        The first failed check, or None if generation may proceed
    """
    pool_size = len(params.pool)

    if pool_size < 2:
        return RandomizationError(
            FailureReason.POOL_TOO_SMALL,
            "At least 2 participants are required.",
        )

    if params.team_size >= pool_size:
        return RandomizationError(
            FailureReason.TEAM_TOO_LARGE,
            "Team size must be smaller than the number of participants.",
        )

    total_selections = params.team_size * params.rounds

    if total_selections < params.min_appearances * pool_size:
        return RandomizationError(
            FailureReason.MIN_TOO_HIGH,
            f"Minimum appearances is too high. Lower it from "
            f"{params.min_appearances} to {total_selections // pool_size} or less.",
        )

    if params.max_appearances * pool_size < total_selections:
        return RandomizationError(
            FailureReason.MAX_TOO_LOW,
            f"Maximum appearances is too low. Raise it from "
            f"{params.max_appearances} to {-(-total_selections // pool_size)} or more.",
        )

    return None


def _priority_order(
    people: Sequence[str],
    appearances: Dict[str, int],
    min_appearances: int,
) -> List[str]:
    """Order people with those under the minimum first, then by fewest appearances."""
    return sorted(
        people,
        key=lambda person: (appearances[person] >= min_appearances, appearances[person]),
    )


def randomize_teams(params: RandomizationParams) -> Outcome:
    """Generate a team for every round.

    People who have not reached the minimum number of appearances are
    picked first; the remaining slots go to everyone else still below the
    maximum. Both groups are shuffled with a generator seeded from
    ``params.seed``, so identical params always give identical teams.

    Args:
        params: Randomization parameters

    Returns:
        RandomizationResult on success, RandomizationError otherwise
    """
    error = check_feasibility(params)
    if error is not None:
        return error

    pool = params.pool
    team_size = params.team_size
    min_appearances = params.min_appearances
    max_appearances = params.max_appearances

    random = create_generator(params.seed)
    appearances = {person: 0 for person in pool}
    teams: List[List[str]] = [[] for _ in range(params.rounds)]

    for round_index, team in enumerate(teams):
        while len(team) < team_size:
            eligible = [
                person for person in pool
                if person not in team and appearances[person] < max_appearances
            ]

            remaining_needed = team_size - len(team)
            if len(eligible) < remaining_needed:
                return RandomizationError(
                    FailureReason.CANNOT_SATISFY,
                    "Teams cannot be formed under the given constraints. "
                    "Try raising the maximum appearances or adjusting other settings.",
                )

            ordered = _priority_order(eligible, appearances, min_appearances)
            under_minimum = [p for p in ordered if appearances[p] < min_appearances]

            # Under-minimum people always take the first slots
            selected = shuffle(under_minimum, random)[:remaining_needed]
            for person in selected:
                team.append(person)
                appearances[person] += 1

            if len(team) >= team_size:
                break

            rest = [p for p in ordered if p not in selected]
            still_needed = team_size - len(team)
            for person in shuffle(rest, random)[:still_needed]:
                team.append(person)
                appearances[person] += 1

        if len(team) != team_size:
            return RandomizationError(
                FailureReason.INTERNAL,
                f"Internal error: round {round_index + 1} has {len(team)} members "
                f"(requested team size: {team_size}).",
            )

    if any(appearances[person] < min_appearances for person in pool):
        return RandomizationError(
            FailureReason.MIN_NOT_SATISFIED,
            "Minimum appearances cannot be satisfied. "
            "Try lowering the minimum or adding more rounds.",
        )

    return RandomizationResult(teams=teams, appearances=appearances)
