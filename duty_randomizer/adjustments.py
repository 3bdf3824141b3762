"""Replacing disabled participants in an existing assignment."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Set

from .rng import create_generator


NO_REPLACEMENT_MESSAGE = "No replacement found."
ALL_DISABLED_MESSAGE = "All participants are disabled for this round."


@dataclass
class AdjustmentResult:
    """Adjusted teams, recounted appearances and any constraint violations."""

    teams: List[List[str]]
    errors: Dict[str, str] = field(default_factory=dict)
    appearances: Dict[str, int] = field(default_factory=dict)


def round_key(round_index: int) -> str:
    """Error key for a round-level problem."""
    return f"round-{round_index}"


def calculate_appearances(teams: Iterable[Iterable[str]]) -> Dict[str, int]:
    """Count how many rounds each person appears in."""
    appearances: Dict[str, int] = {}
    for team in teams:
        for person in team:
            appearances[person] = appearances.get(person, 0) + 1
    return appearances


def find_replacement(
    current_team: List[str],
    removed_person: str,
    round_index: int,
    all_teams: List[List[str]],
    pool: List[str],
    disabled: Set[str],
    seed: int,
    min_appearances: int,
    max_appearances: int,
) -> Optional[str]:
    """Find someone to take a removed person's slot in a round.

    Appearances are counted over every other round. Candidates under the
    minimum come first, then those with the fewest appearances; ties are
    broken with a generator seeded from ``seed + round_index``.

    Args:
        current_team: Team for the round, without the removed person
        removed_person: Person being replaced
        round_index: Zero-based index of the round
        all_teams: Teams for every round
        pool: All participants
        disabled: People who may not be picked for this round
        seed: Seed used for the original assignment
        min_appearances: Minimum appearances per person
        max_appearances: Maximum appearances per person

    Returns:
        The replacement, or None if nobody is eligible
    """
    appearances = {person: 0 for person in pool}
    for index, team in enumerate(all_teams):
        if index == round_index:
            continue
        for person in team:
            appearances[person] = appearances.get(person, 0) + 1

    eligible = [
        person for person in pool
        if person != removed_person
        and person not in current_team
        and person not in disabled
        and appearances[person] < max_appearances
    ]
    if not eligible:
        return None

    eligible.sort(
        key=lambda person: (appearances[person] >= min_appearances, appearances[person])
    )
    lowest = appearances[eligible[0]]
    top_candidates = [person for person in eligible if appearances[person] == lowest]

    random = create_generator(seed + round_index)
    return top_candidates[int(random() * len(top_candidates))]


def regenerate_teams_with_disabled(
    original_teams: List[List[str]],
    pool: List[str],
    disabled_by_round: Mapping[int, Set[str]],
    seed: int,
    min_appearances: int,
    max_appearances: int,
) -> AdjustmentResult:
    """Remove disabled people from their rounds and fill the gaps.

    The original teams are left untouched. Problems that cannot be
    repaired are reported in ``errors`` instead of being raised: round-level
    problems under ``round-<index>`` and appearance violations under the
    person's name.

    Args:
        original_teams: Teams produced by randomize_teams
        pool: All participants
        disabled_by_round: Zero-based round index -> people disabled in it
        seed: Seed used for the original assignment
        min_appearances: Minimum appearances per person
        max_appearances: Maximum appearances per person

    Returns:
        AdjustmentResult with the new teams, errors and appearances
    """
    teams = [list(team) for team in original_teams]
    errors: Dict[str, str] = {}

    for round_index in sorted(disabled_by_round):
        if not 0 <= round_index < len(teams):
            continue

        disabled = disabled_by_round[round_index]
        current_team = teams[round_index]
        to_remove = [person for person in current_team if person in disabled]

        for person in to_remove:
            current_team.remove(person)
            replacement = find_replacement(
                current_team,
                person,
                round_index,
                teams,
                pool,
                disabled,
                seed,
                min_appearances,
                max_appearances,
            )
            if replacement is None:
                errors[round_key(round_index)] = NO_REPLACEMENT_MESSAGE
            else:
                current_team.append(replacement)

    appearances = {person: 0 for person in pool}
    appearances.update(calculate_appearances(teams))
    for person in pool:
        count = appearances[person]
        if count < min_appearances:
            errors[person] = (
                f"Must appear at least {min_appearances} times (currently {count})."
            )
        elif count > max_appearances:
            errors[person] = (
                f"May appear at most {max_appearances} times (currently {count})."
            )

    for round_index in range(len(teams)):
        disabled = disabled_by_round.get(round_index, set())
        if not any(person not in disabled for person in pool):
            errors[round_key(round_index)] = ALL_DISABLED_MESSAGE

    return AdjustmentResult(teams=teams, errors=errors, appearances=appearances)
