"""Team assignment orchestration for Duty Randomizer."""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
import yaml

from .adjustments import regenerate_teams_with_disabled
from .config import Config
from .randomizer import RandomizationError, RandomizationParams, randomize_teams
from .seeding import SeedInfo, determine_rounds, get_meal_label, is_weekend, parse_seed
from .validators import validate_people_names, validate_roster_csv, validate_team_settings


@dataclass
class AssignmentRun:
    """Everything produced by a single assignment run."""

    seed_info: SeedInfo
    rounds: int
    teams: Optional[List[List[str]]] = None
    appearances: Optional[Dict[str, int]] = None
    error: Optional[RandomizationError] = None
    constraint_errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None


class TeamAssigner:
    """Main class for assigning participants to duty teams."""

    def __init__(self, config: Config):
        """Initialize the team assigner.

        Args:
            config: Configuration object with pool and team settings
        """
        self.config = config

    def load_pool_from_csv(self, roster_file: Path, column: str = "name") -> List[str]:
        """Load the participant pool from a roster CSV file.

        Args:
            roster_file: Path to CSV file with a column of names
            column: Name of the column holding participant names

        Returns:
            Participant names in file order

        Raises:
            ValueError: If the roster is invalid
        """
        validate_roster_csv(roster_file, column)

        df = pd.read_csv(roster_file, dtype=str)
        pool = [name.strip() for name in df[column].tolist()]
        self.config.pool = pool

        return pool

    def build_params(self, seed_info: SeedInfo) -> RandomizationParams:
        """Build randomization params from the config and a parsed seed.

        Args:
            seed_info: Parsed seed

        Returns:
            Immutable parameters for the randomizer

        Raises:
            ValueError: If the pool or team settings are invalid
        """
        rounds = determine_rounds(seed_info.parsed_date, self.config.rounds)
        max_appearances = self.config.resolve_max(rounds)

        validate_people_names(self.config.pool)
        validate_team_settings(
            self.config.team_size,
            rounds,
            self.config.min_appearances,
            max_appearances,
        )
        self.config.validate_disabled(self.config.pool)

        return RandomizationParams(
            pool=tuple(self.config.pool),
            team_size=self.config.team_size,
            rounds=rounds,
            min_appearances=self.config.min_appearances,
            max_appearances=max_appearances,
            seed=seed_info.seed,
        )

    def assign(self, clock: Callable[[], float] = time.time) -> AssignmentRun:
        """Randomize teams and apply any disabled participants.

        Args:
            clock: Source of the current time, used only when no seed is set

        Returns:
            AssignmentRun with teams or the reason generation failed

        Raises:
            ValueError: If the pool or team settings are invalid
        """
        seed_info = parse_seed(self.config.seed, clock=clock)
        params = self.build_params(seed_info)
        run = AssignmentRun(seed_info=seed_info, rounds=params.rounds)

        outcome = randomize_teams(params)
        if isinstance(outcome, RandomizationError):
            run.error = outcome
            return run

        run.teams = outcome.teams
        run.appearances = outcome.appearances

        if any(self.config.disabled.values()):
            adjusted = regenerate_teams_with_disabled(
                outcome.teams,
                list(params.pool),
                self.config.disabled,
                params.seed,
                params.min_appearances,
                params.max_appearances,
            )
            run.teams = adjusted.teams
            run.appearances = adjusted.appearances
            run.constraint_errors = adjusted.errors

        return run

    def round_labels(self, seed_info: SeedInfo, rounds: int) -> List[str]:
        """Label each round by meal when the seed is a date."""
        if not seed_info.is_date_seed:
            return [f"Round {index + 1}" for index in range(rounds)]

        weekend = is_weekend(seed_info.parsed_date)
        return [get_meal_label(index, weekend) for index in range(rounds)]

    def save_teams_csv(
        self,
        teams: List[List[str]],
        output_path: Path,
        labels: Optional[List[str]] = None
    ) -> None:
        """Save teams to CSV with one row per selected person.

        Args:
            teams: Team for each round
            output_path: Path where to save the teams CSV
            labels: Optional label for each round
        """
        rows = []
        for round_index, team in enumerate(teams):
            label = labels[round_index] if labels else f"Round {round_index + 1}"
            for slot, person in enumerate(team, start=1):
                rows.append({
                    'round': round_index + 1,
                    'label': label,
                    'slot': slot,
                    'name': person,
                })

        teams_df = pd.DataFrame(rows, columns=['round', 'label', 'slot', 'name'])
        teams_df.to_csv(output_path, index=False)

    def save_teams_yaml(
        self,
        teams: List[List[str]],
        appearances: Dict[str, int],
        output_path: Path,
        labels: Optional[List[str]] = None
    ) -> None:
        """Save teams and appearance counts to YAML.

        Args:
            teams: Team for each round
            appearances: Number of rounds each person appears in
            output_path: Path where to save the YAML file
            labels: Optional label for each round
        """
        yaml_data = {
            'rounds': [
                {
                    'round': round_index + 1,
                    'label': labels[round_index] if labels else f"Round {round_index + 1}",
                    'team': list(team),
                }
                for round_index, team in enumerate(teams)
            ],
            'appearances': dict(appearances),
        }

        with open(output_path, 'w', encoding='utf-8') as f:
            yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def get_assignment_summary(
        self,
        teams: List[List[str]],
        appearances: Dict[str, int]
    ) -> Dict[str, Any]:
        """Get a summary of the assignment results.

        Args:
            teams: Team for each round
            appearances: Number of rounds each person appears in

        Returns:
            Dictionary with assignment statistics
        """
        pool = self.config.pool or list(appearances)
        counts = {person: appearances.get(person, 0) for person in pool}

        if not counts:
            return {
                'total_people': 0,
                'rounds': len(teams),
                'team_sizes': [len(team) for team in teams],
                'appearances': {},
                'average_appearances': 0.0,
                'unselected': [],
                'max_gap': 0
            }

        values = list(counts.values())

        return {
            'total_people': len(counts),
            'rounds': len(teams),
            'team_sizes': [len(team) for team in teams],
            'appearances': counts,
            'average_appearances': round(sum(values) / len(values), 2),
            'unselected': [person for person, count in counts.items() if count == 0],
            'max_gap': max(values) - min(values)
        }
