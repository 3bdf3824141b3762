"""Configuration management for Duty Randomizer."""

from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

import yaml


def _split_names(value: Union[str, List[str]]) -> List[str]:
    """Split a comma-separated string or list into stripped, non-empty names."""
    if isinstance(value, str):
        names = value.split(',')
    elif isinstance(value, list):
        names = [str(name) for name in value]
    else:
        raise ValueError("Names must be a comma-separated string or list")

    return [name.strip() for name in names if name.strip()]


def _parse_round_number(value) -> int:
    """Convert a one-based round number (``2`` or ``round2``) to a zero-based index."""
    text = str(value).strip()
    if text.lower().startswith('round'):
        text = text[len('round'):]
    try:
        number = int(text)
    except ValueError:
        raise ValueError(f"Invalid round number: {value!r}")
    if number < 1:
        raise ValueError(f"Round numbers start at 1, got {number}")
    return number - 1


def parse_disabled_entry(entry: str) -> Tuple[int, Set[str]]:
    """Parse a ``round:name,name`` entry into a zero-based round index and names.

    Args:
        entry: Text such as ``2:Alice,Bob`` or ``round2:Alice,Bob``

    Returns:
        Tuple of zero-based round index and the set of disabled names

    Raises:
        ValueError: If the entry is malformed
    """
    round_part, sep, names_part = entry.partition(':')
    if not sep:
        raise ValueError(f"Disabled entry must look like 'ROUND:NAME,NAME', got {entry!r}")

    names = set(_split_names(names_part))
    if not names:
        raise ValueError(f"Disabled entry lists no names: {entry!r}")

    return _parse_round_number(round_part), names


class Config:
    """Configuration class for duty randomization settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        self.pool: List[str] = []
        self.team_size: int = 4
        self.rounds: Optional[int] = None
        self.min_appearances: int = 0
        self.max_appearances: Optional[int] = None
        self.seed: Optional[str] = None
        self.disabled: Dict[int, Set[str]] = {}

    def load_from_file(self, config_path: Path) -> None:
        """Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML file is invalid
            ValueError: If the configuration structure is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)

        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a YAML dictionary")

        if 'pool' in config_data:
            self.pool = _split_names(config_data['pool'])

        team_config = config_data.get('team', {}) or {}
        if not isinstance(team_config, dict):
            raise ValueError("team must be a dictionary")

        if 'size' in team_config:
            self.team_size = self._positive_int(team_config['size'], 'team.size')

        if team_config.get('rounds') is not None:
            self.rounds = self._positive_int(team_config['rounds'], 'team.rounds')

        if 'min' in team_config:
            min_appearances = team_config['min']
            if not isinstance(min_appearances, int) or min_appearances < 0:
                raise ValueError("team.min must be a non-negative integer")
            self.min_appearances = min_appearances

        if team_config.get('max') is not None:
            self.max_appearances = self._positive_int(team_config['max'], 'team.max')

        if config_data.get('seed') is not None:
            # YAML reads 20250101 as an int; keep the text form for date detection
            self.seed = str(config_data['seed']).strip()

        if 'disabled' in config_data:
            disabled = config_data['disabled'] or {}
            if not isinstance(disabled, dict):
                raise ValueError("disabled must map round numbers to names")

            self.disabled = {}
            for round_number, names in disabled.items():
                round_index = _parse_round_number(round_number)
                self.disabled.setdefault(round_index, set()).update(_split_names(names))

    @staticmethod
    def _positive_int(value, name: str) -> int:
        if not isinstance(value, int) or value < 1:
            raise ValueError(f"{name} must be a positive integer")
        return value

    def validate_disabled(self, people: List[str]) -> None:
        """Validate that all disabled people exist in the pool.

        Args:
            people: Participant names in the pool

        Raises:
            ValueError: If a disabled round contains people not in the pool
        """
        all_disabled_people = set()
        for names in self.disabled.values():
            all_disabled_people.update(names)

        unknown_people = all_disabled_people - set(people)
        if unknown_people:
            raise ValueError(
                f"Disabled rounds contain unknown people: {sorted(unknown_people)}"
            )

    def is_disabled(self, round_index: int, person: str) -> bool:
        """Check if a person is disabled for a zero-based round."""
        return person in self.disabled.get(round_index, set())

    def resolve_max(self, rounds: int) -> int:
        """Get the maximum appearances, defaulting to the number of rounds."""
        if self.max_appearances is None:
            return rounds
        return self.max_appearances

    def to_dict(self) -> dict:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary representation of the configuration
        """
        team = {
            'size': self.team_size,
            'min': self.min_appearances,
        }
        if self.rounds is not None:
            team['rounds'] = self.rounds
        if self.max_appearances is not None:
            team['max'] = self.max_appearances

        config_dict = {
            'pool': list(self.pool),
            'team': team,
        }

        if self.seed is not None:
            config_dict['seed'] = self.seed

        if self.disabled:
            config_dict['disabled'] = {
                round_index + 1: ','.join(sorted(names))
                for round_index, names in self.disabled.items()
                if names
            }

        return config_dict

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path where to save the configuration
        """
        config_dict = self.to_dict()

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=True)
