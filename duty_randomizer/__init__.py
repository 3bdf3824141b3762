"""Duty Randomizer - Reproducible duty team rotations from a seeded draw."""

__version__ = "0.1.0"

from .assigner import AssignmentRun, TeamAssigner
from .config import Config
from .adjustments import find_replacement, regenerate_teams_with_disabled
from .randomizer import (
    FailureReason,
    RandomizationError,
    RandomizationParams,
    RandomizationResult,
    randomize_teams,
)
from .rng import create_generator

__all__ = [
    "AssignmentRun",
    "TeamAssigner",
    "Config",
    "FailureReason",
    "RandomizationError",
    "RandomizationParams",
    "RandomizationResult",
    "create_generator",
    "find_replacement",
    "randomize_teams",
    "regenerate_teams_with_disabled",
]
