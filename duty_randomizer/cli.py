"""Command line interface for Duty Randomizer."""

import re
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from duty_randomizer.assigner import TeamAssigner
from duty_randomizer.config import Config, parse_disabled_entry
from duty_randomizer.randomizer import check_feasibility
from duty_randomizer.seeding import parse_seed


SEPARATOR_RE = re.compile(r"[,\n]+")
OUTPUT_SUFFIXES = {".csv", ".yaml", ".yml"}

def normalize_pool(text: str) -> list[str]:
  """Normalize a pool given as text.

  Names may be comma-separated, newline-separated, or a mix of both.
  Surrounding whitespace is stripped and empty entries are dropped.
  """
  return [name.strip() for name in SEPARATOR_RE.split(text) if name.strip()]

def dedupe_pool(pool: list[str]) -> list[str]:
  """Drop repeated names, keeping the first occurrence."""
  seen = set()
  unique = []
  duplicates = []
  for name in pool:
    if name in seen:
      duplicates.append(name)
      continue
    seen.add(name)
    unique.append(name)

  if duplicates:
    click.secho(f"Duplicate names removed from pool: {duplicates}", fg="yellow")
  return unique

def build_config(
  config_file: Optional[Path],
  pool: Optional[str],
  pool_file: Optional[Path],
  size: Optional[int],
  rounds: Optional[int],
  min_appearances: Optional[int],
  max_appearances: Optional[int],
  seed: Optional[str],
  disable: tuple[str, ...],
) -> tuple[Config, TeamAssigner]:
  """Load the config file, if any, and apply command line overrides."""
  config = Config()
  if config_file is not None:
    config.load_from_file(config_file)
    click.secho(f"Loaded config from {config_file}", fg="blue")

  assigner = TeamAssigner(config)

  if pool_file is not None:
    if pool_file.suffix.lower() == ".csv":
      assigner.load_pool_from_csv(pool_file)
    else:
      with open(pool_file, "r", encoding="utf-8") as f:
        config.pool = normalize_pool(f.read())
  if pool is not None:
    config.pool = normalize_pool(pool)
  config.pool = dedupe_pool(config.pool)

  if size is not None:
    config.team_size = size
  if rounds is not None:
    config.rounds = rounds
  if min_appearances is not None:
    config.min_appearances = min_appearances
  if max_appearances is not None:
    config.max_appearances = max_appearances
  if seed is not None:
    config.seed = seed

  for entry in disable:
    round_index, names = parse_disabled_entry(entry)
    config.disabled.setdefault(round_index, set()).update(names)

  return config, assigner

ASSIGNMENT_OPTIONS = [
  click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
               help="YAML configuration file"),
  click.option("--pool", help="Comma-separated participant names"),
  click.option("--pool-file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
               help="Roster file: CSV with a 'name' column, or names separated by commas or newlines"),
  click.option("--size", type=int, help="Members per team"),
  click.option("--rounds", type=int, help="Number of rounds (default: derived from a date seed)"),
  click.option("--min", "min_appearances", type=int, help="Minimum appearances per person"),
  click.option("--max", "max_appearances", type=int, help="Maximum appearances per person (default: rounds)"),
  click.option("--seed", help="Integer seed or YYYYMMDD date (default: current time)"),
  click.option("--disable", multiple=True, metavar="ROUND:NAMES",
               help="Disable people for a round, e.g. '2:Alice,Bob' (repeatable)"),
]

def assignment_options(func):
  """Options shared by every command that builds an assignment."""
  for option in reversed(ASSIGNMENT_OPTIONS):
    func = option(func)
  return func

@click.group()
def cli():
  """Duty Randomizer CLI for drawing reproducible duty teams."""
  pass

@cli.command()
@click.argument("config_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def init(config_file: Path, force: bool):
  """Write a starter configuration file."""
  if config_file.exists():
    if not force:
      click.secho(f"Error: {config_file} already exists; pass --force to overwrite", fg="red")
      sys.exit(1)
    click.secho(f"Overwriting {config_file}", fg="yellow")

  config = Config()
  config.pool = ["Alice", "Bob", "Carol", "Dave", "Erin"]
  config.team_size = 2
  config.save_to_file(config_file)

  click.secho(f"Wrote starter config to {config_file}", fg="green")

@cli.command()
@assignment_options
@click.option("--output", "output_file", type=click.Path(dir_okay=False, path_type=Path),
              help="Write teams to a .csv, .yaml or .yml file")
def generate(output_file: Optional[Path], **options):
  """Generate duty teams for every round."""
  if output_file is not None and output_file.suffix.lower() not in OUTPUT_SUFFIXES:
    click.secho(f"Error: Unsupported output format '{output_file.suffix}' (use .csv, .yaml or .yml)", fg="red")
    sys.exit(1)

  try:
    config, assigner = build_config(**options)
    run = assigner.assign()
  except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
    click.secho(f"Error: {e}", fg="red")
    sys.exit(1)

  seed_info = run.seed_info
  if seed_info.is_date_seed:
    day = seed_info.parsed_date
    click.secho(f"Seed: {seed_info.seed} ({day.isoformat()}, {day.strftime('%A')})", fg="blue")
  else:
    click.secho(f"Seed: {seed_info.seed}", fg="blue")

  if not run.ok:
    click.secho(f"Error: {run.error.message}", fg="red")
    sys.exit(1)

  for round_index in sorted(config.disabled):
    if round_index >= run.rounds:
      click.secho(f"Round {round_index + 1} does not exist; ignoring disabled people for it", fg="yellow")

  labels = assigner.round_labels(seed_info, run.rounds)
  for label, team in zip(labels, run.teams):
    click.secho(f"{label}: {', '.join(team)}", fg="green")

  click.secho("Appearances:", fg="blue")
  for person in config.pool:
    click.secho(f"  {person}: {run.appearances.get(person, 0)}", fg="blue")

  if run.constraint_errors:
    click.secho("\nConstraint violations:", fg="yellow")
    for key, message in run.constraint_errors.items():
      click.secho(f"  • {key}: {message}", fg="yellow")

  if output_file is not None:
    if output_file.suffix.lower() == ".csv":
      assigner.save_teams_csv(run.teams, output_file, labels)
    else:
      assigner.save_teams_yaml(run.teams, run.appearances, output_file, labels)
    click.secho(f"Saved teams to {output_file}", fg="green")

@cli.command()
@assignment_options
def validate(**options):
  """Validate settings without generating teams."""
  try:
    config, assigner = build_config(**options)
    params = assigner.build_params(parse_seed(config.seed))
  except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
    click.secho(f"Error: {e}", fg="red")
    sys.exit(1)

  error = check_feasibility(params)
  if error is not None:
    click.secho(f"❌ {error.message}", fg="red")
    sys.exit(1)

  click.secho(
    f"✅ Settings are valid: {len(params.pool)} people, {params.rounds} rounds of {params.team_size}, "
    f"appearances {params.min_appearances}-{params.max_appearances}",
    fg="green",
  )

if __name__ == "__main__":
  cli()
