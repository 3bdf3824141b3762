"""Tests for the config module."""

import tempfile
from pathlib import Path

import pytest
import yaml

from duty_randomizer.config import Config, parse_disabled_entry


def write_yaml(config_data) -> Path:
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_data, f)
        return Path(f.name)


class TestConfig:
    """Test cases for the Config class."""

    def test_default_initialization(self):
        """Test that Config initializes with correct defaults."""
        config = Config()
        assert config.pool == []
        assert config.team_size == 4
        assert config.rounds is None
        assert config.min_appearances == 0
        assert config.max_appearances is None
        assert config.seed is None
        assert config.disabled == {}

    def test_load_team_settings(self):
        """Test loading team settings from YAML."""
        config_path = write_yaml({
            'pool': ['Alice', 'Bob', 'Carol'],
            'team': {'size': 2, 'rounds': 3, 'min': 1, 'max': 2},
            'seed': '20250101',
        })

        try:
            config = Config()
            config.load_from_file(config_path)
            assert config.pool == ['Alice', 'Bob', 'Carol']
            assert config.team_size == 2
            assert config.rounds == 3
            assert config.min_appearances == 1
            assert config.max_appearances == 2
            assert config.seed == '20250101'
        finally:
            config_path.unlink()

    def test_load_pool_string_format(self):
        """Test loading the pool as a comma-separated string."""
        config_path = write_yaml({'pool': 'Alice, Bob ,Carol,'})

        try:
            config = Config()
            config.load_from_file(config_path)
            assert config.pool == ['Alice', 'Bob', 'Carol']
        finally:
            config_path.unlink()

    def test_numeric_seed_kept_as_text(self):
        """Test that an unquoted YAML seed is stored as text."""
        config_path = write_yaml({'seed': 20250104})

        try:
            config = Config()
            config.load_from_file(config_path)
            assert config.seed == '20250104'
        finally:
            config_path.unlink()

    def test_load_disabled(self):
        """Test loading disabled people with one-based round numbers."""
        config_path = write_yaml({
            'pool': ['Alice', 'Bob', 'Carol'],
            'disabled': {1: ['Alice'], 'round3': 'Bob,Carol'},
        })

        try:
            config = Config()
            config.load_from_file(config_path)
            assert config.disabled == {0: {'Alice'}, 2: {'Bob', 'Carol'}}
        finally:
            config_path.unlink()

    def test_invalid_team_size(self):
        """Test that a non-positive team size is rejected."""
        config_path = write_yaml({'team': {'size': 0}})

        try:
            config = Config()
            with pytest.raises(ValueError, match="team.size"):
                config.load_from_file(config_path)
        finally:
            config_path.unlink()

    def test_invalid_min(self):
        """Test that a negative minimum is rejected."""
        config_path = write_yaml({'team': {'min': -1}})

        try:
            config = Config()
            with pytest.raises(ValueError, match="team.min"):
                config.load_from_file(config_path)
        finally:
            config_path.unlink()

    def test_invalid_disabled_structure(self):
        """Test that disabled must be a mapping."""
        config_path = write_yaml({'disabled': ['Alice']})

        try:
            config = Config()
            with pytest.raises(ValueError, match="disabled"):
                config.load_from_file(config_path)
        finally:
            config_path.unlink()

    def test_validate_disabled_success(self):
        """Test successful disabled validation."""
        config = Config()
        config.disabled = {0: {'Alice'}, 1: {'Bob'}}

        config.validate_disabled(['Alice', 'Bob', 'Carol'])  # Should not raise

    def test_validate_disabled_failure(self):
        """Test disabled validation with unknown people."""
        config = Config()
        config.disabled = {0: {'Alice', 'Unknown'}}

        with pytest.raises(ValueError, match="unknown people"):
            config.validate_disabled(['Alice', 'Bob'])

    def test_is_disabled(self):
        """Test checking whether a person is disabled in a round."""
        config = Config()
        config.disabled = {1: {'Bob'}}

        assert config.is_disabled(1, 'Bob')
        assert not config.is_disabled(0, 'Bob')
        assert not config.is_disabled(1, 'Alice')

    def test_resolve_max(self):
        """Test that the maximum defaults to the number of rounds."""
        config = Config()
        assert config.resolve_max(3) == 3

        config.max_appearances = 2
        assert config.resolve_max(3) == 2

    def test_save_to_file(self):
        """Test that a saved config loads back with the same settings."""
        config = Config()
        config.pool = ['Alice', 'Bob', 'Carol']
        config.team_size = 2
        config.max_appearances = 2
        config.seed = '42'
        config.disabled = {1: {'Carol', 'Bob'}}

        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            config_path = Path(f.name)

        try:
            config.save_to_file(config_path)
            with open(config_path, 'r', encoding='utf-8') as f:
                saved = yaml.safe_load(f)
            assert saved['disabled'] == {2: 'Bob,Carol'}

            loaded = Config()
            loaded.load_from_file(config_path)
            assert loaded.to_dict() == config.to_dict()
        finally:
            config_path.unlink()

    def test_invalid_config_structure(self):
        """Test handling of invalid configuration structures."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("invalid: yaml: structure: [")
            config_path = Path(f.name)

        try:
            config = Config()
            with pytest.raises(yaml.YAMLError):
                config.load_from_file(config_path)
        finally:
            config_path.unlink()

    def test_nonexistent_config_file(self):
        """Test handling of nonexistent configuration file."""
        config = Config()
        nonexistent_path = Path('/nonexistent/config.yaml')

        with pytest.raises(FileNotFoundError):
            config.load_from_file(nonexistent_path)


class TestParseDisabledEntry:
    """Test cases for ROUND:NAMES entries."""

    def test_plain_round_number(self):
        """Test a bare one-based round number."""
        assert parse_disabled_entry("2:Alice, Bob") == (1, {'Alice', 'Bob'})

    def test_round_prefix(self):
        """Test the roundN form."""
        assert parse_disabled_entry("round1:Carol") == (0, {'Carol'})

    def test_missing_separator(self):
        """Test that an entry without a colon is rejected."""
        with pytest.raises(ValueError, match="ROUND:NAME"):
            parse_disabled_entry("Alice")

    def test_round_zero(self):
        """Test that round numbers start at 1."""
        with pytest.raises(ValueError, match="start at 1"):
            parse_disabled_entry("0:Alice")

    def test_no_names(self):
        """Test that an entry must name someone."""
        with pytest.raises(ValueError, match="no names"):
            parse_disabled_entry("1:, ,")
