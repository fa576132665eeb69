"""
Tests for settings loading and store wiring.
"""

import tempfile
import shutil
from pathlib import Path
import pytest

from samplegraph.cache import MemoryKeyValueCache, SQLiteKeyValueCache
from samplegraph.config import Settings, load_settings, parse_degree
from samplegraph.errors import ConfigError
from samplegraph.io import FixtureSource
from samplegraph.models import SongData
from samplegraph.runtime import make_cache, open_store

FIXTURES = Path(__file__).parent / "fixtures" / "songs.yaml"


class TestLoadSettings:
    """Tests for load_settings."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "config.yaml"
        self.config_path.write_text(
            "genius:\n"
            "  base_url: https://genius.test\n"
            "cache:\n"
            "  backend: memory\n"
            "  key_expiry: 600\n"
            "graph:\n"
            "  default_degree: 3\n"
        )

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_defaults_without_file(self):
        """A missing config file yields the default settings."""
        settings = load_settings(Path(self.temp_dir) / "missing.yaml", env={})
        assert settings == Settings()

    def test_yaml_values(self):
        """Values come from the YAML sections."""
        settings = load_settings(self.config_path, env={})
        assert settings.genius_base_url == "https://genius.test"
        assert settings.cache_backend == "memory"
        assert settings.key_expiry == 600
        assert settings.default_degree == 3
        assert settings.genius_key is None

    def test_env_overrides(self):
        """Environment variables win over the YAML file."""
        settings = load_settings(self.config_path, env={
            "GENIUS_KEY": "secret",
            "KEY_EXPIRY": "30",
            "CACHE_BACKEND": "sqlite",
            "CACHE_PATH": "/tmp/x.db",
            "GRAPH_DEGREE": "1",
        })
        assert settings.require_genius_key() == "secret"
        assert settings.key_expiry == 30
        assert settings.cache_backend == "sqlite"
        assert settings.cache_path == "/tmp/x.db"
        assert settings.default_degree == 1

    @pytest.mark.parametrize("env", [
        {"KEY_EXPIRY": "soon"},
        {"KEY_EXPIRY": "0"},
        {"GRAPH_DEGREE": "-1"},
        {"CACHE_BACKEND": "redis"},
    ])
    def test_invalid_values(self, env):
        """Bad numbers and unknown backends raise ConfigError."""
        with pytest.raises(ConfigError):
            load_settings(self.config_path, env=env)

    def test_missing_key_only_fails_when_required(self):
        """Loading succeeds without a key; asking for it fails."""
        settings = load_settings(self.config_path, env={})
        with pytest.raises(ConfigError):
            settings.require_genius_key()


class TestParseDegree:
    """Tests for parse_degree."""

    @pytest.mark.parametrize("value,expected", [("0", 0), ("3", 3), (2, 2)])
    def test_valid(self, value, expected):
        """Non-negative integers and their string forms are accepted."""
        assert parse_degree(value) == expected

    @pytest.mark.parametrize("value", ["two", "", "1.5", "-1", None])
    def test_invalid(self, value):
        """Non-integers and negative degrees raise ConfigError naming the variable."""
        with pytest.raises(ConfigError) as exc:
            parse_degree(value)
        assert "DEGREE" in str(exc.value)


class TestOpenStore:
    """Tests for runtime store construction."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_make_cache(self):
        """The backend setting selects the cache class."""
        assert isinstance(make_cache(Settings(cache_backend="memory")), MemoryKeyValueCache)
        cache = make_cache(Settings(cache_path=str(Path(self.temp_dir) / "c.db")))
        assert isinstance(cache, SQLiteKeyValueCache)
        cache.close()

    def test_open_store_with_fixture_source(self):
        """The store serves fixture songs and closes its cache on exit."""
        settings = Settings(cache_path=str(Path(self.temp_dir) / "c.db"), key_expiry=120)

        with open_store(settings, FixtureSource.from_file(FIXTURES)) as store:
            assert store.key_expiry == 120
            assert store.song(3) == SongData(3, "Cola Bottle Baby", "Edwin Birdsong")

        assert store.cache.conn is None

    def test_open_store_needs_key_for_genius(self):
        """Without a source or a key the store cannot be opened."""
        with pytest.raises(ConfigError):
            with open_store(Settings(cache_backend="memory")):
                pass
