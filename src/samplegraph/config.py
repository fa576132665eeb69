"""
Settings loading.

Values come from ``configs/config.yaml`` and can be overridden by
environment variables (a ``.env`` file is loaded first).
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv

from samplegraph.errors import ConfigError

DEFAULT_CONFIG_PATH = "configs/config.yaml"


@dataclass(frozen=True)
class Settings:
    genius_key: Optional[str] = None
    genius_base_url: str = "https://api.genius.com"
    key_expiry: int = 86400
    cache_backend: str = "sqlite"
    cache_path: str = "data/cache/samplegraph.db"
    default_degree: int = 2

    def require_genius_key(self) -> str:
        if not self.genius_key:
            raise ConfigError("Missing Genius API key: set GENIUS_KEY")
        return self.genius_key


def _int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}", e) from e


def parse_degree(value: Any, name: str = "DEGREE") -> int:
    """Parse a degree of separation; must be a non-negative integer."""
    degree = _int(value, name)
    if degree < 0:
        raise ConfigError(f"{name} must be >= 0, got {degree}")
    return degree


def load_settings(config_path: str | Path = DEFAULT_CONFIG_PATH,
                  env: Optional[Dict[str, str]] = None) -> Settings:
    """
    Load settings from YAML with environment overrides.

    Args:
        config_path: YAML config file; a missing file means all defaults
        env: Environment mapping, ``os.environ`` when None

    Returns:
        The settings
    """
    if env is None:
        load_dotenv()
        env = os.environ

    cfg: Dict[str, Any] = {}
    config_path = Path(config_path)
    if config_path.exists():
        with open(config_path, "r") as f:
            cfg = yaml.safe_load(f) or {}

    genius = cfg.get("genius") or {}
    cache = cfg.get("cache") or {}
    graph = cfg.get("graph") or {}
    defaults = Settings()

    key_expiry = _int(env.get("KEY_EXPIRY", cache.get("key_expiry", defaults.key_expiry)), "KEY_EXPIRY")
    degree = parse_degree(env.get("GRAPH_DEGREE", graph.get("default_degree", defaults.default_degree)),
                          "GRAPH_DEGREE")
    backend = env.get("CACHE_BACKEND", cache.get("backend", defaults.cache_backend))

    if key_expiry <= 0:
        raise ConfigError(f"KEY_EXPIRY must be positive, got {key_expiry}")
    if backend not in ("sqlite", "memory"):
        raise ConfigError(f"unknown cache backend {backend!r}")

    return Settings(
        genius_key=env.get("GENIUS_KEY", genius.get("key")),
        genius_base_url=env.get("GENIUS_BASE_URL", genius.get("base_url", defaults.genius_base_url)),
        key_expiry=key_expiry,
        cache_backend=backend,
        cache_path=env.get("CACHE_PATH", cache.get("path", defaults.cache_path)),
        default_degree=degree,
    )
