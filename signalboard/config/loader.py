"""Layered TOML loading for board settings.

``default.toml`` is required and is the base layer; ``{SIGNALBOARD_ENV}.toml``
is laid over it when present. Every key a layer sets is attributed to that
file, so ``LoadedConfig.source_of("status.default_flash_ms")`` tells which
file the effective value came from.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from signalboard.config.settings import Settings
from signalboard.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FILE = "default.toml"

# Sections that must be TOML tables when present.
TABLE_SECTIONS: frozenset[str] = frozenset({"status", "observability"})


class ConfigError(ValueError):
    """A configuration file has the wrong shape for board settings."""


@dataclass
class LoadedConfig:
    """Merged configuration plus the file each dotted key was last set by."""

    values: dict[str, Any] = field(default_factory=dict)
    sources: dict[str, Path] = field(default_factory=dict)

    def source_of(self, key: str) -> Path | None:
        return self.sources.get(key)


def get_config_dir() -> Path:
    """Locate the directory holding ``default.toml``.

    SIGNALBOARD_CONFIG_DIR wins when set. Otherwise the current directory and
    up to four parents are searched for ``config/default.toml``.
    """
    config_dir_env = os.environ.get("SIGNALBOARD_CONFIG_DIR")
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    current = Path.cwd()
    for _ in range(5):
        candidate = current / "config"
        if (candidate / DEFAULT_FILE).is_file():
            return candidate
        current = current.parent

    return Path("config")


def get_environment() -> str:
    """Get the current environment from SIGNALBOARD_ENV, 'development' by default."""
    return os.environ.get("SIGNALBOARD_ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def flatten_keys(data: dict[str, Any], prefix: str = "") -> list[str]:
    """Dotted paths of every leaf value in ``data``."""
    keys: list[str] = []
    for key, value in data.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict) and value:
            keys.extend(flatten_keys(value, f"{path}."))
        else:
            keys.append(path)
    return keys


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Nested dictionaries are merged recursively; other values are replaced.
    Neither input is modified.
    """
    result = base.copy()

    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def check_layer(data: dict[str, Any], path: Path) -> None:
    """Reject misshapen sections and warn about ones Settings will ignore."""
    for section in TABLE_SECTIONS:
        if section in data and not isinstance(data[section], dict):
            raise ConfigError(
                f"{path}: [{section}] must be a table, "
                f"got {type(data[section]).__name__}"
            )

    unknown = sorted(set(data) - set(Settings.model_fields))
    if unknown:
        logger.warning("config_unknown_section", file=str(path), sections=unknown)


def apply_layer(loaded: LoadedConfig, data: dict[str, Any], path: Path) -> None:
    """Merge one file into ``loaded`` and attribute its keys to ``path``."""
    check_layer(data, path)
    keys = flatten_keys(data)
    overridden = [key for key in keys if key in loaded.sources]

    # Replacing a table with a scalar, or the reverse, drops the old leaves.
    for key in keys:
        stale = [
            s for s in loaded.sources
            if s.startswith(f"{key}.") or key.startswith(f"{s}.")
        ]
        for s in stale:
            del loaded.sources[s]

    loaded.values = deep_merge(loaded.values, data)
    for key in keys:
        loaded.sources[key] = path

    logger.debug("config_layer_applied", file=str(path), keys=len(keys))
    if overridden:
        logger.info("config_override", file=str(path), keys=overridden)


def load_layers() -> LoadedConfig:
    """Load ``default.toml`` and the environment file, tracking key sources."""
    config_dir = get_config_dir()

    default_path = config_dir / DEFAULT_FILE
    if not default_path.exists():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            "Create config/default.toml or set SIGNALBOARD_CONFIG_DIR."
        )

    loaded = LoadedConfig()
    apply_layer(loaded, load_toml(default_path), default_path)

    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.exists():
        apply_layer(loaded, load_toml(env_path), env_path)

    return loaded


def load_config() -> dict[str, Any]:
    """Merged configuration values from ``default.toml`` and the environment file."""
    return load_layers().values
