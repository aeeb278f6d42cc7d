"""Configuration loading for signalboard.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from signalboard.config import get_settings

    settings = get_settings()
    capacity = settings.status.history_capacity
"""

from functools import lru_cache

from signalboard.config.loader import load_config
from signalboard.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{SIGNALBOARD_ENV}.toml (environment overrides)
    4. SIGNALBOARD_* environment variables (runtime overrides)

    Call `get_settings.cache_clear()` to reload configuration.

    Returns:
        Settings instance with all configuration loaded and validated
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
