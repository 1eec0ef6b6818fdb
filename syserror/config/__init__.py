"""Config subsystem public API.

Provides:
    get_config() -> AggregatedConfig (schema_version + sections)
    as_dict()    -> dict representation
    ConfigError  -> raised on validation / unknown key
    configure_logging() -> apply logging.level to the `syserror` logger
"""

from .loader import (  # noqa: F401
    get_config,
    as_dict,
    ConfigError,
    clear_config_cache,
    configure_logging,
)


def reset_for_tests() -> None:
    """Drop cached config; delegates to clear_config_cache()."""
    clear_config_cache()


__all__ = [
    "get_config",
    "as_dict",
    "ConfigError",
    "clear_config_cache",
    "configure_logging",
    "reset_for_tests",
]
