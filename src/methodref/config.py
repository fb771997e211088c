"""
Method reference configuration.

All values configurable via METHODREF_* environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from .exceptions import ConfigError


DEFAULT_IMPORT_ON_RESOLVE = False      # Only already-imported modules count as loaded
DEFAULT_LOG_QUERIES = False            # Per-query DEBUG lines

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no")


def _env_bool(key: str, default: bool, strict: bool = False) -> bool:
    """Read boolean from environment variable."""
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    value = raw.lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    if strict:
        raise ConfigError(key, raw, "expected one of " + ", ".join(_TRUE_VALUES + _FALSE_VALUES))
    return default


@dataclass
class MethodRefConfig:
    """
    Resolution settings for method references.

    Environment Variables:
        METHODREF_IMPORT_ON_RESOLVE: Import missing modules of a dotted
            target name on demand (default: false)
        METHODREF_LOG_QUERIES: Log every query verdict at DEBUG (default: false)
    """

    import_on_resolve: bool = field(default_factory=lambda: _env_bool(
        "METHODREF_IMPORT_ON_RESOLVE", DEFAULT_IMPORT_ON_RESOLVE
    ))
    log_queries: bool = field(default_factory=lambda: _env_bool(
        "METHODREF_LOG_QUERIES", DEFAULT_LOG_QUERIES
    ))

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "import_on_resolve": self.import_on_resolve,
            "log_queries": self.log_queries,
        }


def load_config(strict: bool = False) -> MethodRefConfig:
    """
    Build a config from the environment.

    Args:
        strict: Raise ConfigError on unparseable values instead of
            falling back to the defaults

    Returns:
        A new MethodRefConfig
    """
    return MethodRefConfig(
        import_on_resolve=_env_bool(
            "METHODREF_IMPORT_ON_RESOLVE", DEFAULT_IMPORT_ON_RESOLVE, strict
        ),
        log_queries=_env_bool("METHODREF_LOG_QUERIES", DEFAULT_LOG_QUERIES, strict),
    )


# Global instance for convenience
_default_config: Optional[MethodRefConfig] = None


def get_config() -> MethodRefConfig:
    """Get the global configuration."""
    global _default_config
    if _default_config is None:
        _default_config = load_config()
    return _default_config


def reset_config() -> None:
    """Reset global config (useful after env var changes or for testing)."""
    global _default_config
    _default_config = None
