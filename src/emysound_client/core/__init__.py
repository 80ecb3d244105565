"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML + environment)
- Logging setup (Loguru)
"""

# Configuration
from .config import (
    Config,
    IdentityConfig,
    LoggingConfig,
    QueryConfig,
    ServiceConfig,
    get_config_dir,
    get_config_path,
    load_config,
)

# Logging
from .output import setup_loguru

__all__ = [
    "Config",
    "IdentityConfig",
    "LoggingConfig",
    "QueryConfig",
    "ServiceConfig",
    "get_config_dir",
    "get_config_path",
    "load_config",
    "setup_loguru",
]
