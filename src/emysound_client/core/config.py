"""
Configuration management for the EmySound client
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from emysound_client.domain.identity import IdentityPolicy, IdentityScheme
from emysound_client.domain.transport import (
    DEFAULT_API_ROOT,
    DEFAULT_PASSWORD,
    DEFAULT_USERNAME,
    normalize_api_root,
)


@dataclass
class ServiceConfig:
    """Configuration for the remote EmySound service."""

    api_root: str = DEFAULT_API_ROOT
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    timeout_seconds: float = 60.0


@dataclass
class IdentityConfig:
    """Configuration for track identity assignment."""

    scheme: str = IdentityScheme.METADATA.value  # 'metadata' or 'random'
    compose: bool = False  # Send "Artist - Title [<uuid>]" as the track id

    def validate(self) -> None:
        """Validate identity configuration values.

        Raises:
            ValueError: If the scheme name is unknown
        """
        self.policy()

    def policy(self) -> IdentityPolicy:
        return IdentityPolicy.from_name(self.scheme, compose=self.compose)


@dataclass
class QueryConfig:
    """Configuration for track queries."""

    min_confidence: float = 0.2

    def validate(self) -> None:
        """Validate query configuration values.

        Raises:
            ValueError: If min_confidence is outside [0, 1]
        """
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError(
                f"Invalid min_confidence: {self.min_confidence}. Must be within [0, 1]"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: str = "emysound-client.log"  # Relative paths resolve against the cwd
    console_output: bool = False  # Also output logs to stderr


@dataclass
class Config:
    """Main configuration object."""

    service: ServiceConfig = field(default_factory=ServiceConfig)
    identity: IdentityConfig = field(default_factory=IdentityConfig)
    query: QueryConfig = field(default_factory=QueryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "emysound-client"
    return Path.home() / ".config" / "emysound-client"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks in the following order:
    1. $EMYSOUND_CONFIG
    2. emysound.toml in the current working directory
    3. XDG_CONFIG_HOME/emysound-client/config.toml (or ~/.config/...)
    """
    env_path = os.environ.get("EMYSOUND_CONFIG")
    if env_path:
        return Path(env_path).expanduser()

    local_config = Path.cwd() / "emysound.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def _apply_env_overrides(config: Config) -> None:
    api_root = os.environ.get("EMYSOUND_API_ROOT")
    if api_root:
        config.service.api_root = api_root

    username = os.environ.get("EMYSOUND_USERNAME")
    if username:
        config.service.username = username

    # Empty password is meaningful, so only skip when unset
    password = os.environ.get("EMYSOUND_PASSWORD")
    if password is not None:
        config.service.password = password


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - EMYSOUND_API_ROOT
    - EMYSOUND_USERNAME
    - EMYSOUND_PASSWORD

    Raises:
        ValueError: If the file contains invalid values or isn't valid TOML, or
            an explicitly given config_path doesn't exist
    """
    if config_path is not None and not Path(config_path).exists():
        raise ValueError(f"Configuration file not found: {config_path}")

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = Path(config_path) if config_path is not None else get_config_path()
    config = Config()

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                toml_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid configuration file {config_path}: {e}") from e

        if "service" in toml_data:
            service_data = toml_data["service"]
            config.service = ServiceConfig(
                api_root=service_data.get("api_root", config.service.api_root),
                username=service_data.get("username", config.service.username),
                password=service_data.get("password", config.service.password),
                timeout_seconds=float(
                    service_data.get("timeout_seconds", config.service.timeout_seconds)
                ),
            )

        if "identity" in toml_data:
            identity_data = toml_data["identity"]
            config.identity = IdentityConfig(
                scheme=identity_data.get("scheme", config.identity.scheme),
                compose=identity_data.get("compose", config.identity.compose),
            )

        if "query" in toml_data:
            query_data = toml_data["query"]
            config.query = QueryConfig(
                min_confidence=float(
                    query_data.get("min_confidence", config.query.min_confidence)
                ),
            )

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level),
                log_file=logging_data.get("log_file", config.logging.log_file),
                console_output=logging_data.get(
                    "console_output", config.logging.console_output
                ),
            )

    _apply_env_overrides(config)
    config.service.api_root = normalize_api_root(config.service.api_root)

    config.identity.validate()
    config.query.validate()
    return config
