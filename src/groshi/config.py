"""
Configuration management (SSOT).

All configuration keys for the groshi client are defined here; no other
module should invent config keys.

Precedence: environment variables > YAML file > defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

import yaml

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_SECONDS = 10.0


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid configuration: " + "; ".join(errors))


@dataclass
class GroshiConfig:
    """groshi server connection settings.

    - base_url: server root, e.g. http://localhost:8080
    - token: bearer token; empty means unauthenticated
    - timeout_seconds: per-request timeout
    """

    base_url: str = DEFAULT_BASE_URL
    token: str = ""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass
class Config:
    """Application configuration (SSOT)."""

    groshi: GroshiConfig = field(default_factory=GroshiConfig)

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.groshi.base_url:
            errors.append("groshi.base_url is required")
        elif urlparse(self.groshi.base_url).scheme not in ("http", "https"):
            errors.append("groshi.base_url must start with http:// or https://")

        if self.groshi.timeout_seconds <= 0:
            errors.append("groshi.timeout_seconds must be positive")

        return errors

    def raise_if_invalid(self) -> None:
        errors = self.validate()
        if errors:
            raise ConfigValidationError(errors)


def load_config(config_path: Path) -> Config:
    """
    Load configuration from YAML file.

    Environment variables can override config values:
    - GROSHI_URL
    - GROSHI_TOKEN
    - GROSHI_TIMEOUT (request timeout in seconds)
    """
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    groshi_data = data.get("groshi") or {}

    timeout_env = os.environ.get("GROSHI_TIMEOUT", "")
    timeout = groshi_data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    if timeout_env:
        try:
            timeout = float(timeout_env)
        except ValueError:
            pass  # Keep file value

    groshi = GroshiConfig(
        base_url=os.environ.get("GROSHI_URL", groshi_data.get("base_url", DEFAULT_BASE_URL)),
        token=os.environ.get("GROSHI_TOKEN", groshi_data.get("token") or ""),
        timeout_seconds=float(timeout),
    )

    return Config(groshi=groshi)


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# groshi client configuration
#
# Environment variables GROSHI_URL, GROSHI_TOKEN and GROSHI_TIMEOUT
# override the values below.

groshi:
  base_url: "http://localhost:8080"   # groshi server root
  token: ""                           # bearer token (empty: log in first)
  timeout_seconds: 10                 # per-request timeout
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)
