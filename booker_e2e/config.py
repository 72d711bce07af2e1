"""Run configuration for booker-e2e.

Settings come from the process environment, optionally overlaid with a
``.env`` file (file values win, like ``dotenv.config({override: true})``),
and finally with explicit overrides passed by the CLI.
"""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlparse

from dotenv import dotenv_values

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://restful-booker.herokuapp.com"
DEFAULT_FIXTURE = "booking_data.json"
DEFAULT_TIMEOUT = 10.0
DEFAULT_ENV_FILE = ".env"

ENV_USERNAME = "BOOKER_USERNAME"
ENV_PASSWORD = "BOOKER_PASSWORD"
ENV_BASE_URL = "BOOKER_BASE_URL"
ENV_FIXTURE = "BOOKER_FIXTURE"
ENV_TIMEOUT = "BOOKER_TIMEOUT"
ENV_BASIC_AUTH_USERNAME = "BOOKER_BASIC_AUTH_USERNAME"
ENV_BASIC_AUTH_PASSWORD = "BOOKER_BASIC_AUTH_PASSWORD"


@dataclass(frozen=True)
class RunConfig:
    """Everything a lifecycle run needs before the first request."""
    username: str
    password: str
    base_url: str = DEFAULT_BASE_URL
    fixture_path: Path = Path(DEFAULT_FIXTURE)
    timeout: float = DEFAULT_TIMEOUT
    basic_auth_username: Optional[str] = None
    basic_auth_password: Optional[str] = None

    @property
    def basic_auth(self) -> tuple[str, str]:
        """Credential pair for the delete step's Basic header.

        Falls back to the token credentials when no separate pair is set.
        """
        return (
            self.basic_auth_username or self.username,
            self.basic_auth_password or self.password,
        )

    def redacted(self) -> dict[str, Any]:
        """Settings as a dict that is safe to print."""
        return {
            "username": self.username,
            "password": _mask(self.password),
            "base_url": self.base_url,
            "fixture_path": str(self.fixture_path),
            "timeout": self.timeout,
            "basic_auth_username": self.basic_auth[0],
            "basic_auth_password": _mask(self.basic_auth[1]),
        }


def load_config(
    env_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> RunConfig:
    """Build a RunConfig from environment, .env file and overrides.

    Args:
        env_file: Path to a .env file. None = use ./.env if it exists.
        environ: Base environment (default: os.environ).
        **overrides: RunConfig field values that take precedence.
            None values are ignored.

    Returns:
        Validated RunConfig.

    Raises:
        ConfigurationError: If credentials are missing or a value is invalid.
    """
    values: dict[str, Optional[str]] = dict(os.environ if environ is None else environ)
    values.update(_read_env_file(env_file))

    settings: dict[str, Any] = {
        "username": values.get(ENV_USERNAME),
        "password": values.get(ENV_PASSWORD),
        "base_url": values.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
        "fixture_path": values.get(ENV_FIXTURE) or DEFAULT_FIXTURE,
        "timeout": values.get(ENV_TIMEOUT) or DEFAULT_TIMEOUT,
        "basic_auth_username": values.get(ENV_BASIC_AUTH_USERNAME) or None,
        "basic_auth_password": values.get(ENV_BASIC_AUTH_PASSWORD) or None,
    }

    unknown = set(overrides) - set(settings)
    if unknown:
        raise TypeError(f"Unknown config override(s): {', '.join(sorted(unknown))}")
    settings.update({k: v for k, v in overrides.items() if v is not None})

    missing = [
        key for name, key in (("username", ENV_USERNAME), ("password", ENV_PASSWORD))
        if not settings[name]
    ]
    if missing:
        raise ConfigurationError(
            f"{' or '.join(missing)} is not set (environment or .env file)"
        )

    return RunConfig(
        username=settings["username"],
        password=settings["password"],
        base_url=_parse_base_url(settings["base_url"]),
        fixture_path=Path(settings["fixture_path"]),
        timeout=_parse_timeout(settings["timeout"]),
        basic_auth_username=settings["basic_auth_username"],
        basic_auth_password=settings["basic_auth_password"],
    )


def _read_env_file(env_file: Optional[Union[str, Path]]) -> dict[str, Optional[str]]:
    """Read key/value pairs from a .env file without touching os.environ."""
    if env_file is None:
        default = Path(DEFAULT_ENV_FILE)
        if not default.is_file():
            return {}
        env_path = default
    else:
        env_path = Path(env_file)
        if not env_path.is_file():
            raise ConfigurationError(f"Env file not found: {env_path}")

    return {k: v for k, v in dotenv_values(env_path).items() if v is not None}


def _parse_base_url(raw: str) -> str:
    url = str(raw).strip().rstrip("/")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            f"Invalid base URL '{raw}'. Expected http(s)://host[:port]"
        )
    return url


def _parse_timeout(raw: Any) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Timeout must be a number, got '{raw}'") from None
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigurationError(f"Timeout must be a positive finite number, got {timeout}")
    return timeout


def _mask(secret: str) -> str:
    return "***" if secret else ""
