"""Configuration loading for the Gandi CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional

import httpx

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore

from . import NAME, __version__
from .errors import ConfigIOError, SerializationError
from .logging import get_logger


CONFIG_ENV_PREFIX = "GANDI_"
APIKEY_ENV = f"{CONFIG_ENV_PREFIX}APIKEY"
ENDPOINT_ENV = f"{CONFIG_ENV_PREFIX}API_ENDPOINT"
CONFIG_PATH_ENV = f"{CONFIG_ENV_PREFIX}CONFIG"
DEFAULT_ENDPOINT = "https://api.gandi.net"

logger = get_logger("gandi.config")


def user_agent() -> str:
    """Return the User-Agent sent with every request."""

    return f"{NAME}/{__version__}"


@dataclass(frozen=True)
class Configuration:
    """Credentials and endpoint used to reach the API."""

    apikey: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    use_env_vars: bool = False

    def logging_dict(self) -> Dict[str, Any]:
        """Return a sanitized mapping suitable for structured logging."""

        return {
            "apikey": "***REDACTED***" if self.apikey else None,
            "endpoint": self.endpoint,
            "use_env_vars": self.use_env_vars,
        }

    def headers(self) -> Dict[str, str]:
        """Build the HTTP headers for our configuration."""

        return {
            "Authorization": f"Apikey {self.apikey}",
            "User-Agent": user_agent(),
        }

    def build_request(self, route: str) -> httpx.Request:
        """Return an authenticated GET request for ``route``."""

        return httpx.Request("GET", f"{self.endpoint}{route}", headers=self.headers())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Configuration":
        """Default configuration, taken from the environment only."""

        env = os.environ if environ is None else environ
        return cls(
            apikey=env.get(APIKEY_ENV, ""),
            endpoint=_coerce_endpoint(env.get(ENDPOINT_ENV, DEFAULT_ENDPOINT)),
            use_env_vars=True,
        )

    @classmethod
    def from_file(
        cls, path: Path, environ: Optional[Mapping[str, str]] = None
    ) -> "Configuration":
        """Load the configuration from a TOML file.

        When the file sets ``use_env_vars``, ``GANDI_APIKEY`` and
        ``GANDI_API_ENDPOINT`` take precedence over the file values.
        """

        env = os.environ if environ is None else environ
        file_config = _load_file_config(path)
        config = _apply_mapping(cls(), file_config, path)
        if config.use_env_vars:
            config = _apply_mapping(config, _load_env_config(env), path)
        if "apikey" not in file_config and not (config.use_env_vars and APIKEY_ENV in env):
            raise SerializationError("toml", "missing field `apikey`", path=str(path))
        return config


def _load_file_config(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as f:
            parsed = tomllib.load(f)
    except OSError as exc:
        raise ConfigIOError(str(path), exc.strerror or str(exc)) from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise SerializationError("toml", str(exc), path=str(path)) from exc
    return {k.replace("-", "_"): v for k, v in parsed.items()}


def _load_env_config(environ: Mapping[str, str]) -> Dict[str, Any]:
    mapping: Dict[str, Any] = {}
    if APIKEY_ENV in environ:
        mapping["apikey"] = environ[APIKEY_ENV]
    if ENDPOINT_ENV in environ:
        mapping["endpoint"] = environ[ENDPOINT_ENV]
    return mapping


def _apply_mapping(
    config: Configuration, overrides: Mapping[str, Any], path: Path
) -> Configuration:
    data: MutableMapping[str, Any] = {}
    for key, value in overrides.items():
        if key == "apikey":
            data[key] = _require_str(key, value, path)
        elif key == "endpoint":
            data[key] = _coerce_endpoint(_require_str(key, value, path))
        elif key == "use_env_vars":
            data[key] = _coerce_bool(value)
        else:
            logger.debug("Ignoring unknown configuration key", extra={"key": key})
    return replace(config, **data)


def _require_str(key: str, value: Any, path: Path) -> str:
    if not isinstance(value, str):
        raise SerializationError(
            "toml",
            f"invalid type for `{key}`: expected a string, found {type(value).__name__}",
            path=str(path),
        )
    return value


def _coerce_endpoint(value: str) -> str:
    return value.strip().rstrip("/")


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def load_config(
    path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> Configuration:
    """Public helper used by the entrypoint."""

    if path is None:
        config = Configuration.from_env(environ)
    else:
        config = Configuration.from_file(path, environ)
    logger.debug("Configuration loaded", extra={"config": config.logging_dict()})
    return config
