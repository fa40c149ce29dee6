"""
Coinspot Client Configuration

Immutable client settings plus loaders for YAML files and environment
variables.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .errors import ConfigError

logger = logging.getLogger("coinspot.config")

DEFAULT_API_URL = "https://www.coinspot.com.au/api/"
DEFAULT_TIMEOUT = 10.0

ENV_API_URL = "COINSPOT_API_URL"
ENV_API_KEY = "COINSPOT_API_KEY"
ENV_API_SECRET = "COINSPOT_API_SECRET"


@dataclass(frozen=True)
class ClientConfig:
    """Coinspot API configuration."""
    base_url: str
    api_key: str
    api_secret: str
    timeout: Optional[float] = DEFAULT_TIMEOUT
    # Send only {"nonce": n} as the body while signing the full params.
    nonce_only_body: bool = False

    def __post_init__(self):
        for field_name in ("base_url", "api_key", "api_secret"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{field_name} is required")

        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
                raise ConfigError(f"timeout must be a number, got {self.timeout!r}")
            if self.timeout <= 0:
                raise ConfigError(f"timeout must be positive, got {self.timeout}")

    def __repr__(self) -> str:
        return (
            f"ClientConfig(base_url={self.base_url!r}, api_key='***', "
            f"api_secret='***', timeout={self.timeout!r}, "
            f"nonce_only_body={self.nonce_only_body!r})"
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ClientConfig":
        """
        Build from a mapping with keys url, key, secret.

        Optional keys: timeout, nonce_only_body.

        Raises:
            ConfigError: If a required key is absent or empty.
        """
        if mapping is None:
            raise ConfigError("configuration is required")

        missing = [k for k in ("url", "key", "secret") if not mapping.get(k)]
        if missing:
            raise ConfigError(f"missing configuration: {', '.join(missing)}")

        kwargs: Dict[str, Any] = {}
        if "timeout" in mapping:
            timeout = mapping["timeout"]
            try:
                kwargs["timeout"] = None if timeout is None else float(timeout)
            except (TypeError, ValueError):
                raise ConfigError(f"timeout must be a number, got {timeout!r}")
        if "nonce_only_body" in mapping:
            flag = mapping["nonce_only_body"]
            if not isinstance(flag, bool):
                raise ConfigError(f"nonce_only_body must be true or false, got {flag!r}")
            kwargs["nonce_only_body"] = flag

        return cls(
            base_url=mapping["url"],
            api_key=mapping["key"],
            api_secret=mapping["secret"],
            **kwargs,
        )


def _env_overrides() -> Dict[str, str]:
    overrides = {}
    for key, env_name in (
        ("url", ENV_API_URL),
        ("key", ENV_API_KEY),
        ("secret", ENV_API_SECRET),
    ):
        value = os.getenv(env_name)
        if value:
            overrides[key] = value
    return overrides


def config_from_env() -> ClientConfig:
    """
    Build a ClientConfig from COINSPOT_API_URL / _KEY / _SECRET.

    The URL defaults to the public Coinspot API endpoint.
    """
    mapping: Dict[str, Any] = {"url": DEFAULT_API_URL}
    mapping.update(_env_overrides())
    return ClientConfig.from_mapping(mapping)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings from a YAML file.

    The file holds a `coinspot:` section (url, key, secret, timeout,
    nonce_only_body) and an optional `logging:` section. Credentials in
    the environment take precedence over the file.

    Args:
        config_path: Path to config file. Defaults to ./config.yaml.

    Returns:
        Settings dictionary with `coinspot` and `logging` sections.

    Raises:
        FileNotFoundError: If config file does not exist.
        yaml.YAMLError: If config file is malformed.
        ConfigError: If the coinspot section is not a mapping.
    """
    if config_path is None:
        config_path = Path.cwd() / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        settings = yaml.safe_load(f) or {}

    if not isinstance(settings, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    section = settings.get("coinspot") or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{config_path}: 'coinspot' must be a mapping")

    section = dict(section)
    section.update(_env_overrides())
    settings["coinspot"] = section
    if not isinstance(settings.get("logging"), dict):
        settings["logging"] = {}

    logger.debug("Configuration loaded from %s", config_path)
    return settings


def client_config_from_file(config_path: Optional[Union[str, Path]] = None) -> ClientConfig:
    """Load a YAML file and build the ClientConfig from its coinspot section."""
    return ClientConfig.from_mapping(load_config(config_path)["coinspot"])
