"""Connector configuration and credential resolution."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol


logger = logging.getLogger("jtl_connector.config")

CONFIG_PREFIX = "AydJtlConnector.config."

DEFAULT_APP_ID = "MyApp/1.0.0"
DEFAULT_APP_VERSION = "1.0.0"
DEFAULT_TTL_SECONDS = 300

# Prefixed config key -> environment variable
ENV_VARS: Dict[str, str] = {
    CONFIG_PREFIX + "jtlBaseUrl": "JTL_BASE_URL",
    CONFIG_PREFIX + "jtlApiKey": "JTL_API_KEY",
    CONFIG_PREFIX + "jtlXAppId": "JTL_X_APP_ID",
    CONFIG_PREFIX + "jtlXAppVersion": "JTL_X_APP_VERSION",
    CONFIG_PREFIX + "jtlTtl": "JTL_TTL",
    CONFIG_PREFIX + "cacheTtl": "JTL_CACHE_TTL",
    CONFIG_PREFIX + "enableOnPdp": "JTL_ENABLE_ON_PDP",
}

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigurationError(Exception):
    """Raised when the JTL API base URL or API key is not configured."""


class ConfigStore(Protocol):
    def get(self, key: str) -> Any:
        ...


class EnvConfigStore:
    """Config store backed by environment variables (see ENV_VARS)."""

    def get(self, key: str) -> Any:
        env_name = ENV_VARS.get(key)
        if env_name is None:
            return None
        return os.getenv(env_name)


class DictConfigStore:
    """In-memory config store keyed by the fully prefixed config keys."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    @classmethod
    def from_short_keys(cls, **values: Any) -> "DictConfigStore":
        return cls({CONFIG_PREFIX + k: v for k, v in values.items()})

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[CONFIG_PREFIX + key] = value


@dataclass(frozen=True)
class Credentials:
    api_key: str
    app_id: str
    app_version: str
    base_url: str

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.api_key,
            "X-AppId": self.app_id,
            "X-AppVersion": self.app_version,
        }


class ConnectorSettings:
    """Typed, read-through view of the connector's configuration keys.

    Nothing is cached here: every accessor reads the store again, so a
    configuration change takes effect on the next call.
    """

    def __init__(self, store: ConfigStore) -> None:
        self.store = store

    def _cfg(self, key: str, default: Any = None) -> Any:
        value = self.store.get(CONFIG_PREFIX + key)
        return default if value is None else value

    def _int(self, key: str, default: int) -> int:
        value = self._cfg(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Invalid integer for %s: %r, using %d", key, value, default)
            return default

    def base_url(self) -> str:
        return str(self._cfg("jtlBaseUrl", "")).rstrip("/")

    def credentials(self) -> Credentials:
        """Resolve credentials, raising ConfigurationError when incomplete."""
        api_key = str(self._cfg("jtlApiKey", ""))
        base_url = self.base_url()
        if not api_key or not base_url:
            raise ConfigurationError("JTL API not configured.")
        return Credentials(
            api_key=api_key,
            app_id=str(self._cfg("jtlXAppId", DEFAULT_APP_ID)),
            app_version=str(self._cfg("jtlXAppVersion", DEFAULT_APP_VERSION)),
            base_url=base_url,
        )

    def headers(self) -> Dict[str, str]:
        return self.credentials().headers()

    def item_ttl(self) -> int:
        return self._int("jtlTtl", DEFAULT_TTL_SECONDS)

    def stock_ttl(self) -> int:
        return self._int("cacheTtl", DEFAULT_TTL_SECONDS)

    def enabled_on_pdp(self) -> bool:
        value = self._cfg("enableOnPdp", False)
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return bool(value)
