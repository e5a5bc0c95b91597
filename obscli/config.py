"""Credential and endpoint configuration.

Credentials are looked up through a ``CredentialProvider`` so the command
can be driven from the process environment in production and from a fixed
mapping in tests.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Protocol

from obscli.errors import ConfigError

OBS_USERNAME_ENV = "OBS_USERNAME"
OBS_PASSWORD_ENV = "OBS_PASSWORD"

DEFAULT_API_URL = "https://api.opensuse.org/"


class CredentialProvider(Protocol):
    def get_credential(self, key: str) -> str | None: ...


class EnvironmentCredentials:
    """Reads credentials from ``os.environ``."""

    def get_credential(self, key: str) -> str | None:
        return os.environ.get(key)


class StaticCredentials:
    """Serves credentials from a fixed mapping."""

    def __init__(self, values: Mapping[str, str] | None = None):
        self._values = dict(values or {})

    def get_credential(self, key: str) -> str | None:
        return self._values.get(key)


@dataclass
class OBSCredentials:
    username: str
    password: str
    api_url: str = DEFAULT_API_URL

    def __repr__(self) -> str:
        return f"OBSCredentials(username={self.username!r}, api_url={self.api_url!r})"


def load_credentials(
    provider: CredentialProvider, api_url: str = DEFAULT_API_URL
) -> OBSCredentials:
    """Resolve OBS credentials, failing if either variable is unset or empty."""
    username = provider.get_credential(OBS_USERNAME_ENV)
    if not username:
        raise ConfigError(f"{OBS_USERNAME_ENV} environment variable not set")

    password = provider.get_credential(OBS_PASSWORD_ENV)
    if not password:
        raise ConfigError(f"{OBS_PASSWORD_ENV} environment variable not set")

    if not api_url:
        raise ConfigError("API URL must not be empty")

    return OBSCredentials(username=username, password=password, api_url=api_url)
