"""Environment-driven settings.

Only the listen address is meant to be overridden in practice; the rest are
conveniences for running behind tunnels or while debugging.

  APP_ADDRESS=host:port   (default ":8080", empty host = all interfaces)
  MOCK_LOG_LEVEL=debug
  MOCK_PROXY_HEADERS=0
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


DEFAULT_ADDRESS = ":8080"
DEFAULT_LOG_LEVEL = "info"


def _truthy(value: str | None) -> bool:
    v = (value or "").strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    host: str
    port: int
    log_level: str
    proxy_headers: bool


def parse_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` into its parts.

    ``":8080"`` listens on every interface. IPv6 hosts may be bracketed.
    """

    address = address.strip()
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid listen address {address!r}; expected host:port")
    host = host.strip("[]") or "0.0.0.0"
    return host, int(port)


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if env is None else env
    host, port = parse_address(env.get("APP_ADDRESS") or DEFAULT_ADDRESS)
    proxy_raw = env.get("MOCK_PROXY_HEADERS")
    return Settings(
        host=host,
        port=port,
        log_level=(env.get("MOCK_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().lower(),
        proxy_headers=True if proxy_raw is None else _truthy(proxy_raw),
    )
