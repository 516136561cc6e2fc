"""
Success client configuration.

Environment lookups (hostname, env vars) happen here so the builder never
reaches into the process environment itself.
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass, field
from typing import Mapping, Optional

BASE_URL = "https://venditan-success.appspot.com/expect"
TRIAL = "trial"
DEFAULT_TIMEOUT_S = 20.0

TRANSPORTS = ("auto", "httpx", "urllib")


def default_source() -> str:
    """Local hostname, the default reporting source."""
    return socket.gethostname()


@dataclass(frozen=True)
class ClientConfig:
    """Client configuration. Defaults target the public service on the trial tier."""
    base_url: str = BASE_URL
    token: str = TRIAL
    source: str = field(default_factory=default_source)
    timeout: float = DEFAULT_TIMEOUT_S
    transport: str = "auto"  # "auto" | "httpx" | "urllib"

    def __post_init__(self) -> None:
        if self.transport not in TRANSPORTS:
            raise ValueError(f"unknown transport: {self.transport}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Build a config from SUCCESS_* environment variables.

        Unset variables keep their defaults. A malformed value raises
        ValueError naming the variable.
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("SUCCESS_BASE_URL"):
            kwargs["base_url"] = env["SUCCESS_BASE_URL"]
        if env.get("SUCCESS_TOKEN"):
            kwargs["token"] = env["SUCCESS_TOKEN"]
        if env.get("SUCCESS_SOURCE"):
            kwargs["source"] = env["SUCCESS_SOURCE"]
        if env.get("SUCCESS_TIMEOUT"):
            try:
                kwargs["timeout"] = float(env["SUCCESS_TIMEOUT"])
            except ValueError:
                raise ValueError(
                    f"SUCCESS_TIMEOUT must be a number, got {env['SUCCESS_TIMEOUT']!r}"
                ) from None
        if env.get("SUCCESS_TRANSPORT"):
            transport = env["SUCCESS_TRANSPORT"].strip().lower()
            if transport not in TRANSPORTS:
                raise ValueError(
                    f"SUCCESS_TRANSPORT must be one of {', '.join(TRANSPORTS)}, got {transport!r}"
                )
            kwargs["transport"] = transport
        return cls(**kwargs)
