"""
Success transports: one HTTPS GET, body text back.

Two interchangeable implementations:
- HttpxTransport: full-featured client (tag "curl")
- UrllibTransport: stdlib fallback when httpx is not installed (tag "fgc")

A transport returns None when no response was obtained at all.
"""

from __future__ import annotations

import http.client
import logging
import ssl
import urllib.request
from abc import ABC, abstractmethod
from typing import Optional
from urllib.error import HTTPError

try:
    import httpx
except ImportError:
    httpx = None

from success.config import ClientConfig, DEFAULT_TIMEOUT_S

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Fetch a URL with GET. Subclasses set `tag` for server-side diagnostics."""

    tag: str = ""

    @abstractmethod
    def fetch(self, url: str) -> Optional[str]:
        """Body text of the response, or None when no response was obtained."""


class HttpxTransport(Transport):
    """GET via httpx, certificate verified, compressed responses decoded."""

    tag = "curl"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_S, client: Optional["httpx.Client"] = None) -> None:
        if httpx is None:
            raise RuntimeError("httpx is not installed")
        self.timeout = timeout
        self._client = client

    def fetch(self, url: str) -> Optional[str]:
        headers = {"Accept-Encoding": "gzip, deflate"}
        try:
            if self._client is not None:
                resp = self._client.get(url, headers=headers, timeout=self.timeout)
            else:
                with httpx.Client(verify=True, timeout=self.timeout) as client:
                    resp = client.get(url, headers=headers)
            return resp.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug("httpx GET failed: %s", e)
            return None


class UrllibTransport(Transport):
    """GET via urllib, certificate and hostname verified, no compression."""

    tag = "fgc"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_S) -> None:
        self.timeout = timeout

    def _context(self) -> ssl.SSLContext:
        # check_hostname covers the *.appspot.com certificate match
        ctx = ssl.create_default_context()
        ctx.options |= ssl.OP_NO_COMPRESSION
        return ctx

    def fetch(self, url: str) -> Optional[str]:
        try:
            req = urllib.request.Request(
                url,
                headers={"Accept-Encoding": "identity"},
                method="GET",
            )
            with urllib.request.urlopen(req, timeout=self.timeout, context=self._context()) as resp:
                return resp.read().decode("utf-8", errors="replace")
        except HTTPError as e:
            # Error statuses still carry the server's JSON verdict
            if e.fp is None:
                logger.debug("urllib GET failed: %s", e)
                return None
            try:
                return e.read().decode("utf-8", errors="replace")
            except (OSError, http.client.HTTPException) as read_err:
                logger.debug("urllib GET failed reading error body: %s", read_err)
                return None
        except (OSError, http.client.HTTPException, ValueError) as e:
            # ValueError: malformed URL (e.g. no scheme in base_url)
            logger.debug("urllib GET failed: %s", e)
            return None


def httpx_available() -> bool:
    return httpx is not None


def select_transport(config: ClientConfig) -> Transport:
    """
    Pick the transport named by config.transport.

    "auto" prefers httpx and falls back to urllib when it is missing.
    """
    if config.transport == "urllib":
        return UrllibTransport(timeout=config.timeout)
    if config.transport == "httpx" or httpx_available():
        return HttpxTransport(timeout=config.timeout)
    logger.debug("httpx not installed, using urllib transport")
    return UrllibTransport(timeout=config.timeout)
