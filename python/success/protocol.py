"""
Success wire protocol: query assembly and response interpretation.

Request is a single GET with the expectation encoded in the query string.
Response is a JSON object, {"success": true} or {"success": false, "messages": [...]}.
"""

from __future__ import annotations

import json
import socket
import urllib.parse
from typing import Any, Dict, Mapping, Optional

PAYLOAD_FIELDS = ("token", "source", "event", "every", "email", "sms", "message")


class ReportError(Exception):
    """A report did not reach the server or was not accepted by it."""


class TransportFailure(ReportError):
    """No response was obtained (DNS, connect, TLS, timeout)."""


class ProtocolFailure(ReportError):
    """The response body is not valid JSON."""


class ApplicationFailure(ReportError):
    """Valid JSON that does not say success."""


def build_payload(expectation: Any, extras: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Request parameters for an expectation.

    Every field in PAYLOAD_FIELDS is present; unset ones are None.
    Extras (e.g. the transport tag) are merged last and may override.
    """
    params: Dict[str, Any] = {
        "token": expectation.token_value,
        "source": expectation.source if expectation.source is not None else socket.gethostname(),
        "event": expectation.event,
        "every": expectation.interval,
        "email": expectation.email_to,
        "sms": expectation.sms_to,
        "message": expectation.message_text,
    }
    if extras:
        params.update(extras)
    return params


def build_url(base_url: str, params: Mapping[str, Any]) -> str:
    """Full request URL. None values are left out of the query string."""
    query = urllib.parse.urlencode([(k, v) for k, v in params.items() if v is not None])
    return f"{base_url}?{query}"


def process_response(body: Optional[str]) -> bool:
    """
    Interpret a response body. Returns True on success, raises ReportError otherwise.

    None means the transport got no response at all.
    """
    if body is None:
        raise TransportFailure("Communication error, HTTP GET failed?")

    try:
        obj = json.loads(body)
    except ValueError:
        raise ProtocolFailure(f"Invalid JSON response from server: {body}") from None

    if isinstance(obj, dict):
        if obj.get("success") is True:
            return True
        messages = obj.get("messages")
        if messages is not None:
            if isinstance(messages, (list, tuple)):
                joined = ", ".join(str(m) for m in messages)
            else:
                joined = str(messages)
            raise ApplicationFailure(f"Failed. Messages from server: {joined}")

    raise ApplicationFailure(f"Unexpected response from server: {body}")
