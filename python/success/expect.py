"""
Success expectations: declare that an event should keep happening, report that it did.

    expect("nightly-backup").every("1d").email("ops@example.com").send()

A report is sent once per expectation. If the caller never calls send(),
close() (or leaving a `with` block) sends it. As a last resort the report
is sent when the object is garbage collected; when that happens is up to
the interpreter, so scripts should not rely on it.
"""

from __future__ import annotations

import logging
from typing import Optional

from success.config import ClientConfig
from success.protocol import ReportError, build_payload, build_url, process_response
from success.transport import Transport, select_transport

logger = logging.getLogger(__name__)

CANCEL = "cancel"
NEVER = "never"


def _check_str(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")


class Expectation:
    """
    One monitored event and its reporting parameters.

    Setters return self for chaining. Values are not validated beyond
    type; the server interprets intervals and recipients.
    """

    def __init__(
        self,
        event: str,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        self._sent = True  # nothing to report until construction succeeds
        _check_str("event", event)
        if not event:
            raise ValueError("event must not be empty")

        if config is None:
            try:
                config = ClientConfig.from_env()
            except ValueError as e:
                logger.warning("ignoring environment configuration: %s", e)
                config = ClientConfig()
        self.config = config
        self._transport = transport
        self._event = event
        self._source: Optional[str] = self.config.source
        self._every: Optional[str] = None
        self._email: Optional[str] = None
        self._sms: Optional[str] = None
        self._message: Optional[str] = None
        self._token: str = self.config.token
        self.error: Optional[ReportError] = None
        self._sent = False

    def __repr__(self) -> str:
        return (
            f"Expectation(event={self._event!r}, source={self._source!r}, "
            f"every={self._every!r}, sent={self._sent!r})"
        )

    # --- read-only views ---

    @property
    def event(self) -> str:
        return self._event

    @property
    def source(self) -> Optional[str]:
        return self._source

    @property
    def interval(self) -> Optional[str]:
        return self._every

    @property
    def email_to(self) -> Optional[str]:
        return self._email

    @property
    def sms_to(self) -> Optional[str]:
        return self._sms

    @property
    def message_text(self) -> Optional[str]:
        return self._message

    @property
    def token_value(self) -> str:
        return self._token

    @property
    def sent(self) -> bool:
        return self._sent

    # --- configuration ---

    def from_(self, source: str) -> "Expectation":
        """Where the event happens (defaults to this host)."""
        _check_str("source", source)
        self._source = source
        return self

    def every(self, interval: str) -> "Expectation":
        """
        The event should happen every INTERVAL.

        One of minute, hour, day, week, month, or Nm / Nh / Nd
        where N is a number.
        """
        _check_str("interval", interval)
        self._every = interval
        return self

    def never(self) -> "Expectation":
        """This event should never happen; reporting it raises an alert."""
        self._every = NEVER
        return self

    def cancel(self) -> "Expectation":
        """Stop monitoring this event."""
        self._every = CANCEL
        return self

    def once(self, interval: str) -> "Expectation":
        """Expect one follow-up report within INTERVAL, e.g. for two-step jobs."""
        _check_str("interval", interval)
        return self.every(f"once:{interval}")

    def email(self, recipient: str) -> "Expectation":
        """Email address, recipient handle or group handle to alert."""
        _check_str("recipient", recipient)
        self._email = recipient
        return self

    def sms(self, recipient: str) -> "Expectation":
        """Mobile number, recipient handle or group handle to alert."""
        _check_str("recipient", recipient)
        self._sms = recipient
        return self

    def token(self, value: str) -> "Expectation":
        _check_str("token", value)
        self._token = value
        return self

    def message(self, text: str) -> "Expectation":
        """Free text logged with this report."""
        _check_str("message", text)
        self._message = text
        return self

    # --- reporting ---

    def send(self) -> bool:
        """
        Report to the server. Returns True if the server accepted it.

        Failures are logged as warnings and never raised.
        """
        transport = self._transport
        if transport is None:
            transport = self._transport = select_transport(self.config)

        url = build_url(self.config.base_url, build_payload(self, {"tx": transport.tag}))
        self._sent = True
        try:
            ok = process_response(transport.fetch(url))
        except ReportError as e:
            self.error = e
            logger.warning("%s", e)
            return False
        self.error = None
        return ok

    def close(self) -> None:
        """Send the report if it has not been sent yet."""
        if not self._sent:
            self.send()

    def __enter__(self) -> "Expectation":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """
        Send the report on leaving the block, even if the block raised.

        A raised exception is attached as the message unless one was set,
        so the report records the failure. The exception still propagates.
        """
        if exc_type is not None and self._message is None and not self._sent:
            self._message = f"failed: {exc!r}"
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            logger.warning("report on teardown failed for %r", getattr(self, "_event", None), exc_info=True)


def expect(
    event: str,
    config: Optional[ClientConfig] = None,
    transport: Optional[Transport] = None,
) -> Expectation:
    """Start describing an expected event."""
    return Expectation(event, config=config, transport=transport)
