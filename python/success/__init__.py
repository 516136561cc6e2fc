"""
Success: heartbeat reporting client for the Success monitoring service.

Declare that something should keep happening and report each time it does:

    from success import expect
    expect("nightly-backup").every("1d").email("ops@example.com").send()

The service watches for silence and alerts by email or SMS. Reporting
never raises; failures are logged as warnings and send() returns False.
"""

__version__ = "0.1.0"

from success.config import BASE_URL, TRIAL, ClientConfig
from success.expect import CANCEL, NEVER, Expectation, expect
from success.protocol import (
    ReportError,
    TransportFailure,
    ProtocolFailure,
    ApplicationFailure,
    build_payload,
    process_response,
)
from success.transport import HttpxTransport, Transport, UrllibTransport, select_transport

__all__ = [
    "BASE_URL",
    "TRIAL",
    "CANCEL",
    "NEVER",
    "ClientConfig",
    "Expectation",
    "expect",
    "ReportError",
    "TransportFailure",
    "ProtocolFailure",
    "ApplicationFailure",
    "build_payload",
    "process_response",
    "Transport",
    "HttpxTransport",
    "UrllibTransport",
    "select_transport",
]
