"""Exception hierarchy for ZIQX Auth client errors.

Construction and argument errors are raised synchronously before any I/O.
Transport and protocol errors describe what went wrong on the wire.
"""

from __future__ import annotations


class ZAuthError(Exception):
    """Base exception for all ZIQX Auth client errors."""

    pass


class InvalidConfiguration(ZAuthError, ValueError):
    """Raised when required redirect parameters are missing at construction."""

    pass


class InvalidArgument(ZAuthError, ValueError):
    """Raised when a required operation parameter is missing or empty."""

    pass


class TransportFailure(ZAuthError):
    """Raised when a request to the gateway fails at the network level."""

    pass


class ProtocolMismatch(ZAuthError):
    """Raised when the gateway answers with a body that cannot be used."""

    pass


class AuthorizationCallbackError(ZAuthError):
    """Raised when the gateway callback URL is malformed or invalid.

    This indicates the gateway sent an unusable callback URL,
    not that our callback handling code failed.
    """

    pass


class StateValidationError(AuthorizationCallbackError):
    """Raised when the callback state does not match the one we sent.

    Either the state is missing or it differs, which could indicate
    a CSRF attack.
    """

    pass
