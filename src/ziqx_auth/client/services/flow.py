"""Handling of the gateway redirect back to the application.

After login the gateway redirects to the registered URL with either an
authorization code or an error in the query string.
"""

from __future__ import annotations

import logging
import secrets
from urllib.parse import parse_qs, urlparse

from ziqx_auth.client.models.errors import (
    AuthorizationCallbackError,
    StateValidationError,
)
from ziqx_auth.client.models.flow import AuthorizationResponse

logger = logging.getLogger(__name__)


def parse_authorization_callback(
    callback_url: str, expected_state: str | None = None
) -> AuthorizationResponse:
    """Parse the gateway callback URL into an AuthorizationResponse.

    Args:
        callback_url: Full callback URL received from the gateway
        expected_state: State sent with the authorization request, if any

    Returns:
        AuthorizationResponse: Parsed callback response

    Raises:
        AuthorizationCallbackError: If callback URL is malformed
        StateValidationError: If state parameter is missing or doesn't match
    """
    try:
        parsed = urlparse(callback_url)
        query_params = parse_qs(parsed.query)
    except (TypeError, ValueError) as e:
        raise AuthorizationCallbackError(f"Failed to parse callback URL: {e}") from e

    # Extract single values from query parameter lists
    def get_single_param(key: str) -> str | None:
        values = query_params.get(key, [])
        return values[0] if values else None

    auth_response = AuthorizationResponse(
        code=get_single_param("code"),
        state=get_single_param("state"),
        error=get_single_param("error"),
        error_description=get_single_param("error_description"),
    )

    if expected_state is not None:
        if auth_response.state is None:
            raise StateValidationError("Gateway callback missing required state parameter")
        # Constant-time compare; the state is our anti-CSRF token
        if not secrets.compare_digest(
            expected_state.encode(), auth_response.state.encode()
        ):
            raise StateValidationError(
                f"Callback state does not match the login request (got {auth_response.state!r})"
            )

    if auth_response.is_success():
        logger.info("Authorization callback successful - received authorization code")
    elif auth_response.is_error():
        logger.warning(
            f"Authorization callback contained error: {auth_response.error} - "
            f"{auth_response.error_description}"
        )
    else:
        logger.warning("Authorization callback missing both code and error")

    return auth_response
