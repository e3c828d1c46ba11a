"""Token exchange and validation service for the ZIQX gateway.

Exchanges authorization codes for tokens and checks bearer tokens against
the gateway introspection endpoint (V1 or V2, fixed per deployment).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ziqx_auth.client.models.config import (
    ValidationEndpoint,
    ZAuthSettings,
    settings as default_settings,
)
from ziqx_auth.client.models.errors import (
    InvalidArgument,
    ProtocolMismatch,
    TransportFailure,
)
from ziqx_auth.client.models.tokens import TokenExchangeRequest

logger = logging.getLogger(__name__)


class TokenService:
    """Validates tokens and exchanges authorization codes with ZIQX Auth.

    The two operations deliberately treat failures differently:
    - ``validate`` fails closed: any transport or protocol problem is
      logged and reported as ``False``.
    - ``get_auth_token`` returns the gateway payload whatever the status
      code and raises on transport or parsing failures.
    """

    def __init__(
        self,
        validation_endpoint: ValidationEndpoint | None = None,
        settings: ZAuthSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        """Initialize the token service.

        Args:
            validation_endpoint: Introspection endpoint version; defaults to
                the deployment setting
            settings: Gateway configuration; defaults to the environment
            http_client: Pre-configured client to use instead of a new one
            timeout: HTTP request timeout in seconds
        """
        self.settings = settings or default_settings
        self.validation_endpoint = ValidationEndpoint(
            validation_endpoint or self.settings.validation_endpoint
        )
        self.timeout = timeout if timeout is not None else self.settings.timeout
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=self.timeout)

    @property
    def validation_url(self) -> str:
        return self.settings.validation_url_for(self.validation_endpoint)

    async def validate(self, token: str) -> bool:
        """Validate an authentication token with the gateway.

        The token is sent as the raw ``Authorization`` header value.

        Args:
            token: The authentication token to validate

        Returns:
            True only for a 200 response whose JSON body has ``success: true``

        Raises:
            InvalidArgument: If token is empty
        """
        if not token:
            raise InvalidArgument("token is required for validation.")

        logger.debug(
            f"Validating token against {self.validation_endpoint.value} endpoint"
        )

        try:
            response = await self._http_client.get(
                self.validation_url,
                headers={"Authorization": token},
            )

            if response.status_code != 200:
                logger.warning(
                    f"Token validation rejected with status {response.status_code}"
                )
                return False

            data = self._parse_json(response)
            return isinstance(data, dict) and data.get("success") is True

        except httpx.HTTPError as e:
            logger.error(f"Validation failed: transport error: {e!r}")
            return False
        except ProtocolMismatch as e:
            logger.error(f"Validation failed: {e}")
            return False
        except (httpx.InvalidURL, ValueError) as e:
            # Request could not be built: bad validation URL or unencodable token
            logger.error(f"Validation failed: invalid request: {e!r}")
            return False

    async def get_auth_token(
        self,
        *,
        auth_app_key: str,
        auth_secret: str,
        code: str,
        code_verifier: str,
        redirect_uri: str,
    ) -> Any:
        """Exchange an authorization code for an access token.

        Args:
            auth_app_key: The application key
            auth_secret: The application secret
            code: The authorization code received from the callback
            code_verifier: The PKCE code verifier
            redirect_uri: The redirect URI used in the initial request

        Returns:
            The parsed token response, untouched

        Raises:
            InvalidArgument: If any parameter is missing
            TransportFailure: If the request fails at the network level
            ProtocolMismatch: If the response body is not JSON
        """
        token_request = TokenExchangeRequest(
            auth_app_key=auth_app_key,
            auth_secret=auth_secret,
            code=code,
            code_verifier=code_verifier,
            redirect_uri=redirect_uri,
        )
        return await self.exchange_code_for_token(token_request)

    async def exchange_code_for_token(self, token_request: TokenExchangeRequest) -> Any:
        """Send a validated exchange request to the token endpoint.

        Args:
            token_request: Token exchange request parameters

        Returns:
            The parsed token response, whatever the HTTP status

        Raises:
            TransportFailure: If the request fails at the network level
            ProtocolMismatch: If the response body is not JSON
        """
        logger.debug(f"Exchanging authorization code at {self.settings.token_url}")

        try:
            response = await self._http_client.post(
                self.settings.token_url,
                content=token_request.to_json_body(),
                headers=token_request.to_headers(),
            )
        except httpx.HTTPError as e:
            raise TransportFailure(f"HTTP error during token exchange: {e}") from e

        data = self._parse_json(response)

        if response.status_code == 200:
            logger.info("Token exchange successful")
        else:
            logger.warning(f"Token endpoint answered with {response.status_code}")

        return data

    def _parse_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ProtocolMismatch(
                f"Invalid JSON from gateway (status {response.status_code}): {e}"
            ) from e

    async def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._owns_client:
            await self._http_client.aclose()
