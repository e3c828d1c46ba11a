"""Authorization redirect service for the ZIQX gateway.

Builds the gateway authorization URL from a request profile and hands it
to a navigator. Two profiles share one contract:

- Full: key, redirect URL and PKCE challenge, with optional challenge
  method and state. Dev mode switches to the development gateway.
- Simple: key only. Dev mode is sent as a ``dev=true`` query flag.
"""

from __future__ import annotations

import logging

from ziqx_auth.client.models.config import ZAuthSettings, settings as default_settings
from ziqx_auth.client.models.flow import (
    AuthorizationRequest,
    FullAuthorizationRequest,
    SimpleAuthorizationRequest,
)
from ziqx_auth.client.services.navigation import BrowserNavigator, Navigator

logger = logging.getLogger(__name__)


class AuthorizationRedirector:
    """Redirects the user to the ZIQX authentication page.

    Example::

        redirector = AuthorizationRedirector.full(
            auth_key="your-auth-key",
            redirect_url="http://localhost:3000/callback",
            code_challenge="your-code-challenge",
        )
        redirector.login()
    """

    def __init__(
        self,
        request: AuthorizationRequest,
        navigator: Navigator | None = None,
        settings: ZAuthSettings | None = None,
    ):
        """Initialize the redirector.

        Args:
            request: Validated authorization request (full or simple profile)
            navigator: Performs the redirect; defaults to the system browser
            settings: Gateway configuration; defaults to the environment
        """
        self.request = request
        self.navigator = navigator or BrowserNavigator()
        self.settings = settings or default_settings

    @classmethod
    def full(
        cls,
        auth_key: str,
        redirect_url: str,
        code_challenge: str,
        code_challenge_method: str | None = None,
        state: str | None = None,
        **kwargs,
    ) -> AuthorizationRedirector:
        """Create a redirector for the full PKCE profile.

        Raises:
            InvalidConfiguration: If auth_key, redirect_url or code_challenge
                is missing
        """
        request = FullAuthorizationRequest(
            auth_key=auth_key,
            redirect_url=redirect_url,
            code_challenge=code_challenge,
            code_challenge_method=code_challenge_method,
            state=state,
        )
        return cls(request, **kwargs)

    @classmethod
    def simple(cls, auth_key: str, **kwargs) -> AuthorizationRedirector:
        """Create a redirector for the key-only profile.

        Raises:
            InvalidConfiguration: If auth_key is missing
        """
        return cls(SimpleAuthorizationRequest(auth_key=auth_key), **kwargs)

    def authorization_url(self, dev_mode: bool = False) -> str:
        """Build the gateway authorization URL without navigating."""
        request = self.request
        if isinstance(request, FullAuthorizationRequest):
            base_url = self.settings.dev_base_url if dev_mode else self.settings.base_url
            return request.build_authorization_url(base_url)
        if isinstance(request, SimpleAuthorizationRequest):
            return request.build_authorization_url(self.settings.base_url, dev_mode)
        raise TypeError(f"Unsupported authorization request: {type(request).__name__}")

    def login(self, dev_mode: bool = False) -> None:
        """Redirect the user to the gateway authorization page.

        Args:
            dev_mode: Target the development gateway
        """
        login_url = self.authorization_url(dev_mode)
        logger.debug(
            f"Redirecting to authorization page for key {self.request.auth_key}"
            f"{' (dev mode)' if dev_mode else ''}"
        )
        self.navigator.navigate(login_url)
