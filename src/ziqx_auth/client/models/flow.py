"""Authorization flow models for the ZIQX gateway.

Contains the two authorization request profiles and callback handling.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union
from urllib.parse import urlencode

from ziqx_auth.client.models.errors import InvalidConfiguration

# Plain URLs stay readable in the query string (redir=http://host/cb)
_URL_SAFE = ":/"


@dataclass(frozen=True)
class FullAuthorizationRequest:
    """PKCE authorization request with an explicit redirect URL.

    When ``code_challenge_method`` is omitted the gateway assumes
    ``"plaintext"``.
    """

    auth_key: str
    redirect_url: str
    code_challenge: str
    code_challenge_method: str | None = None
    state: str | None = None

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("auth_key", "redirect_url", "code_challenge")
            if not getattr(self, name)
        ]
        if missing:
            raise InvalidConfiguration(
                "Missing required authorization parameters: "
                f"{', '.join(missing)}. `auth_key`, `redirect_url` and "
                "`code_challenge` are required."
            )

    def build_authorization_url(self, base_url: str) -> str:
        """Build the complete authorization URL.

        Parameter order is fixed: key, redir, code_challenge,
        challenge_method, state.
        """
        params = {
            "key": self.auth_key,
            "redir": self.redirect_url,
            "code_challenge": self.code_challenge,
        }

        if self.code_challenge_method:
            params["challenge_method"] = self.code_challenge_method
        if self.state:
            params["state"] = self.state

        return f"{base_url}?{urlencode(params, safe=_URL_SAFE)}"


@dataclass(frozen=True)
class SimpleAuthorizationRequest:
    """Key-only authorization request; dev mode is a query flag."""

    auth_key: str

    def __post_init__(self) -> None:
        if not self.auth_key:
            raise InvalidConfiguration(
                "Missing required authorization parameter: `auth_key`."
            )

    def build_authorization_url(self, base_url: str, dev_mode: bool = False) -> str:
        """Build the authorization URL, appending ``dev=true`` in dev mode."""
        params = {"key": self.auth_key}

        if dev_mode:
            params["dev"] = "true"

        return f"{base_url}?{urlencode(params, safe=_URL_SAFE)}"


AuthorizationRequest = Union[FullAuthorizationRequest, SimpleAuthorizationRequest]


@dataclass(frozen=True)
class AuthorizationResponse:
    code: str | None = None
    state: str | None = None
    error: str | None = None
    error_description: str | None = None

    def is_success(self) -> bool:
        return self.error is None and self.code is not None

    def is_error(self) -> bool:
        return self.error is not None
