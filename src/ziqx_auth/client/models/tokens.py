"""Token exchange request model for the ZIQX gateway.

The gateway payload returned by the exchange is not modelled; callers get
it back untouched.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields

from ziqx_auth.client.models.errors import InvalidArgument


@dataclass(frozen=True)
class TokenExchangeRequest:
    """Authorization code exchange request parameters.

    Immutable request parameters for exchanging an authorization code for
    an access token. App credentials travel as headers, never in the body.
    """

    auth_app_key: str
    auth_secret: str
    code: str
    code_verifier: str  # PKCE
    redirect_uri: str

    grant_type = "authorization_code"

    def __post_init__(self) -> None:
        missing = [field.name for field in fields(self) if not getattr(self, field.name)]
        if missing:
            raise InvalidArgument(
                f"All parameters are required; missing: {', '.join(missing)}"
            )

    def to_json_body(self) -> str:
        """Serialize the request body exactly as the token endpoint expects.

        Returns:
            Compact JSON with keys code, grant_type, code_verifier, redirect_uri
        """
        body = {
            "code": self.code,
            "grant_type": self.grant_type,
            "code_verifier": self.code_verifier,
            "redirect_uri": self.redirect_uri,
        }
        return json.dumps(body, separators=(",", ":"))

    def to_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-app-key": self.auth_app_key,
            "x-app-secret": self.auth_secret,
        }
