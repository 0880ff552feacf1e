"""Value types for the OAuth domain.

These live in a separate module to avoid circular imports between
the signer, the settings layer and the request pipeline.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Credentials:
    """Consumer (app) and access token pairs. Never mutated after construction."""

    app_token: str
    app_secret: str
    access_token: str
    access_token_secret: str

    def __repr__(self) -> str:
        return f"Credentials(app_token={self.app_token!r}, access_token={self.access_token!r})"


@dataclass(frozen=True, slots=True)
class OAuthSettings:
    """Protocol identifiers sent as oauth_signature_method and oauth_version."""

    signature_method: str = "HMAC-SHA1"
    version: str = "1.0"


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """Output of the signer: the URL to call and the Authorization header value."""

    url: str
    authorization: str
