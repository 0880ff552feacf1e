"""OAuth 1.0a request signer.

Signs requests with the consumer/access token quadruple as described in
RFC 5849, in the variant the marketplace expects:

1. Query parameters and the oauth_* parameters are merged and sorted by key
2. Base string: METHOD&enc(URL)&enc(k1=v1&k2=v2...), each key and value encoded
3. Signing key: enc(app secret)&enc(access token secret)
4. The Authorization header carries the oauth_* parameters, the signature
   and ``realm`` (the unencoded URL); query parameters stay in the URL

Signing is synchronous and free of shared state apart from the injected
nonce source and clock.
"""

import base64
import hashlib
import hmac
from typing import Callable, Dict, Mapping, Optional
from urllib.parse import quote

from cardmarket.adapters.entropy.secure import SecureNonceSource, SystemClock
from cardmarket.core.exceptions import SigningError
from cardmarket.core.protocols.entropy import Clock, NonceSource
from cardmarket.domains.oauth.types import Credentials, OAuthSettings, SignedRequest

# quote() already keeps letters, digits and "-._"
_UNRESERVED_EXTRA = "~"

_DIGESTS: Dict[str, Callable] = {
    "HMAC-SHA1": hashlib.sha1,
    "HMAC-SHA256": hashlib.sha256,
}


def percent_encode(value: str) -> str:
    """Escape ``value`` for signing; only ASCII letters, digits and ``-._~`` pass through.

    Every encode site in the base string uses this one rule.
    """
    return quote(str(value), safe=_UNRESERVED_EXTRA)


class OAuth1Signer:
    """Produces the signed URL and Authorization header for one request."""

    def __init__(
        self,
        oauth_settings: OAuthSettings,
        nonce_source: Optional[NonceSource] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """Validate the signature method up front; unsupported methods are fatal."""
        digest = _DIGESTS.get(oauth_settings.signature_method.upper())
        if digest is None:
            raise SigningError(
                f"Unsupported signature method: {oauth_settings.signature_method!r}"
            )
        self._digest = digest
        self._settings = oauth_settings
        self._nonce_source = nonce_source or SecureNonceSource()
        self._clock = clock or SystemClock()

    def sign(
        self,
        method: str,
        url: str,
        query_params: Mapping[str, str],
        credentials: Credentials,
    ) -> SignedRequest:
        """Sign a request to ``url`` (without query string).

        Args:
            method: HTTP method, case-insensitive
            url: Base URL of the resource, no query string
            query_params: Parameters to sign and append to the URL
            credentials: App and access token pairs

        Returns:
            SignedRequest with the final URL and the Authorization header value
            (without the ``OAuth `` scheme prefix)
        """
        if "?" in url:
            raise SigningError(f"URL must not carry a query string: {url}")

        oauth_params = self._oauth_params(credentials)
        params = dict(query_params)
        params.update(oauth_params)

        base_string = self.build_signature_base_string(method, url, params)
        oauth_params["oauth_signature"] = self.sign_base_string(base_string, credentials)
        oauth_params["realm"] = url

        return SignedRequest(
            url=self.build_url(url, query_params),
            authorization=self.build_authorization_header(oauth_params),
        )

    def _oauth_params(self, credentials: Credentials) -> Dict[str, str]:
        return {
            "oauth_consumer_key": credentials.app_token,
            "oauth_token": credentials.access_token,
            "oauth_nonce": self._nonce_source.next_nonce(),
            "oauth_timestamp": str(self._clock.timestamp()),
            "oauth_signature_method": self._settings.signature_method,
            "oauth_version": self._settings.version,
        }

    @staticmethod
    def build_signature_base_string(method: str, url: str, params: Mapping[str, str]) -> str:
        """Return ``METHOD&enc(url)&enc(pairs)`` with ``pairs`` sorted by key.

        Keys and values are escaped one by one before joining, then the
        joined string is escaped again as a whole.
        """
        pairs = (
            f"{percent_encode(key)}={percent_encode(value)}"
            for key, value in sorted(params.items())
        )
        return f"{method.upper()}&{percent_encode(url)}&{percent_encode('&'.join(pairs))}"

    def sign_base_string(self, base_string: str, credentials: Credentials) -> str:
        """Compute the base64 HMAC of ``base_string``."""
        key = (
            f"{percent_encode(credentials.app_secret)}"
            f"&{percent_encode(credentials.access_token_secret)}"
        )
        digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), self._digest)
        return base64.b64encode(digest.digest()).decode("utf-8")

    @staticmethod
    def build_authorization_header(params: Mapping[str, str]) -> str:
        """Render ``k="v"`` pairs sorted by key, joined by ``, ``.

        Values are not escaped: the marketplace compares them verbatim.
        """
        return ", ".join(f'{k}="{v}"' for k, v in sorted(params.items()))

    @staticmethod
    def build_url(url: str, query_params: Mapping[str, str]) -> str:
        """Append the query parameters, sorted by key, as given."""
        if not query_params:
            return url
        query = "&".join(f"{k}={v}" for k, v in sorted(query_params.items()))
        return f"{url}?{query}"
