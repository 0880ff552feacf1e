"""Root conftest for pytest configuration and shared fixtures.

Fixtures here are available to every colocated ``tests/`` package.
"""

import os
from typing import Callable, List

import httpx
import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables, set before any settings are loaded.
# Uses setdefault so real env vars are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("CARDMARKET_CREDENTIALS__APP_TOKEN", "app-token")
os.environ.setdefault("CARDMARKET_CREDENTIALS__APP_SECRET", "app-secret")
os.environ.setdefault("CARDMARKET_CREDENTIALS__ACCESS_TOKEN", "access-token")
os.environ.setdefault("CARDMARKET_CREDENTIALS__ACCESS_TOKEN_SECRET", "access-secret")

HOST = "https://api.cardmarket.com/ws/v2.0/output.json"
FIXED_NONCE = "0.5"
FIXED_TIMESTAMP = 1700000000000


# ---------------------------------------------------------------------------
# Signing fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials():
    """Known credential quadruple used by the golden signatures."""
    from cardmarket.domains.oauth.types import Credentials

    return Credentials(
        app_token="app-token",
        app_secret="app-secret",
        access_token="access-token",
        access_token_secret="access-secret",
    )


@pytest.fixture
def fixed_nonces():
    from cardmarket.adapters.entropy.fake import FixedNonceSource

    return FixedNonceSource([FIXED_NONCE])


@pytest.fixture
def fixed_clock():
    from cardmarket.adapters.entropy.fake import FixedClock

    return FixedClock(FIXED_TIMESTAMP)


@pytest.fixture
def signer(fixed_nonces, fixed_clock):
    """HMAC-SHA1 signer with pinned nonce and timestamp."""
    from cardmarket.domains.oauth.signer import OAuth1Signer
    from cardmarket.domains.oauth.types import OAuthSettings

    return OAuth1Signer(OAuthSettings(), nonce_source=fixed_nonces, clock=fixed_clock)


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    """Requests seen by clients built with ``mock_http_client``."""
    return []


@pytest.fixture
def mock_http_client(sent_requests) -> Callable[..., httpx.AsyncClient]:
    """Factory for AsyncClients backed by httpx.MockTransport.

    Usage::

        client = mock_http_client(lambda request: httpx.Response(200, json={}))
    """

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        def _recording(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(_recording))

    return _factory
