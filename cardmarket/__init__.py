"""Signed async client for the Cardmarket marketplace API."""

from cardmarket.client import CardmarketClient
from cardmarket.domains.oauth.types import Credentials, OAuthSettings
from cardmarket.domains.requests.types import ApiResult

__all__ = [
    "ApiResult",
    "CardmarketClient",
    "Credentials",
    "OAuthSettings",
]
