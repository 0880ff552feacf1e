"""Cardmarket client facade.

Wires settings into a signer, codecs and the request pipeline, and
exposes the GET/PUT entry points plus typed convenience calls.

Usage::

    async with CardmarketClient.from_settings(get_settings()) as client:
        expansions = await client.get_expansions(1)
"""

from typing import Any, Mapping, Optional, Type, TypeVar

import httpx

from cardmarket.adapters.codecs import JsonPayloadEncoder, JsonResponseDecoder, XmlPayloadEncoder
from cardmarket.adapters.entropy.secure import SecureNonceSource, SystemClock
from cardmarket.core.config import PayloadFormat, Settings
from cardmarket.core.logging import LoggerConfigurator
from cardmarket.core.protocols.entropy import Clock, NonceSource
from cardmarket.domains.oauth.signer import OAuth1Signer
from cardmarket.domains.requests.pipeline import RequestPipeline
from cardmarket.domains.requests.types import ApiResult, HttpMethod
from cardmarket.schemas.market import ExpansionList

T = TypeVar("T")


class CardmarketClient:
    """Async client for the Cardmarket API."""

    def __init__(self, pipeline: RequestPipeline) -> None:
        self._pipeline = pipeline

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        nonce_source: Optional[NonceSource] = None,
        clock: Optional[Clock] = None,
    ) -> "CardmarketClient":
        """Build a client from settings; nonce source and clock are injectable for tests.

        Logging handlers are left alone; applications call
        ``LoggerConfigurator.configure_root(settings.LOG_LEVEL)`` once at startup.
        """
        if settings.PAYLOAD_FORMAT == PayloadFormat.JSON:
            encoder = JsonPayloadEncoder()
        else:
            encoder = XmlPayloadEncoder(root_tag=settings.XML_ROOT_TAG)

        signer = OAuth1Signer(
            settings.oauth,
            nonce_source=nonce_source or SecureNonceSource(),
            clock=clock or SystemClock(settings.OAUTH.timestamp_unit),
        )
        pipeline = RequestPipeline(
            host=settings.HOST,
            signer=signer,
            credentials=settings.credentials,
            payload_encoder=encoder,
            response_decoder=JsonResponseDecoder(),
            http_client=http_client,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
            logger=LoggerConfigurator.configure_logger(
                "cardmarket.client", dimensions={"host": settings.HOST}
            ),
        )
        return cls(pipeline)

    async def __aenter__(self) -> "CardmarketClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._pipeline.aclose()

    async def send_get_request(
        self,
        endpoint: str,
        result_type: Type[T],
        query: Optional[Mapping[str, str]] = None,
    ) -> ApiResult[T]:
        return await self._pipeline.execute(HttpMethod.GET, endpoint, result_type, query)

    async def send_put_request(
        self,
        endpoint: str,
        result_type: Type[T],
        payload: Any,
        query: Optional[Mapping[str, str]] = None,
    ) -> ApiResult[T]:
        return await self._pipeline.execute(
            HttpMethod.PUT, endpoint, result_type, query, payload=payload
        )

    async def get_expansions(self, game_id: int) -> ApiResult[ExpansionList]:
        """Fetch all expansions of a game."""
        return await self.send_get_request(
            "/expansions", ExpansionList, query={"idGame": str(game_id)}
        )
