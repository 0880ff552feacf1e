"""Signed request pipeline.

Builds GET/PUT requests through the OAuth1 signer, dispatches them on a
shared ``httpx.AsyncClient`` and classifies the response:

- 2xx: body decoded into the caller's result type; decode failures raise
  DecodeError
- anything else: ApiResult with ``ok`` False, logged as a warning
- transport failures and timeouts raise TransportError / RequestTimeoutError

Nothing is retried.
"""

import asyncio
from typing import Any, Mapping, Optional, Type, TypeVar, Union

import httpx

from cardmarket.core.exceptions import DecodeError, RequestTimeoutError, TransportError
from cardmarket.core.logging import ContextualLogger
from cardmarket.core.logging import logger as default_logger
from cardmarket.core.protocols.codecs import PayloadEncoder, ResponseDecoder
from cardmarket.domains.oauth.signer import OAuth1Signer
from cardmarket.domains.oauth.types import Credentials
from cardmarket.domains.requests.types import ApiResult, HttpMethod, RequestEnvelope

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 60.0


class RequestPipeline:
    """Signs, sends and decodes requests against one API host."""

    def __init__(
        self,
        *,
        host: str,
        signer: OAuth1Signer,
        credentials: Credentials,
        payload_encoder: PayloadEncoder,
        response_decoder: ResponseDecoder,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            host: Base URL every endpoint is appended to
            signer: OAuth1 signer
            credentials: Default credentials, overridable per call
            payload_encoder: Serializer for PUT bodies
            response_decoder: Deserializer for 2xx bodies
            http_client: Shared client; one is created (and owned) if omitted
            timeout: Per-request timeout in seconds
            logger: Logger for dispatch and rejection messages
        """
        self._host = host.rstrip("/")
        self._signer = signer
        self._credentials = credentials
        self._encoder = payload_encoder
        self._decoder = response_decoder
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()
        self._timeout = timeout
        self._logger = (logger or default_logger).with_prefix("Cardmarket: ")

    async def __aenter__(self) -> "RequestPipeline":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this pipeline created it."""
        if self._owns_client:
            await self._client.aclose()

    def build_request(
        self,
        method: Union[HttpMethod, str],
        endpoint: str,
        query: Optional[Mapping[str, str]] = None,
        payload: Any = None,
        credentials: Optional[Credentials] = None,
    ) -> RequestEnvelope:
        """Sign and assemble a request envelope.

        Raises:
            ValueError: For methods other than GET/PUT, or a payload on GET
            SigningError: If the request cannot be signed
            PayloadEncodingError: If the PUT payload cannot be serialized
        """
        method = HttpMethod(method.upper()) if isinstance(method, str) else method
        if method == HttpMethod.GET and payload is not None:
            raise ValueError("GET requests cannot carry a payload")

        signed = self._signer.sign(
            method.value,
            f"{self._host}{endpoint}",
            dict(query or {}),
            credentials or self._credentials,
        )
        headers = {"Authorization": f"OAuth {signed.authorization}"}

        body = None
        if method == HttpMethod.PUT:
            body = self._encoder.encode(payload) if payload is not None else b""
            headers["Content-Type"] = self._encoder.content_type

        return RequestEnvelope(method=method, url=signed.url, headers=headers, body=body)

    async def execute(
        self,
        method: Union[HttpMethod, str],
        endpoint: str,
        result_type: Type[T],
        query: Optional[Mapping[str, str]] = None,
        payload: Any = None,
        credentials: Optional[Credentials] = None,
    ) -> ApiResult[T]:
        """Send a signed request and decode the response into ``result_type``."""
        envelope = self.build_request(method, endpoint, query, payload, credentials)
        response = await self._dispatch(envelope)
        return self._classify(envelope, response, result_type)

    def submit(
        self,
        method: Union[HttpMethod, str],
        endpoint: str,
        result_type: Type[T],
        query: Optional[Mapping[str, str]] = None,
        payload: Any = None,
        credentials: Optional[Credentials] = None,
    ) -> "asyncio.Task[ApiResult[T]]":
        """Schedule :meth:`execute` on the running loop and return the task immediately."""
        return asyncio.create_task(
            self.execute(method, endpoint, result_type, query, payload, credentials)
        )

    async def _dispatch(self, envelope: RequestEnvelope) -> httpx.Response:
        method = envelope.method.value
        # header values are sent as UTF-8; realm may carry non-ASCII path segments
        headers = {k: v.encode("utf-8") for k, v in envelope.headers.items()}
        try:
            request = self._client.build_request(
                method,
                envelope.url,
                headers=headers,
                content=envelope.body,
                timeout=self._timeout,
            )
        except httpx.InvalidURL as e:
            raise TransportError(method, envelope.url, f"Invalid URL: {e}") from e
        self._logger.debug(f"Sending {method} {envelope.url}")

        try:
            return await self._client.send(request)
        except httpx.TimeoutException as e:
            self._logger.warning(f"{method} {envelope.url} timed out after {self._timeout}s")
            raise RequestTimeoutError(method, envelope.url, self._timeout) from e
        except httpx.HTTPError as e:
            self._logger.warning(f"{method} {envelope.url} failed: {e}")
            raise TransportError(method, envelope.url, str(e) or type(e).__name__) from e

    def _classify(
        self, envelope: RequestEnvelope, response: httpx.Response, result_type: Type[T]
    ) -> ApiResult[T]:
        status = response.status_code
        if not 200 <= status < 300:
            self._logger.warning(
                f"Request {envelope.method.value} {envelope.url} has failed with error: {status}"
            )
            return ApiResult(status_code=status, reason=response.text)

        try:
            value = self._decoder.decode(response.content, result_type)
        except (ValueError, TypeError) as e:
            # TypeError: no schema can be built for result_type
            raise DecodeError(status, f"Cannot decode response into {result_type!r}: {e}") from e
        return ApiResult(status_code=status, value=value)
