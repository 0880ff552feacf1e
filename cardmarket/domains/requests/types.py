"""Value types for the request pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Generic, Optional, TypeVar

from cardmarket.core.exceptions import RemoteRejectionError

T = TypeVar("T")


class HttpMethod(str, Enum):
    """Methods the marketplace client sends."""

    GET = "GET"
    PUT = "PUT"


@dataclass(frozen=True)
class RequestEnvelope:
    """A fully signed request, built and discarded per call."""

    method: HttpMethod
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    def __repr__(self) -> str:
        # Authorization carries the signature; keep it out of logs
        return f"RequestEnvelope(method={self.method.value}, url={self.url!r})"


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of a request that reached the server.

    A 2xx response carries the decoded ``value``. Any other status
    yields a result with ``ok`` False and the response text in ``reason``;
    callers that want an exception use :meth:`unwrap`.
    """

    status_code: int
    value: Optional[T] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status_code < 300

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

    def unwrap(self) -> T:
        """Return the decoded value, or raise RemoteRejectionError for non-2xx results."""
        if not self.ok:
            raise RemoteRejectionError(self.status_code, self.reason)
        return self.value  # type: ignore[return-value]
