"""Nonce and clock protocols.

The signer draws its per-request nonce and timestamp from these instead
of from global state, so tests can pin both.

Usage::

    from cardmarket.core.protocols.entropy import Clock, NonceSource


    def oauth_params(nonces: NonceSource, clock: Clock) -> dict[str, str]:
        return {"oauth_nonce": nonces.next_nonce(), "oauth_timestamp": str(clock.timestamp())}
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NonceSource(Protocol):
    """Produces single-use random values."""

    def next_nonce(self) -> str:
        """Return a fresh nonce. Must be safe to call concurrently."""
        ...


@runtime_checkable
class Clock(Protocol):
    """Produces the integer timestamp sent as ``oauth_timestamp``."""

    def timestamp(self) -> int:
        """Return the current time in the clock's configured unit."""
        ...
