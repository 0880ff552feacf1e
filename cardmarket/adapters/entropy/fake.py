"""Deterministic nonce source and clock for testing.

Usage::

    nonces = FixedNonceSource(["0.5"])
    clock = FixedClock(1700000000000)
    signer = OAuth1Signer(oauth_settings, nonce_source=nonces, clock=clock)
"""

from __future__ import annotations

from typing import Iterable


class FixedNonceSource:
    """Test implementation of NonceSource.

    Returns the seeded values in order; once exhausted, keeps returning
    the last one. Records every nonce handed out.
    """

    def __init__(self, nonces: Iterable[str]) -> None:
        self._nonces = list(nonces)
        if not self._nonces:
            raise ValueError("FixedNonceSource needs at least one nonce")
        self._index = 0
        self.issued: list[str] = []

    def next_nonce(self) -> str:
        nonce = self._nonces[min(self._index, len(self._nonces) - 1)]
        self._index += 1
        self.issued.append(nonce)
        return nonce


class FixedClock:
    """Test implementation of Clock returning a pinned timestamp."""

    def __init__(self, value: int) -> None:
        self.value = value

    def timestamp(self) -> int:
        return self.value

    def advance(self, delta: int) -> None:
        """Move the pinned timestamp forward by ``delta`` units."""
        self.value += delta
