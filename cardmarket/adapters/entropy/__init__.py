"""Nonce and clock adapters."""

from cardmarket.adapters.entropy.fake import FixedClock, FixedNonceSource
from cardmarket.adapters.entropy.secure import SecureNonceSource, SystemClock

__all__ = [
    "FixedClock",
    "FixedNonceSource",
    "SecureNonceSource",
    "SystemClock",
]
