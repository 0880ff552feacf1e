"""Production nonce source and clock."""

from __future__ import annotations

import secrets
import time

from cardmarket.core.config.enums import TimestampUnit


class SecureNonceSource:
    """Nonces drawn from the OS CSPRNG via :mod:`secrets`."""

    def __init__(self, nbytes: int = 16) -> None:
        self._nbytes = nbytes

    def next_nonce(self) -> str:
        return secrets.token_hex(self._nbytes)


class SystemClock:
    """Wall-clock time since the epoch in seconds or milliseconds."""

    def __init__(self, unit: TimestampUnit = TimestampUnit.MILLISECONDS) -> None:
        self.unit = unit

    def timestamp(self) -> int:
        if self.unit == TimestampUnit.MILLISECONDS:
            return time.time_ns() // 1_000_000
        return int(time.time())
