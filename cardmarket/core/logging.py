"""Contextual logging for the Cardmarket client.

Loggers carry key/value dimensions that are attached to every record
as ``extra`` fields and rendered after the message.

Usage::

    from cardmarket.core.logging import logger

    request_logger = logger.with_context(endpoint="/expansions")
    request_logger.info("Dispatching request")
"""

import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# LogRecord attributes; dimensions with these names are stored as ctx_<name>
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that carries dimensions and an optional message prefix."""

    def __init__(
        self,
        logger: logging.Logger,
        dimensions: Optional[Dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        """Wrap ``logger`` with a fixed set of dimensions."""
        super().__init__(logger, dict(dimensions or {}))
        self.dimensions: Dict[str, Any] = dict(dimensions or {})
        self.prefix = prefix

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Attach dimensions to the record and render them after the message."""
        merged = {**self.dimensions, **(kwargs.get("extra") or {})}
        kwargs["extra"] = {
            (f"ctx_{k}" if k in _RESERVED_ATTRS else k): v for k, v in merged.items()
        }
        if self.dimensions:
            rendered = " ".join(f"{k}={v}" for k, v in sorted(self.dimensions.items()))
            msg = f"{self.prefix}{msg} [{rendered}]"
        else:
            msg = f"{self.prefix}{msg}"
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions."""
        merged = {**self.dimensions, **dimensions}
        return ContextualLogger(self.logger, merged, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger that prepends ``prefix`` to every message."""
        return ContextualLogger(self.logger, self.dimensions, prefix)


class LoggerConfigurator:
    """Builds contextual loggers and configures the package root logger."""

    @staticmethod
    def configure_root(level: str = "INFO") -> logging.Logger:
        """Install a single stream handler on the ``cardmarket`` logger."""
        root = logging.getLogger("cardmarket")
        root.setLevel(level.upper())
        if not any(getattr(h, "_cardmarket", False) for h in root.handlers):
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(_FORMAT))
            handler._cardmarket = True  # type: ignore[attr-defined]
            root.addHandler(handler)
        return root

    @staticmethod
    def configure_logger(
        name: str, dimensions: Optional[Dict[str, Any]] = None
    ) -> ContextualLogger:
        """Return a contextual logger for ``name`` with the given dimensions."""
        return ContextualLogger(logging.getLogger(name), dimensions)


logger = LoggerConfigurator.configure_logger("cardmarket")
