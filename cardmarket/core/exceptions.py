"""Shared exceptions module."""

from typing import Optional


class CardmarketException(Exception):
    """Base exception for the Cardmarket client."""

    pass


class SigningError(CardmarketException):
    """Exception raised when a request cannot be signed."""

    def __init__(self, message: Optional[str] = "Request signing failed"):
        """Create a new SigningError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class TransportError(CardmarketException):
    """Exception raised when the HTTP exchange itself fails."""

    def __init__(self, method: str, url: str, message: Optional[str] = "Transport failure"):
        """Create a new TransportError instance.

        Args:
        ----
            method (str): HTTP method of the failed request.
            url (str): Target URL of the failed request.
            message (str, optional): The error message. Has default message.

        """
        self.method = method
        self.url = url
        self.message = message
        super().__init__(f"{message}: {method} {url}")


class RequestTimeoutError(TransportError):
    """Raised when a request exceeds its timeout."""

    def __init__(self, method: str, url: str, timeout: float):
        """Create a new RequestTimeoutError instance."""
        self.timeout = timeout
        super().__init__(method, url, f"Request timed out after {timeout}s")


class DecodeError(CardmarketException):
    """Exception raised when a successful response body does not match the result shape."""

    def __init__(self, status_code: int, message: Optional[str] = "Response decoding failed"):
        """Create a new DecodeError instance.

        Args:
        ----
            status_code (int): HTTP status of the undecodable response.
            message (str, optional): The error message. Has default message.

        """
        self.status_code = status_code
        self.message = message
        super().__init__(f"{message} (status {status_code})")


class PayloadEncodingError(CardmarketException):
    """Raised when a request payload cannot be serialized."""

    pass


class RemoteRejectionError(CardmarketException):
    """Exception raised when a non-2xx result is unwrapped."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        """Create a new RemoteRejectionError instance.

        Args:
        ----
            status_code (int): HTTP status returned by the remote server.
            reason (str, optional): Response text returned alongside the status.

        """
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Request rejected with status {status_code}")
