"""Exceptions raised by the Google auth helpers."""

from typing_extensions import Iterable, Optional, Tuple


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""
    pass


class UnknownServiceError(GoogleAuthError, ValueError):
    """
    Raised when a service name is not in the scope registry.

    Attributes:
        service: The offending input exactly as the caller supplied it
        expected: Valid service names in presentation order
    """

    def __init__(self, service: object, expected: Optional[Iterable[str]] = None):
        self.service = service
        self.expected: Tuple[str, ...] = tuple(str(name) for name in expected or ())

        message = f"unknown service {str(service)!r}"
        if self.expected:
            message += f" (expected {'|'.join(self.expected)})"
        super().__init__(message)


class CallbackError(GoogleAuthError, ValueError):
    """Raised when an OAuth redirect URL cannot yield a code and state."""
    pass
