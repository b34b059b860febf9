"""
Exception classes for the Velixar client.
"""

DEFAULT_ERROR_MESSAGE = "Request failed"


class VelixarError(Exception):
    """Base exception for all Velixar client errors."""

    pass


class VelixarConfigError(VelixarError, ValueError):
    """Raised when the client configuration is invalid.

    Subclassing ``ValueError`` lets callers catch configuration problems with
    the built-in exception while still signaling a library-specific error.
    """

    pass


class VelixarAPIError(VelixarError):
    """Raised when the memory service answers with a non-2xx status.

    Attributes:
        status: The HTTP status code of the response
        message: The ``error`` field of the response body, or a generic
            fallback when the body does not carry one
    """

    def __init__(self, status: int, message: str = DEFAULT_ERROR_MESSAGE):
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status!r}, message={self.message!r})"


class VelixarNotFoundError(VelixarAPIError):
    """Raised when a requested memory does not exist."""

    pass
