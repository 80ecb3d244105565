"""EmySound client exceptions for error handling."""


class EmySoundError(Exception):
    """Base exception for EmySound client operations."""

    pass


class InvalidPathError(EmySoundError):
    """Raised when a file source has no extractable file name."""

    def __init__(self, path: object, message: str = None):
        self.path = path
        super().__init__(
            message or f"Track path is invalid, can't extract the filename: {path!r}"
        )


class InvalidArgumentError(EmySoundError):
    """Raised when a caller passes an out-of-range argument."""

    pass


class MediaReadError(EmySoundError):
    """Raised when a media file can't be read from disk."""

    pass


class TransportError(EmySoundError):
    """Raised on network-level failures (connection, timeout, TLS)."""

    pass


class ServiceRejectedError(EmySoundError):
    """Raised when the service answers with a non-success status."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"{status}: {body}")


class DecodeError(EmySoundError):
    """Raised when a success response body doesn't match the expected schema."""

    pass
