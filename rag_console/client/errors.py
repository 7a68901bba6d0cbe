"""Error taxonomy for backend calls and local preconditions."""


class RagConsoleError(Exception):
    """Base class for every error the console turns into a notice."""

    pass


class TransportError(RagConsoleError):
    """Raised when the backend cannot be reached or the exchange is aborted."""

    pass


class ProtocolError(RagConsoleError):
    """Raised on a non-2xx status or an unexpected response payload.

    Attributes:
        status_code: HTTP status of the response, if one was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(RagConsoleError):
    """Raised when a local precondition for a workflow is not met."""

    pass
