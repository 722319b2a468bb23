"""Revision markers and error variants for the GitHub contents gateway."""

# Marker returned when a path resolves to a directory listing instead of a file.
DIRECTORY_MARKER = "DIR"


class RemoteStoreError(Exception):
    """A GitHub contents API call failed.

    Attributes:
        message: Human-readable failure description, shown to the user verbatim
        status_code: HTTP status of the failed response, None for transport failures
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def error_type(self) -> str:
        return "remote-store-error"


class NotFoundError(RemoteStoreError):
    """The repository, branch or path does not exist."""

    @property
    def error_type(self) -> str:
        return "not-found"


class ConflictError(RemoteStoreError):
    """The expected revision marker did not match the current content."""

    @property
    def error_type(self) -> str:
        return "conflict"


class PermissionDeniedError(RemoteStoreError):
    """Authentication failed, access was denied or the rate limit was hit."""

    @property
    def error_type(self) -> str:
        return "permission-denied"


class TransportError(RemoteStoreError):
    """The request never produced an HTTP response."""

    @property
    def error_type(self) -> str:
        return "transport"


def error_for_status(status_code: int, message: str) -> RemoteStoreError:
    """Map an HTTP status code to the matching error variant."""
    if status_code == 404:
        return NotFoundError(message, status_code=status_code)
    if status_code in (409, 422):
        return ConflictError(message, status_code=status_code)
    if status_code in (401, 403, 429):
        return PermissionDeniedError(message, status_code=status_code)
    return RemoteStoreError(message, status_code=status_code)
