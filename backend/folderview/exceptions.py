"""Domain errors raised by the browsing and serving services.

Each error carries the HTTP status it maps to and a generic client-facing
message. Filesystem details stay in the server log.
"""


class FolderViewError(Exception):
    """Base exception for all FolderView request failures."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingParameter(FolderViewError):
    """Raised when a required request parameter is absent."""

    status_code = 400

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name.capitalize()} parameter is required")


class AccessDenied(FolderViewError):
    """Raised when a path resolves outside the configured root."""

    status_code = 403
    message = "Access denied"


class NotFound(FolderViewError):
    """Raised when a path does not exist or cannot be stat'ed."""

    status_code = 404
    message = "Not found"


class NotADirectory(NotFound):
    """Raised when a directory was expected but something else exists."""

    message = "Not a directory"


class NotAFile(NotFound):
    """Raised when a regular file was expected but something else exists."""

    message = "Not a file"


class UnsupportedExtension(FolderViewError):
    """Raised when a file extension is not in the endpoint's allow-list."""

    status_code = 415
    message = "File type not supported"


class ExtractionFailed(FolderViewError):
    """Raised when a ZIP archive cannot be extracted."""

    status_code = 500
    message = "Failed to extract ZIP file"


class ReadFailed(FolderViewError):
    """Raised when a file passed validation but cannot be opened for reading."""

    status_code = 500
    message = "Failed to read file"
