"""Error types raised by the storage services and mapped to HTTP responses."""


class FilenestError(Exception):
    """
    Base class for all application errors.

    Subclasses set `status_code` so the API layer can translate them without
    knowing every concrete type.
    """
    status_code = 500
    default_detail = "Internal Server Error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ConfigurationError(FilenestError):
    """
    Raised at startup when required settings are missing or invalid.
    """
    default_detail = "Invalid configuration"


class StoredFileNotFoundError(FilenestError):
    """
    Raised when a stored filename does not exist in the uploads directory.
    """
    status_code = 404
    default_detail = "File not found"


class InvalidFilenameError(FilenestError):
    """
    Raised when an upload carries no usable filename.
    """
    status_code = 400
    default_detail = "Invalid filename"


class NotEditableError(FilenestError):
    """
    Raised when an in-place edit targets a file whose MIME type is not textual.
    """
    status_code = 400
    default_detail = "File is not editable"


class FileTooLargeError(FilenestError):
    """
    Raised when an upload exceeds the configured maximum size.
    """
    status_code = 413
    default_detail = "File too large"


class ShareLinkNotFoundError(FilenestError):
    """
    Raised when a share identifier is not present in the index.
    """
    status_code = 404
    default_detail = "Invalid share link"


class NoteNotFoundError(FilenestError):
    status_code = 404
    default_detail = "Note not found"


class InvalidNoteIdError(FilenestError):
    status_code = 400
    default_detail = "Invalid note id"
