from __future__ import annotations

# Base Exceptions


class FormDataError(Exception):
    """Base exception used by this module."""

    pass


class InvalidChunkError(FormDataError, TypeError):
    """Raised when a :class:`~formdata.blob.Blob` is built from chunks that are
    not ``str``, bytes-like or ``Blob`` objects."""

    pass


class InvalidBoundaryError(FormDataError, ValueError):
    """Raised when an explicit multipart boundary cannot be used as one."""

    pass


class EncodeError(FormDataError):
    """Raised when a form could not be serialized. No partial body exists."""

    pass


class BodyReadError(EncodeError):
    """Raised when the content of a file-like entry could not be read.

    :param name:
        The name of the form entry whose content failed to read.
    """

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        self.reason = message
        super().__init__(f"Failed to read content of entry {name!r}: {message}")

    def __reduce__(self) -> tuple[type[BodyReadError], tuple[str, str]]:
        # For pickling purposes.
        return self.__class__, (self.name, self.reason)
