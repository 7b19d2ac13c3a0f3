"""
Ordered form-data container with a multipart/form-data encoder
"""
from __future__ import annotations

# Set default logging handler to avoid "No handler found" warnings.
import logging
import typing
from logging import NullHandler

from . import exceptions
from ._version import __version__
from .blob import Blob, File
from .filepost import choose_boundary, encode_multipart_formdata, multipart_content_type
from .formdata import FormData

__version__ = __version__

__all__ = (
    "Blob",
    "File",
    "FormData",
    "add_stderr_logger",
    "choose_boundary",
    "encode_multipart_formdata",
    "exceptions",
    "multipart_content_type",
)

logging.getLogger(__name__).addHandler(NullHandler())


def add_stderr_logger(
    level: int = logging.DEBUG,
) -> logging.StreamHandler[typing.TextIO]:
    """
    Helper for quickly adding a StreamHandler to the logger. Useful for
    debugging.

    Returns the handler after adding it.
    """
    # This method needs to be in this __init__.py to get the __name__ correct
    # even if formdata is vendored within another package.
    logger = logging.getLogger(__name__)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("Added a stderr logging handler to logger: %s", __name__)
    return handler


# ... Clean up.
del NullHandler
