from __future__ import annotations

import codecs
import logging
import os
import re
import string
import typing
from io import BytesIO

from .exceptions import BodyReadError, InvalidBoundaryError
from .fields import FileValue, FormPart

if typing.TYPE_CHECKING:
    from .formdata import FormData

log = logging.getLogger(__name__)

writer = codecs.lookup("utf-8")[3]

#: Length of every generated boundary.
BOUNDARY_LENGTH = 32

_BOUNDARY_ALPHABET = string.ascii_lowercase + string.digits

# RFC 2046 bchars: up to 70 characters, may not end with a space.
_BOUNDARY_RE = re.compile(r"[0-9A-Za-z'()+_,\-./:=? ]{0,69}[0-9A-Za-z'()+_,\-./:=?]")


def choose_boundary(
    randbytes: typing.Callable[[int], bytes] = os.urandom,
) -> str:
    """
    Generate a multipart boundary of :data:`BOUNDARY_LENGTH` lowercase ASCII
    letters and digits.

    :param randbytes:
        Source of random bytes, called once with the number of bytes wanted.
        The boundary is not checked against the payload, so this only needs
        to make collisions unlikely, not be unpredictable.
    """
    return "".join(
        _BOUNDARY_ALPHABET[byte % len(_BOUNDARY_ALPHABET)]
        for byte in randbytes(BOUNDARY_LENGTH)
    )


def _validate_boundary(boundary: str) -> None:
    if not _BOUNDARY_RE.fullmatch(boundary):
        raise InvalidBoundaryError(f"Invalid multipart boundary: {boundary!r}")


def multipart_content_type(boundary: str) -> str:
    """The ``Content-Type`` header value for a body encoded with ``boundary``."""
    return f"multipart/form-data; boundary={boundary}"


async def iter_form_parts(form: FormData) -> typing.AsyncIterator[FormPart]:
    """
    Iterate over the entries of ``form`` as :class:`~formdata.fields.FormPart`
    objects, in order.

    The entries are captured when iteration starts. The content of each
    file-like entry is read once, when its part is produced.

    :raises BodyReadError:
        If reading the content of a file-like entry fails.
    """
    for name, value in form.form_values():
        if isinstance(value, FileValue):
            file = value.file
            try:
                data = await file.read()
            except Exception as e:
                log.debug("Failed to read content of entry %r", name, exc_info=True)
                raise BodyReadError(name, str(e) or type(e).__name__) from e

            yield FormPart(
                name, data, filename=value.filename, content_type=file.type
            )
        else:
            yield FormPart(name, value.text)


async def encode_multipart_formdata(
    form: FormData, boundary: str | None = None
) -> tuple[str, bytes]:
    """
    Encode ``form`` using the multipart/form-data MIME format.

    Returns the boundary and the body. Send the body with
    ``Content-Type:`` :func:`multipart_content_type` of the boundary.

    :param form:
        The :class:`~formdata.formdata.FormData` to encode.
    :param boundary:
        If not specified, then a random boundary will be generated using
        :func:`formdata.filepost.choose_boundary`.

    :raises BodyReadError:
        If the content of any file-like entry can't be read. No body is
        produced in that case.
    """
    body = BytesIO()
    if boundary is None:
        boundary = choose_boundary()
    else:
        _validate_boundary(boundary)

    log.debug("Encoding %d form entries with boundary %s", len(form), boundary)

    async for part in iter_form_parts(form):
        body.write(f"--{boundary}\r\n".encode("latin-1"))

        writer(body).write(part.render_headers())
        data = part.data

        if isinstance(data, str):
            writer(body).write(data)
        else:
            body.write(data)

        body.write(b"\r\n")

    body.write(f"--{boundary}--\r\n".encode("latin-1"))

    return boundary, body.getvalue()
