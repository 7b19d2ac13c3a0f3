from __future__ import annotations

import re
import typing
from dataclasses import dataclass

from .blob import File

_TYPE_FIELD_VALUE = typing.Union[str, bytes]


@dataclass(frozen=True)
class TextValue:
    """A plain string stored as a form entry value."""

    text: str


@dataclass(frozen=True)
class FileValue:
    """A :class:`~formdata.blob.File` stored as a form entry value."""

    file: File

    @property
    def filename(self) -> str:
        return self.file.name


FormValue = typing.Union[TextValue, FileValue]


_ESCAPE_REPLACEMENTS = {
    "\r": "%0D",
    "\n": "%0A",
    "\u0022": "%22",
}


def _replace_multiple(value: str, needles_and_replacements: typing.Mapping[str, str]) -> str:
    def replacer(match: re.Match[str]) -> str:
        return needles_and_replacements[match.group(0)]

    pattern = re.compile(
        r"|".join([re.escape(needle) for needle in needles_and_replacements.keys()])
    )

    return pattern.sub(replacer, value)


def escape_header_value(value: _TYPE_FIELD_VALUE) -> str:
    """
    Escape a ``Content-Disposition`` parameter value.

    Only carriage return, line feed and double quote are replaced, by
    ``%0D``, ``%0A`` and ``%22`` respectively. Every other character,
    including ``%`` and non-ASCII text, is kept as is.

    :param value:
        The value to escape, as ``str`` or UTF-8 ``bytes``.
    """
    if isinstance(value, bytes):
        value = value.decode("utf-8")

    return _replace_multiple(value, _ESCAPE_REPLACEMENTS)


def format_multipart_header_param(name: str, value: _TYPE_FIELD_VALUE) -> str:
    """
    Format and quote a single multipart header parameter.

    >>> format_multipart_header_param("filename", 'foo"bar.txt')
    'filename="foo%22bar.txt"'

    :param name:
        The name of the parameter, an ASCII-only ``str``.
    :param value:
        The value of the parameter, as ``str`` or UTF-8 ``bytes``.
    """
    return f'{name}="{escape_header_value(value)}"'


class FormPart:
    """
    One segment of a ``multipart/form-data`` body.

    :param name:
        The form entry name.
    :param data:
        The payload, ``str`` for text entries or ``bytes`` for file content.
    :param filename:
        The file name, or ``None`` for text entries.
    :param content_type:
        The ``Content-Type`` of the payload. Omitted from the headers when
        empty or ``None``.
    """

    def __init__(
        self,
        name: str,
        data: _TYPE_FIELD_VALUE,
        filename: str | None = None,
        content_type: str | None = None,
    ):
        self._name = name
        self._filename = filename
        self.data = data
        self.content_type = content_type

    def _render_parts(
        self, header_parts: typing.Sequence[tuple[str, str | None]]
    ) -> str:
        """
        Format ``(k, v)`` pairs as ``k1="v1"; k2="v2"; ...``, skipping pairs
        whose value is ``None``.
        """
        parts = []
        for name, value in header_parts:
            if value is not None:
                parts.append(format_multipart_header_param(name, value))

        return "; ".join(parts)

    @property
    def content_disposition(self) -> str:
        return "form-data; " + self._render_parts(
            (("name", self._name), ("filename", self._filename))
        )

    def render_headers(self) -> str:
        """
        Renders the headers for this part, including the blank line that
        ends the header block.
        """
        lines = [f"Content-Disposition: {self.content_disposition}"]
        if self.content_type:
            lines.append(f"Content-Type: {self.content_type}")

        lines.append("\r\n")
        return "\r\n".join(lines)
