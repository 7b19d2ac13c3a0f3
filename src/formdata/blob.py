"""
Immutable binary content for file-like form values.

A :class:`Blob` holds a tuple of byte chunks and a MIME type. A :class:`File`
adds a name and a last-modified timestamp. Content is read back through the
coroutines :meth:`Blob.read` and :meth:`Blob.text`.
"""
from __future__ import annotations

import time
import typing

from .exceptions import InvalidChunkError

_TYPE_CHUNK = typing.Union[str, bytes, bytearray, memoryview, "Blob"]

#: Name given to a plain :class:`Blob` when it is stored as a form entry.
DEFAULT_FILENAME = "blob"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _normalize_type(content_type: str) -> str:
    # A line break would let the type inject headers into a multipart body.
    if "\r" in content_type or "\n" in content_type:
        return ""
    return content_type


def _normalize_chunks(chunks: typing.Iterable[_TYPE_CHUNK]) -> tuple[bytes, ...]:
    if isinstance(chunks, (str, bytes, bytearray, memoryview, Blob)):
        raise InvalidChunkError(
            f"chunks must be an iterable of chunks, not a single {type(chunks).__name__}"
        )
    try:
        iterable = iter(chunks)
    except TypeError:
        raise InvalidChunkError(
            f"chunks must be iterable, not {type(chunks).__name__}"
        ) from None

    normalized: list[bytes] = []
    for chunk in iterable:
        if isinstance(chunk, Blob):
            normalized.extend(chunk._chunks)
        elif isinstance(chunk, bytes):
            normalized.append(chunk)
        elif isinstance(chunk, (bytearray, memoryview)):
            # Copy mutable buffers so later writes can't leak into the blob.
            normalized.append(bytes(chunk))
        elif isinstance(chunk, str):
            try:
                normalized.append(chunk.encode("utf-8"))
            except UnicodeEncodeError as e:
                raise InvalidChunkError(f"string chunk is not valid text: {e}") from e
        else:
            raise InvalidChunkError(f"not expecting chunk type {type(chunk).__name__}")
    return tuple(normalized)


class Blob:
    """
    An immutable sequence of bytes with a content type.

    :param chunks:
        An iterable of ``str``, bytes-like or :class:`Blob` objects which are
        concatenated in order. Strings are encoded as UTF-8.
    :param type:
        The MIME type of the content. Defaults to ``""``.
    """

    def __init__(
        self, chunks: typing.Iterable[_TYPE_CHUNK] = (), *, type: str = ""
    ) -> None:
        self._chunks = _normalize_chunks(chunks)
        self._size = sum(len(chunk) for chunk in self._chunks)
        self._type = _normalize_type(type)

    @property
    def size(self) -> int:
        """Total length of the content in bytes."""
        return self._size

    @property
    def type(self) -> str:
        return self._type

    @property
    def source(self) -> Blob:
        """The object whose :meth:`read` produces the content."""
        return self

    def _content(self) -> bytes:
        return b"".join(self._chunks)

    async def read(self) -> bytes:
        """Read the whole content as bytes."""
        return self._content()

    async def text(self) -> str:
        """Read the whole content decoded as UTF-8."""
        data = await self.read()
        return data.decode("utf-8", errors="replace")

    def slice(
        self, start: int = 0, end: int | None = None, content_type: str = ""
    ) -> Blob:
        """
        Return a new :class:`Blob` with the bytes from ``start`` up to ``end``.

        Negative offsets count back from the end of the content and offsets
        past either end are clamped, so slicing never fails.
        """
        return Blob([self._content()[start:end]], type=content_type)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size}, type={self._type!r})"


class File(Blob):
    """
    A :class:`Blob` with a file name and a modification time.

    :param chunks:
        See :class:`Blob`.
    :param name:
        The file name.
    :param type:
        The MIME type of the content. Defaults to ``""``.
    :param last_modified:
        Modification time in milliseconds since the epoch. Defaults to the
        time the ``File`` is constructed.
    """

    def __init__(
        self,
        chunks: typing.Iterable[_TYPE_CHUNK],
        name: str,
        *,
        type: str = "",
        last_modified: int | None = None,
    ) -> None:
        super().__init__(chunks, type=type)
        self._name = str(name)
        if last_modified is None:
            last_modified = _now_ms()
        self._last_modified = int(last_modified)
        self._source: Blob | None = None

    @classmethod
    def from_blob(
        cls,
        blob: Blob,
        name: str = DEFAULT_FILENAME,
        last_modified: int | None = None,
    ) -> File:
        """
        Build a :class:`File` that reads its content through ``blob``.

        Nothing is copied: :meth:`read` delegates to ``blob.read()``, so a
        ``blob`` with its own byte source keeps it. When ``blob`` is already a
        ``File`` its timestamp is kept unless ``last_modified`` is given.
        """
        if last_modified is None and isinstance(blob, File):
            last_modified = blob.last_modified
        file = cls((), name, last_modified=last_modified)
        file._chunks = blob._chunks
        file._size = blob.size
        file._type = blob.type
        file._source = blob.source
        return file

    @property
    def source(self) -> Blob:
        if self._source is None:
            return self
        return self._source

    async def read(self) -> bytes:
        if self._source is None:
            return await super().read()
        return await self._source.read()

    @property
    def name(self) -> str:
        return self._name

    @property
    def last_modified(self) -> int:
        """Modification time in milliseconds since the epoch."""
        return self._last_modified

    # Browser-style spelling
    lastModified = last_modified

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, size={self._size}, "
            f"type={self._type!r}, last_modified={self._last_modified})"
        )
