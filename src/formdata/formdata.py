from __future__ import annotations

import typing

from ._collections import EntryStore
from .blob import DEFAULT_FILENAME, Blob, File
from .fields import FileValue, FormValue, TextValue

_TYPE_ENTRY_VALUE = typing.Union[str, File]
_TYPE_INPUT_VALUE = typing.Union[str, Blob]
_TYPE_FIELD_TUPLE = typing.Union[
    typing.Tuple[str, _TYPE_INPUT_VALUE],
    typing.Tuple[str, _TYPE_INPUT_VALUE, str],
]
_TYPE_FIELDS = typing.Union[
    typing.Mapping[str, _TYPE_INPUT_VALUE],
    typing.Iterable[_TYPE_FIELD_TUPLE],
]

_NOT_SET = object()


def _to_form_value(value: _TYPE_INPUT_VALUE, filename: str | None = None) -> FormValue:
    if isinstance(value, Blob):
        if isinstance(value, File):
            if filename is None:
                return FileValue(value)
        elif filename is None:
            filename = DEFAULT_FILENAME
        return FileValue(File.from_blob(value, filename))

    # Filenames only apply to file-like values.
    return TextValue(value if isinstance(value, str) else str(value))


def _from_form_value(value: FormValue) -> _TYPE_ENTRY_VALUE:
    if isinstance(value, FileValue):
        return value.file
    return value.text


class FormData:
    """
    An ordered collection of form entries, each a name with either a ``str``
    or a :class:`~formdata.blob.File` value.

    :param fields:
        Optional initial entries, either a mapping of names to values or an
        iterable of ``(name, value)`` and ``(name, value, filename)`` tuples.

    A plain :class:`~formdata.blob.Blob` given as a value is stored as a
    ``File`` named ``"blob"``. A ``filename`` passed along with a file-like
    value names the stored file for that entry only::

        >>> form = FormData()
        >>> form.append('avatar', Blob([b'...'], type='image/png'))
        >>> form.get('avatar').name
        'blob'
        >>> form.append('cv', File(['...'], 'cv.txt'), filename='resume.txt')
        >>> form.get('cv').name
        'resume.txt'

    Mutations are not synchronized. Callers sharing one ``FormData`` between
    threads or tasks must serialize them, and must not mutate it while an
    encode of it is in progress.
    """

    def __init__(self, fields: _TYPE_FIELDS | None = None) -> None:
        self._store = EntryStore()
        if fields is None:
            return

        iterable: typing.Iterable[_TYPE_FIELD_TUPLE]
        if isinstance(fields, typing.Mapping):
            iterable = fields.items()
        else:
            iterable = fields

        for field in iterable:
            self.append(*field)

    def append(
        self, name: str, value: _TYPE_INPUT_VALUE, filename: str | None = None
    ) -> None:
        """Adds a new entry after all existing ones."""
        self._store.append(name, _to_form_value(value, filename))

    def set(
        self, name: str, value: _TYPE_INPUT_VALUE, filename: str | None = None
    ) -> None:
        """
        Replaces all entries with ``name`` by one entry, placed where the
        first of them was, or after all entries if there were none.
        """
        self._store.set(name, _to_form_value(value, filename))

    def delete(self, name: str) -> None:
        self._store.delete(name)

    def get(self, name: str) -> _TYPE_ENTRY_VALUE | None:
        """Returns the value of the first entry with ``name``, or ``None``."""
        value = self._store.first(name)
        if value is None:
            return None
        return _from_form_value(value)

    def get_all(self, name: str) -> list[_TYPE_ENTRY_VALUE]:
        """Returns the values of all entries with ``name``, in order. Returns
        an empty list if there are none."""
        return [_from_form_value(value) for value in self._store.getlist(name)]

    def has(self, name: str) -> bool:
        return name in self._store

    def keys(self) -> typing.Iterator[str]:
        """Iterate over entry names, once per entry."""
        for name, _ in self._store:
            yield name

    def values(self) -> typing.Iterator[_TYPE_ENTRY_VALUE]:
        for _, value in self._store:
            yield _from_form_value(value)

    def entries(self) -> typing.Iterator[tuple[str, _TYPE_ENTRY_VALUE]]:
        """Iterate over ``(name, value)`` pairs in insertion order."""
        for name, value in self._store:
            yield name, _from_form_value(value)

    def for_each(
        self,
        callback: typing.Callable[..., object],
        this_arg: object = _NOT_SET,
    ) -> None:
        """
        Calls ``callback(value, name, form)`` for every entry in order.

        When ``this_arg`` is given it is passed as an extra first argument,
        ``callback(this_arg, value, name, form)``, so an unbound method can
        be used as the callback.
        """
        for name, value in self.entries():
            if this_arg is _NOT_SET:
                callback(value, name, self)
            else:
                callback(this_arg, value, name, self)

    # Browser-style spellings
    getAll = get_all
    forEach = for_each

    def form_values(self) -> tuple[tuple[str, FormValue], ...]:
        """The current entries with their tagged values, for serializers."""
        return self._store.snapshot()

    def copy(self) -> FormData:
        clone = type(self)()
        clone._store = self._store.copy()
        return clone

    def __iter__(self) -> typing.Iterator[tuple[str, _TYPE_ENTRY_VALUE]]:
        return self.entries()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.entries())!r})"
