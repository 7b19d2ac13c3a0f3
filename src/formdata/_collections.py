from __future__ import annotations

import typing

if typing.TYPE_CHECKING:
    from .fields import FormValue

__all__ = ["EntryStore"]


class EntryStore:
    """
    An ordered sequence of ``(name, value)`` form entries.

    Unlike a ``dict``, several entries may share a name, and the order in
    which entries were added is kept across names. Entries are only ever
    removed through :meth:`set` and :meth:`delete`.

    The store does no locking. Callers sharing one store between threads
    must serialize mutations themselves.

    >>> from formdata.fields import TextValue
    >>> store = EntryStore()
    >>> store.append('a', TextValue('1'))
    >>> store.append('b', TextValue('2'))
    >>> store.append('a', TextValue('3'))
    >>> store.set('a', TextValue('4'))
    >>> [name for name, _ in store]
    ['a', 'b']
    """

    def __init__(
        self, entries: typing.Iterable[tuple[str, FormValue]] | None = None
    ) -> None:
        self._entries: list[tuple[str, FormValue]] = []
        if entries is not None:
            for name, value in entries:
                self.append(name, value)

    def append(self, name: str, value: FormValue) -> None:
        """Adds an entry at the end, keeping existing entries with ``name``."""
        self._entries.append((name, value))

    def set(self, name: str, value: FormValue) -> None:
        """
        Replaces every entry with ``name`` by a single new one.

        The new entry takes the place of the first entry that had ``name``,
        or goes at the end when there was none.
        """
        position = None
        kept = []
        for entry in self._entries:
            if entry[0] == name:
                if position is None:
                    position = len(kept)
            else:
                kept.append(entry)

        if position is None:
            kept.append((name, value))
        else:
            kept.insert(position, (name, value))
        self._entries = kept

    def delete(self, name: str) -> int:
        """Removes every entry with ``name``. Returns how many were removed."""
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry[0] != name]
        return before - len(self._entries)

    def first(self, name: str) -> FormValue | None:
        """Returns the value of the earliest entry with ``name``, if any."""
        for entry_name, value in self._entries:
            if entry_name == name:
                return value
        return None

    def getlist(self, name: str) -> list[FormValue]:
        """Returns the values of all entries with ``name``, in order. Returns
        an empty list if there are none."""
        return [value for entry_name, value in self._entries if entry_name == name]

    def snapshot(self) -> tuple[tuple[str, FormValue], ...]:
        """The current entries. Later mutations don't affect the result."""
        return tuple(self._entries)

    def copy(self) -> EntryStore:
        clone = type(self)()
        clone._entries = list(self._entries)
        return clone

    def __contains__(self, name: object) -> bool:
        return any(entry_name == name for entry_name, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> typing.Iterator[tuple[str, FormValue]]:
        # Iterate over a snapshot so mutating while iterating is safe.
        return iter(self.snapshot())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntryStore):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._entries!r})"
