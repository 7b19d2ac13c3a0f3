from __future__ import annotations

import asyncio

import pytest

from formdata import Blob, File, FormData


@pytest.fixture
def form() -> FormData:
    form = FormData()
    form.append("a", "1")
    form.append("a", "2")
    form.append("b", "3")
    return form


class TestFormData:
    def test_append(self, form: FormData) -> None:
        assert list(form) == [("a", "1"), ("a", "2"), ("b", "3")]
        assert len(form) == 3

    def test_delete(self, form: FormData) -> None:
        form.delete("a")
        assert list(form) == [("b", "3")]
        form.delete("a")
        assert list(form) == [("b", "3")]

    def test_delete_missing(self, form: FormData) -> None:
        form.delete("missing")
        assert list(form) == [("a", "1"), ("a", "2"), ("b", "3")]

    def test_get(self) -> None:
        form = FormData()
        form.append("a", "1")
        assert form.get("a") == "1"
        form.append("a", "2")
        assert form.get("a") == "1"
        assert form.get("b") is None

    def test_get_after_delete_and_append(self, form: FormData) -> None:
        form.delete("a")
        form.append("a", "4")
        assert form.get("a") == "4"

    def test_get_all(self) -> None:
        form = FormData()
        assert form.get_all("a") == []
        form.append("a", "1")
        assert form.get_all("a") == ["1"]
        form.append("a", "2")
        assert form.get_all("a") == ["1", "2"]
        assert form.getAll("a") == ["1", "2"]

    def test_has(self) -> None:
        form = FormData()
        assert form.has("a") is False
        form.append("a", "1")
        assert form.has("a") is True
        assert "a" in form
        assert "b" not in form

    def test_set(self) -> None:
        form = FormData()
        form.append("a", "1")
        form.append("a", "2")
        form.set("a", "3")
        assert list(form) == [("a", "3")]

    def test_set_order(self) -> None:
        form = FormData()
        form.append("a", "1")
        form.append("b", "2")
        form.set("a", "3")
        assert list(form) == [("a", "3"), ("b", "2")]

    def test_set_takes_position_of_first_occurrence(self, form: FormData) -> None:
        form.append("c", "4")
        form.append("b", "5")
        form.set("b", "6")
        assert list(form) == [("a", "1"), ("a", "2"), ("b", "6"), ("c", "4")]

    def test_set_missing_appends(self, form: FormData) -> None:
        form.set("c", "4")
        assert list(form)[-1] == ("c", "4")

    def test_keys_repeat_per_entry(self, form: FormData) -> None:
        assert list(form.keys()) == ["a", "a", "b"]

    def test_values(self, form: FormData) -> None:
        assert list(form.values()) == ["1", "2", "3"]

    def test_entries_are_restartable(self, form: FormData) -> None:
        assert list(form.entries()) == list(form.entries())
        form.append("c", "4")
        assert list(form.keys()) == ["a", "a", "b", "c"]

    def test_for_each(self, form: FormData) -> None:
        calls = []

        def callback(value: str, key: str, parent: FormData) -> None:
            assert parent is form
            calls.append({"value": value, "key": key})

        form.for_each(callback)
        assert calls == [
            {"value": "1", "key": "a"},
            {"value": "2", "key": "a"},
            {"value": "3", "key": "b"},
        ]

    def test_for_each_this_arg(self) -> None:
        form = FormData()
        form.append("a", "1")
        form.append("a", "1")
        form.append("b", "1")
        receivers = []

        def callback(this: object, value: str, key: str, parent: FormData) -> None:
            assert value == "1"
            receivers.append(this)

        form.forEach(callback, "test-this")
        assert receivers == ["test-this"] * 3

    def test_for_each_this_arg_none(self) -> None:
        form = FormData([("a", "1")])
        receivers = []
        form.for_each(lambda this, *args: receivers.append(this), None)
        assert receivers == [None]

    def test_append_blob(self) -> None:
        form = FormData()
        blob = Blob(["this is", " content"])
        form.append("foo", blob)
        file = form.get("foo")
        assert isinstance(file, File)
        assert file.name == "blob"
        assert asyncio.run(file.text()) == "this is content"
        assert isinstance(file.last_modified, int)

    def test_append_file_is_shared(self) -> None:
        form = FormData()
        file = File(["x"], "a.txt")
        form.append("one", file)
        form.append("two", file)
        assert form.get("one") is file
        assert form.get("two") is file

    def test_filename_override(self) -> None:
        form = FormData()
        file = File(["x"], "a.txt", type="text/plain", last_modified=42)
        form.append("foo", file, filename="b.txt")
        stored = form.get("foo")
        assert isinstance(stored, File)
        assert stored.name == "b.txt"
        assert stored.type == "text/plain"
        assert stored.last_modified == 42
        assert file.name == "a.txt"

    def test_filename_override_on_blob(self) -> None:
        form = FormData()
        form.set("foo", Blob(["x"]), filename="b.bin")
        stored = form.get("foo")
        assert isinstance(stored, File)
        assert stored.name == "b.bin"

    def test_promoted_value_reads_through_original(self) -> None:
        class LazyBlob(Blob):
            async def read(self) -> bytes:
                return b"streamed content"

        form = FormData()
        form.append("foo", LazyBlob([]))
        promoted = form.get("foo")
        assert isinstance(promoted, File)
        form.append("bar", promoted, filename="bar.txt")
        for name in ("foo", "bar"):
            stored = form.get(name)
            assert isinstance(stored, File)
            assert asyncio.run(stored.text()) == "streamed content"

    def test_filename_ignored_for_text(self) -> None:
        form = FormData()
        form.append("foo", "bar", filename="ignored.txt")
        assert form.get("foo") == "bar"

    @pytest.mark.parametrize(
        "fields",
        [
            {"a": "1", "b": "2"},
            [("a", "1"), ("b", "2")],
        ],
    )
    def test_initial_fields(self, fields: object) -> None:
        form = FormData(fields)  # type: ignore[arg-type]
        assert list(form) == [("a", "1"), ("b", "2")]

    def test_initial_fields_with_filename(self) -> None:
        form = FormData([("f", Blob(["x"]), "x.txt")])
        stored = form.get("f")
        assert isinstance(stored, File)
        assert stored.name == "x.txt"

    def test_copy(self, form: FormData) -> None:
        clone = form.copy()
        clone.delete("a")
        assert list(clone) == [("b", "3")]
        assert len(form) == 3

    def test_repr(self) -> None:
        form = FormData([("a", "1")])
        assert repr(form) == "FormData([('a', '1')])"
