import pytest

from doc_tracker.buffer import DestinationUnwritableError, SourceUnavailableError
from doc_tracker.storage import FileStore, MemoryStore


def test_file_store_round_trips_bytes(tmp_path) -> None:
    store = FileStore(tmp_path)

    store.save_bytes("notes.txt", b"a\nb")

    assert (tmp_path / "notes.txt").read_bytes() == b"a\nb"
    assert store.load_bytes("notes.txt") == b"a\nb"


def test_file_store_missing_source(tmp_path) -> None:
    store = FileStore(tmp_path)

    with pytest.raises(SourceUnavailableError) as excinfo:
        store.load_bytes("missing.txt")

    assert excinfo.value.name == "missing.txt"
    assert excinfo.value.kind == "source_unavailable"


def test_file_store_unwritable_destination(tmp_path) -> None:
    store = FileStore(tmp_path)

    with pytest.raises(DestinationUnwritableError):
        store.save_bytes("no-such-dir/notes.txt", b"x")


def test_file_store_rejects_empty_names(tmp_path) -> None:
    store = FileStore(tmp_path)

    with pytest.raises(SourceUnavailableError):
        store.load_bytes("")
    with pytest.raises(DestinationUnwritableError):
        store.save_bytes("", b"")


def test_file_store_keeps_absolute_paths(tmp_path) -> None:
    target = tmp_path / "abs.txt"
    store = FileStore("/some/other/root")

    assert store.resolve(str(target)) == target


def test_memory_store_read_only_names() -> None:
    store = MemoryStore({"a.txt": b"a"}, read_only={"locked.txt"})

    assert store.load_bytes("a.txt") == b"a"
    with pytest.raises(SourceUnavailableError):
        store.load_bytes("b.txt")
    with pytest.raises(DestinationUnwritableError):
        store.save_bytes("locked.txt", b"x")
    store.save_bytes("b.txt", b"b")
    assert "b.txt" in store
    assert store.get("b.txt") == b"b"
