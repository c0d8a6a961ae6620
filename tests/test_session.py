import threading
from typing import List

import pytest

from doc_tracker.buffer import (
    NoHistoryError,
    SourceUnavailableError,
    VersionedBuffer,
    count_lines,
)
from doc_tracker.session import EMPTY_PLACEHOLDER, Session, SessionBus
from doc_tracker.storage import FileStore, MemoryStore


def make_session(**files: bytes) -> Session:
    store = MemoryStore(files, read_only={"readonly.txt"})
    return Session(VersionedBuffer(), store)


def history_of(session: Session) -> tuple:
    buffer = session.buffer
    return (
        buffer.raw_content,
        buffer.undo_stack.entries(),
        buffer.redo_stack.entries(),
    )


def test_execute_insert_and_display() -> None:
    session = make_session()

    inserted = session.execute("insert hello world")
    shown = session.execute("display")

    assert inserted.ok and inserted.status == "inserted"
    assert session.buffer.raw_content == "hello world\n"
    assert shown.message is not None
    assert "hello world" in shown.message
    assert "Total Lines: 1" in shown.message


def test_display_of_empty_document() -> None:
    session = make_session()

    assert EMPTY_PLACEHOLDER in session.display()
    assert "Total Lines: 0" in session.display()


def test_menu_numbers_are_command_aliases() -> None:
    session = make_session()

    session.execute("1 first")
    session.execute("1 second")
    session.execute("2")
    assert session.buffer.raw_content == "first\n"
    session.execute("3")
    assert session.buffer.raw_content == "first\nsecond\n"
    session.execute("4")
    assert session.buffer.raw_content == "first\n"
    session.execute("6")
    assert session.buffer.is_empty


def test_errors_become_results_and_session_keeps_running() -> None:
    session = make_session()

    results = [
        session.execute("undo"),
        session.execute("redo"),
        session.execute("delete"),
        session.execute("clear"),
    ]

    assert [r.status for r in results] == [
        "no_history",
        "no_history",
        "empty_document",
        "empty_document",
    ]
    assert all(not r.ok for r in results)
    assert results[0].message == "Nothing to undo"
    assert results[1].message == "Nothing to redo"
    assert session.running


def test_missing_argument_and_unknown_command() -> None:
    session = make_session()

    assert session.execute("insert").status == "missing_argument"
    assert session.execute("save   ").status == "missing_argument"
    assert session.execute("load").status == "missing_argument"
    assert session.execute("frobnicate").status == "unknown_command"
    assert session.execute("   ").status == "command_empty"
    assert session.buffer.undo_stack.entries() == ()


def test_load_replaces_content_and_is_undoable() -> None:
    session = make_session(**{"doc.txt": b"x\ny"})
    session.execute("insert draft")

    result = session.execute("load doc.txt")

    assert result.ok and result.status == "loaded"
    assert session.buffer.raw_content == "x\ny\n"
    assert session.buffer.line_count() == 2
    session.execute("undo")
    assert session.buffer.raw_content == "draft\n"


def test_failed_load_leaves_buffer_untouched() -> None:
    session = make_session(**{"bad.bin": b"\xff\xfe\xfa"})
    session.insert("keep")
    session.insert("me")
    session.undo()
    before = history_of(session)

    missing = session.execute("load nowhere.txt")
    undecodable = session.execute("load bad.bin")

    assert missing.status == "source_unavailable"
    assert undecodable.status == "source_unavailable"
    assert history_of(session) == before


def test_load_raises_for_direct_callers() -> None:
    session = make_session()

    with pytest.raises(SourceUnavailableError):
        session.load("nowhere.txt")


def test_save_writes_content_without_trailing_terminator() -> None:
    session = make_session()
    session.insert("a")
    session.insert("b")

    result = session.execute("save out.txt")

    assert result.ok and result.message == "Document saved to out.txt"
    assert session.store.load_bytes("out.txt") == b"a\nb"


def test_save_failure_is_reported() -> None:
    session = make_session()
    session.insert("a")

    result = session.execute("save readonly.txt")

    assert result.status == "destination_unwritable"
    assert session.buffer.raw_content == "a\n"


def test_save_and_load_through_files(tmp_path) -> None:
    writer = Session(store=FileStore(tmp_path))
    writer.insert("line one")
    writer.insert("line two")
    writer.save("doc.txt")

    reader = Session(store=FileStore(tmp_path))
    reader.load("doc.txt")

    assert (tmp_path / "doc.txt").read_text() == "line one\nline two"
    assert reader.buffer.raw_content == "line one\nline two\n"


def test_bus_reports_changes_and_exit() -> None:
    bus = SessionBus()
    events: List[tuple[str, object | None]] = []
    for name in ("document.changed", "document.saved", "session.error", "session.exit"):
        bus.subscribe(name, lambda payload, name=name: events.append((name, payload)))
    session = Session(VersionedBuffer(), MemoryStore(), bus=bus)

    session.execute("insert a")
    session.execute("save a.txt")
    session.execute("redo")
    result = session.execute("exit")

    names = [name for name, _ in events]
    assert names == ["document.changed", "document.saved", "session.error", "session.exit"]
    changed = events[0][1]
    assert isinstance(changed, dict)
    assert changed["operation"] == "insert"
    assert result.exit
    assert not session.running


def test_help_lists_menu() -> None:
    session = make_session()

    result = session.execute("help")

    assert result.message is not None
    assert "Insert Text" in result.message
    assert "Load from File" in result.message


def test_insert_keeps_leading_whitespace_of_the_text() -> None:
    session = make_session()

    session.execute("insert     indented code")
    session.execute("1  two spaces")

    assert session.buffer.raw_content == "    indented code\n two spaces\n"


def test_commands_split_on_any_whitespace() -> None:
    session = make_session(**{"doc.txt": b"from disk"})

    inserted = session.execute("insert\thello")
    loaded = session.execute("load\t doc.txt  ")

    assert inserted.status == "inserted"
    assert loaded.status == "loaded"
    assert session.buffer.undo_stack.entries() == ("", "hello\n")
    assert session.buffer.raw_content == "from disk\n"


def test_concurrent_edits_never_lose_a_snapshot() -> None:
    session = make_session()
    writers, inserts_each = 4, 50
    undoers, undos_each = 2, 40
    undone: List[int] = []
    start = threading.Barrier(writers + undoers)

    def write(worker: int) -> None:
        start.wait()
        for index in range(inserts_each):
            session.insert(f"w{worker}-{index}")

    def rewind() -> None:
        start.wait()
        for _ in range(undos_each):
            try:
                session.undo()
            except NoHistoryError:
                continue
            undone.append(1)

    threads = [threading.Thread(target=write, args=(n,)) for n in range(writers)]
    threads += [threading.Thread(target=rewind) for _ in range(undoers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    buffer = session.buffer
    expected = writers * inserts_each - len(undone)
    assert len(buffer.undo_stack) == expected
    assert buffer.line_count() == expected
    # each snapshot is exactly one line shorter than the state it precedes
    entries = buffer.undo_stack.entries()
    assert [count_lines(entry) for entry in entries] == list(range(expected))
    for older, newer in zip(entries, entries[1:] + (buffer.raw_content,)):
        assert newer.startswith(older)
