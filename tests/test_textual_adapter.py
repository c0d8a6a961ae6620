from typing import List

from doc_tracker.adapters.textual import TextualSessionAdapter, TextualUIHooks
from doc_tracker.buffer import BufferMirror, VersionedBuffer
from doc_tracker.session import Session
from doc_tracker.storage import MemoryStore


def make_session() -> Session:
    return Session(VersionedBuffer(name="scratch"), MemoryStore({"in.txt": b"loaded"}))


def test_adapter_pushes_document_after_each_command() -> None:
    mirrors: List[BufferMirror] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_document=mirrors.append,
        update_status=statuses.append,
    )
    adapter = TextualSessionAdapter(make_session(), hooks)

    adapter.submit("insert hello")
    adapter.submit("insert world")
    adapter.submit("undo")

    assert mirrors[0].is_empty  # initial refresh
    assert mirrors[-1].text == "hello"
    assert mirrors[-1].redo_depth == 1
    assert statuses == ["Text inserted.", "Text inserted.", "Undo successful."]


def test_adapter_relays_session_events() -> None:
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_document=lambda mirror: None,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualSessionAdapter(make_session(), hooks)

    adapter.submit("load in.txt")
    adapter.submit("clear")
    adapter.submit("clear")
    result = adapter.submit("q")

    names = [name for name, _ in events]
    assert "document.loaded" in names
    assert names.count("document.changed") == 2
    assert "session.error" in names
    assert names[-1] == "session.exit"
    assert result.exit


def test_adapter_log_lines_carry_buffer_state() -> None:
    lines: List[str] = []
    hooks = TextualUIHooks(update_document=lambda mirror: None, log=lines.append)
    adapter = TextualSessionAdapter(make_session(), hooks)

    adapter.submit("insert x")

    assert lines[0].startswith("command ->")
    assert "buffer='scratch'" in lines[-1]
    assert "status='inserted'" in lines[-1]
    assert "lines=1" in lines[-1]
