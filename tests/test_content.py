from doc_tracker.buffer import (
    count_lines,
    drop_last_line,
    normalize,
    split_lines,
    strip_terminator,
)


def test_count_lines_with_and_without_trailing_terminator() -> None:
    assert count_lines("a\nb\nc\n") == 3
    assert count_lines("a\nb\nc") == 3
    assert count_lines("") == 0
    assert count_lines("\n") == 1


def test_drop_last_line_walks_back_to_empty() -> None:
    text = "a\nb\nc\n"
    text = drop_last_line(text)
    assert text == "a\nb\n"
    text = drop_last_line(text)
    assert text == "a\n"
    assert drop_last_line(text) == ""


def test_drop_last_line_handles_unterminated_tail() -> None:
    assert drop_last_line("a\nb") == "a\n"
    assert drop_last_line("solo") == ""


def test_drop_last_line_keeps_blank_lines_before_tail() -> None:
    assert drop_last_line("a\n\nb\n") == "a\n\n"


def test_normalize_appends_terminator_only_when_missing() -> None:
    assert normalize("x") == "x\n"
    assert normalize("x\n") == "x\n"
    assert normalize("") == ""


def test_strip_terminator_removes_a_single_terminator() -> None:
    assert strip_terminator("a\n\n") == "a\n"
    assert strip_terminator("a") == "a"


def test_split_lines() -> None:
    assert split_lines("") == ()
    assert split_lines("a\nb\n") == ("a", "b")
    assert split_lines("a\n\n") == ("a", "")
