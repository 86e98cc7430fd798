import pytest

from bible_voice.scripture import Position, format_reference, parse_reference


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("John 3:16", Position("John", 3, 16)),
        ("  John 3:16 ", Position("John", 3, 16)),
        ("1 John 4:8", Position("1 John", 4, 8)),
        ("1John 4:8", Position("1John", 4, 8)),
        ("Song of Solomon 2:1", Position("Song of Solomon", 2, 1)),
        ("Song  of Solomon 2 : 1", Position("Song of Solomon", 2, 1)),
        ("Psalms 151:1", Position("Psalms", 151, 1)),
        ("John 3:16.", Position("John", 3, 16)),
        ("Psalms 119:176 .", Position("Psalms", 119, 176)),
    ],
)
def test_parse_well_formed(raw, expected):
    assert parse_reference(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        None,
        "next verse",
        "John",
        "John 3",
        "John 3:",
        ":16",
        "3:16",
        "John 3:16-18",
        "Read John 3:16 please",
        "John 0:1",
        "John 3:0",
        "John 3:16..",
        "John 12345:1",
        "John " + "9" * 5000 + ":1",
        "John 1:" + "9" * 5000,
    ],
)
def test_parse_rejects_non_references(raw):
    assert parse_reference(raw) is None


def test_book_case_is_preserved():
    assert parse_reference("john 3:16").book == "john"


def test_format_reference():
    assert format_reference(Position("1 John", 4, 8)) == "1 John 4:8"
    assert Position("John", 3, 16).reference == "John 3:16"


def test_position_rejects_zero():
    with pytest.raises(ValueError):
        Position("John", 0, 1)
    with pytest.raises(ValueError):
        Position("", 1, 1)
