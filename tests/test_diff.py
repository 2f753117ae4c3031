import pytest

from anycoder.diff import TextEdit, compute_text_edits


def _apply(old: str, edits: list[TextEdit]) -> str:
    data = old.encode("utf-8")
    for edit in sorted(edits, key=lambda e: e.start, reverse=True):
        data = data[:edit.start] + edit.text.encode("utf-8") + data[edit.end:]
    return data.decode("utf-8")


def test_compute_edits_simple():
    before = "let mut foo = 2;\nfoo *= 50;"
    after = "let mut foo = 5;\naaaa foo *= 50;"

    edits = compute_text_edits(before, after)

    assert len(edits) == 2
    assert edits == [
        TextEdit(start=14, end=15, text="5"),
        TextEdit(start=17, end=17, text="aaaa "),
    ]


def test_compute_edits_simple2():
    before = 'println!("Current value: {}", );'
    after = 'println!("Current value: {}", i);'

    assert compute_text_edits(before, after) == [TextEdit(start=30, end=30, text="i")]


def test_compute_edits_unicode():
    before = 'println!("Current значение: {}", i);'
    after = 'println!("Current value: {}", i);'

    assert compute_text_edits(before, after) == [
        TextEdit(start=18, end=18 + 8 * 2, text="value"),
    ]


def test_identical_texts_have_no_edits():
    assert compute_text_edits("same text", "same text") == []


def test_pure_deletion():
    assert compute_text_edits("abcdef", "abef") == [TextEdit(start=2, end=4, text="")]


def test_from_empty():
    assert compute_text_edits("", "hello") == [TextEdit(start=0, end=0, text="hello")]


def test_to_empty():
    assert compute_text_edits("héllo", "") == [TextEdit(start=0, end=6, text="")]


@pytest.mark.parametrize(
    ("old", "new"),
    [
        ("abcabba", "cbabac"),
        ("fn main() {}", "fn main() { println!(); }"),
        ("привет мир", "привет, дорогой мир!"),
        ("line1\nline2\nline3", "line0\nline2\nline4\n"),
        ("x", "y"),
        ("", ""),
    ],
)
def test_edits_transform_old_into_new(old, new):
    edits = compute_text_edits(old, new)
    assert _apply(old, edits) == new


def test_edits_are_ordered_and_disjoint():
    edits = compute_text_edits("the quick brown fox", "a quick red fox jumps")
    for first, second in zip(edits, edits[1:]):
        assert first.end <= second.start
    assert all(e.start <= e.end for e in edits)