"""Character-level diffing that yields byte-offset text edits."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


@dataclass
class TextEdit:
    """Replace bytes ``[start, end)`` of the old text with ``text``."""

    start: int
    end: int
    text: str


class _Tag(Enum):
    EQUAL = "equal"
    DELETE = "delete"
    INSERT = "insert"


def _myers(old: Sequence[str], new: Sequence[str]) -> list[tuple[_Tag, str]]:
    """Shortest edit script between two character sequences."""
    prefix = 0
    limit = min(len(old), len(new))
    while prefix < limit and old[prefix] == new[prefix]:
        prefix += 1

    suffix = 0
    while (
        suffix < limit - prefix
        and old[len(old) - 1 - suffix] == new[len(new) - 1 - suffix]
    ):
        suffix += 1

    a = old[prefix:len(old) - suffix]
    b = new[prefix:len(new) - suffix]
    n, m = len(a), len(b)

    v: dict[int, int] = {1: 0}
    trace: list[dict[int, int]] = []
    for d in range(n + m + 1):
        trace.append(dict(v))
        done = False
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[k - 1] < v[k + 1]):
                x = v[k + 1]
            else:
                x = v[k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[k] = x
            if x >= n and y >= m:
                done = True
                break
        if done:
            break

    middle: list[tuple[_Tag, str]] = []
    x, y = n, m
    for d in range(len(trace) - 1, -1, -1):
        snapshot = trace[d]
        k = x - y
        if k == -d or (k != d and snapshot[k - 1] < snapshot[k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = snapshot[prev_k]
        prev_y = prev_x - prev_k
        while x > prev_x and y > prev_y and x > 0 and y > 0:
            middle.append((_Tag.EQUAL, a[x - 1]))
            x -= 1
            y -= 1
        if d > 0:
            if x == prev_x:
                middle.append((_Tag.INSERT, b[y - 1]))
            else:
                middle.append((_Tag.DELETE, a[x - 1]))
            x, y = prev_x, prev_y
    middle.reverse()

    head = [(_Tag.EQUAL, ch) for ch in old[:prefix]]
    tail = [(_Tag.EQUAL, ch) for ch in old[len(old) - suffix:]]
    return head + middle + tail


def _byte_len(value: str) -> int:
    return len(value.encode("utf-8"))


def compute_text_edits(old: str, new: str) -> list[TextEdit]:
    """Edits, in UTF-8 byte offsets of ``old``, that turn ``old`` into ``new``.

    Adjacent deletions merge into one edit, and insertions at the end of
    the previous edit are appended to its text.
    """
    edits: list[TextEdit] = []
    old_pos = 0

    for tag, value in _myers(old, new):
        if tag is _Tag.EQUAL:
            old_pos += _byte_len(value)
        elif tag is _Tag.DELETE:
            start = old_pos
            end = start + _byte_len(value)
            if edits and edits[-1].end == start and not edits[-1].text:
                edits[-1].end = end
            else:
                edits.append(TextEdit(start, end, ""))
            old_pos = end
        else:
            if edits and edits[-1].end == old_pos:
                edits[-1].text += value
            else:
                edits.append(TextEdit(old_pos, old_pos, value))

    return edits