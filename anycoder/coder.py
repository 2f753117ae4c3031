"""Cursor-driven code completion through search/replace patches."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike

from anycoder.diff import TextEdit, compute_text_edits
from anycoder.llm import LlmClient
from anycoder.prompts import REMINDER, SYSTEM_PROMPT
from anycoder.utils import byte_to_point

logger = logging.getLogger(__name__)

CURSOR_MARKER = "??"
STOKEN = "<|SEARCH|>"
DTOKEN = "<|DIVIDE|>"
RTOKEN = "<|REPLACE|>"
CTOKEN = "<|cursor|>"


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _lines(text: str) -> list[str]:
    """Split into lines the way a line iterator does: no trailing empty line, CR stripped."""
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


@dataclass
class Patch:
    """A search/replace pair anchored at a byte offset of the original text."""

    start: int
    search: str
    replace: str


class Coder:
    """Asks the model for an edit around the cursor marker and applies it."""

    def __init__(self, llm: LlmClient) -> None:
        self.llm = llm

    async def autocomplete(
        self, original: str, path: str | PathLike[str], cursor: int
    ) -> str:
        """Return ``original`` with the model's edit applied and the marker removed.

        ``cursor`` is the UTF-8 byte offset of the cursor marker.
        """
        context = self.build_context(original, cursor, 3)
        logger.debug("context %r", context)

        big_context = self.build_context(original, cursor, 1000)

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"big context:\n{big_context[0]}"},
            {"role": "user", "content": f"small context:\n{context[0]}"},
            {"role": "user", "content": REMINDER},
        ]

        response = await self.llm.chat(messages)
        logger.debug("response %s", response)

        patch = self.parse_patch(response, cursor)
        logger.debug("patch %r", patch)

        edits = compute_text_edits(patch.search, patch.replace)
        logger.debug("edits %r", edits)

        shifted = [
            TextEdit(edit.start + patch.start, edit.end + patch.start, edit.text)
            for edit in edits
        ]
        return self.apply_text_edits(original, shifted)

    def build_context(
        self, original: str, cursor: int, context_lines: int
    ) -> tuple[str, int]:
        """Lines around the cursor with the marker turned into the cursor token.

        Returns the context and the byte offset in ``original`` where it starts.
        """
        lines = _lines(original)
        if not lines:
            raise ValueError("cannot build a context from empty text")

        cursor_line, _ = byte_to_point(cursor, original)

        before = context_lines
        after = context_lines
        max_row = len(lines) - 1

        if cursor_line < context_lines:
            after += context_lines - cursor_line
        elif cursor_line + context_lines > max_row:
            before += cursor_line + context_lines - max_row

        start_line = max(cursor_line - before, 0)
        end_line = min(cursor_line + after, max_row)

        context = "\n".join(lines[start_line:end_line + 1])

        relative = context.encode("utf-8").find(CURSOR_MARKER.encode("utf-8"))
        if relative < 0:
            raise ValueError(f"CURSOR_MARKER not found in context, {context}")
        if relative > cursor:
            raise ValueError("cursor lies before the context start")

        return context.replace(CURSOR_MARKER, CTOKEN, 1), cursor - relative

    def parse_patch(self, patch: str, cursor: int) -> Patch:
        """Parse a SEARCH/DIVIDE/REPLACE response into a :class:`Patch`."""
        search_start = patch.find(STOKEN)
        if search_start < 0:
            raise ValueError(f"Invalid patch format: missing {STOKEN}")
        divider = patch.find(DTOKEN)
        if divider < 0:
            raise ValueError(f"Invalid patch format: missing {DTOKEN}")
        if patch.find(RTOKEN) < 0:
            raise ValueError(f"Invalid patch format: missing {RTOKEN}")

        search_from = search_start + len(STOKEN)
        if divider < search_from:
            raise ValueError(f"Invalid patch format: {DTOKEN} before {STOKEN}")
        search = patch[search_from:divider]

        cursor_pos = search.find(CTOKEN)
        if cursor_pos < 0:
            raise ValueError(f"Invalid patch format: missing {CTOKEN}")

        replace = patch[divider + len(DTOKEN):].replace(RTOKEN, "").replace(CTOKEN, "")
        start = max(cursor - _byte_len(search[:cursor_pos]), 0)

        return Patch(start=start, search=search.replace(CTOKEN, ""), replace=replace)

    def apply_text_edits(self, original: str, edits: Sequence[TextEdit]) -> str:
        """Apply byte-offset edits to ``original`` after removing the cursor marker."""
        result = original.replace(CURSOR_MARKER, "").encode("utf-8")

        for edit in sorted(edits, key=lambda e: e.start, reverse=True):
            if edit.start > len(result) or edit.end > len(result):
                raise ValueError(f"Edit out of bounds {edit!r}")
            if edit.start > edit.end:
                raise ValueError(f"Edit range is reversed {edit!r}")
            result = result[:edit.start] + edit.text.encode("utf-8") + result[edit.end:]

        return result.decode("utf-8")