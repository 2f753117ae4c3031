"""Application state shared between watcher tasks."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from anycoder.coder import Coder


@dataclass
class FileState:
    """Last known content of a watched file."""

    content: str


class State:
    """Known file contents and the coder, guarded by an asyncio lock."""

    def __init__(self, coder: Coder) -> None:
        self.file2state: dict[Path, FileState] = {}
        self.coder = coder
        self.lock = asyncio.Lock()