"""Watches a directory and completes code wherever the cursor marker appears."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from os import PathLike
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from anycoder.coder import CURSOR_MARKER
from anycoder.diff import compute_text_edits
from anycoder.state import FileState, State
from anycoder.utils import has_content_changed, is_ignored_path

logger = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def _write_text(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)


def log_content_change(path: str | PathLike[str], old: str | None, new: str) -> None:
    """Log a newly seen file, or the edits between its old and new content."""
    if old is None:
        logger.info("File %r added with content:\n%s", Path(path), new)
        return
    logger.info("File %r updated", Path(path))
    for edit in compute_text_edits(old, new):
        logger.info("%r", edit)


async def handle_modify_event(path: str | PathLike[str], state: State) -> None:
    """Read the changed file, autocomplete at the marker if present, and record it."""
    path = Path(path)
    logger.info("watcher:modify %r", (path, path.is_file()))

    new_content = await asyncio.to_thread(_read_text, path)
    logger.info("watcher:new_content %r", new_content)

    async with state.lock:
        previous = state.file2state.get(path)
        old_content = previous.content if previous is not None else None

        if not has_content_changed(old_content, new_content):
            logger.info("watcher:content_unchanged %r", path)
            return

        log_content_change(path, old_content, new_content)

        position = new_content.find(CURSOR_MARKER)
        if position >= 0:
            cursor = len(new_content[:position].encode("utf-8"))
            final_content = await state.coder.autocomplete(new_content, path, cursor)
            await asyncio.to_thread(_write_text, path, final_content)
        else:
            logger.info("No %s found in file %r", CURSOR_MARKER, path)
            final_content = new_content

        state.file2state[path] = FileState(final_content)


class _QueueHandler(FileSystemEventHandler):
    """Hands watchdog events from its thread to an asyncio queue."""

    def __init__(
        self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[FileSystemEvent]
    ) -> None:
        super().__init__()
        self._loop = loop
        self._queue = queue

    def on_any_event(self, event: FileSystemEvent) -> None:
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)


def _event_paths(event: FileSystemEvent) -> list[str]:
    paths = [os.fsdecode(event.src_path)]
    dest = getattr(event, "dest_path", "")
    if dest:
        paths.append(os.fsdecode(dest))
    return paths


class Dispatcher:
    """Routes file events to handlers, keeping at most one live task per path."""

    def __init__(self, state: State) -> None:
        self.state = state
        self.in_flight: dict[Path, asyncio.Task[None]] = {}

    async def _handle(self, path: Path) -> None:
        started = time.monotonic()
        try:
            await handle_modify_event(path, self.state)
        except Exception as error:  # noqa: BLE001 - reported and dropped per event
            logger.error("Error handling event for %r: %s", path, error)
        elapsed = time.monotonic() - started
        logger.info("Done handling event for %r in %.3fs", path, elapsed)

    def process_path(
        self, path: str | PathLike[str], kind: str
    ) -> asyncio.Task[None] | None:
        """Handle one event of a watchdog event type for ``path``.

        A modification cancels any task still running for the same path and
        starts a new one, which is returned. Must be called inside a running loop.
        """
        path = Path(path)
        if kind == EVENT_TYPE_CREATED:
            logger.info("watcher:create %r", (path, path.is_file()))
        elif kind == EVENT_TYPE_DELETED:
            logger.info("watcher:remove %r", (path, path.is_file()))
        elif kind == EVENT_TYPE_MODIFIED:
            previous = self.in_flight.pop(path, None)
            if previous is not None:
                previous.cancel()
            task = asyncio.create_task(self._handle(path))
            self.in_flight[path] = task
            return task
        return None

    async def run(self, directory: str | PathLike[str] = ".") -> None:
        """Watch ``directory`` recursively until cancelled."""
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[FileSystemEvent] = asyncio.Queue()
        observer = Observer()
        observer.schedule(_QueueHandler(loop, queue), os.fspath(directory), recursive=True)
        observer.start()

        logger.info("Starting anycoder")
        logger.info("I'll help you to code.")
        logger.info("All you need is to write %s wherever you want", CURSOR_MARKER)
        logger.info("Watching files at %r", os.fspath(directory))

        try:
            while True:
                event = await queue.get()
                if event.event_type == EVENT_TYPE_MODIFIED and event.is_directory:
                    continue
                for path in _event_paths(event):
                    if not is_ignored_path(path):
                        self.process_path(path, event.event_type)
        finally:
            observer.stop()
            await asyncio.to_thread(observer.join)