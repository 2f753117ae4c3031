import asyncio
import logging

import httpx
import pytest
from watchdog.events import EVENT_TYPE_CREATED, EVENT_TYPE_MODIFIED

from anycoder.coder import Coder
from anycoder.diff import compute_text_edits
from anycoder.llm import LlmClient
from anycoder.state import FileState, State
from anycoder.watcher import Dispatcher, handle_modify_event, log_content_change

PATCH_REPLY = "<|SEARCH|>let <|cursor|> = 10;<|DIVIDE|>let x = 10;<|REPLACE|>"


def _state(calls):
    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": PATCH_REPLY}}]})

    llm = LlmClient("placeholder", "http://llm.test", "m", transport=httpx.MockTransport(handler))
    return State(Coder(llm))


def _write(path, text):
    path.write_bytes(text.encode("utf-8"))


@pytest.mark.asyncio
async def test_modify_without_marker_records_content(tmp_path):
    calls = []
    state = _state(calls)
    target = tmp_path / "main.rs"
    content = "fn main() {}\n"
    _write(target, content)

    await handle_modify_event(target, state)

    assert state.file2state[target] == FileState(content)
    assert calls == []
    assert target.read_bytes().decode("utf-8") == content


@pytest.mark.asyncio
async def test_modify_with_marker_rewrites_file(tmp_path):
    calls = []
    state = _state(calls)
    target = tmp_path / "main.rs"
    _write(target, "let ?? = 10;\n")

    await handle_modify_event(target, state)

    expected = "let x = 10;\n"
    assert target.read_bytes().decode("utf-8") == expected
    assert state.file2state[target].content == expected
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_unchanged_content_skips_model(tmp_path):
    calls = []
    state = _state(calls)
    target = tmp_path / "main.rs"
    _write(target, "let ?? = 10;\n")
    state.file2state[target] = FileState("let ?? = 10;\n")

    await handle_modify_event(target, state)

    assert calls == []
    assert target.read_bytes().decode("utf-8") == "let ?? = 10;\n"


@pytest.mark.asyncio
async def test_modify_missing_file_raises(tmp_path):
    state = _state([])
    with pytest.raises(FileNotFoundError):
        await handle_modify_event(tmp_path / "absent.rs", state)


@pytest.mark.asyncio
async def test_dispatcher_modify_spawns_task(tmp_path):
    state = _state([])
    target = tmp_path / "main.rs"
    _write(target, "fn main() {}\n")
    dispatcher = Dispatcher(state)

    task = dispatcher.process_path(target, EVENT_TYPE_MODIFIED)
    assert dispatcher.in_flight[target] is task
    await task

    assert state.file2state[target].content == "fn main() {}\n"


@pytest.mark.asyncio
async def test_dispatcher_cancels_previous_task(tmp_path):
    state = _state([])
    target = tmp_path / "main.rs"
    _write(target, "fn main() {}\n")
    dispatcher = Dispatcher(state)

    first = dispatcher.process_path(target, EVENT_TYPE_MODIFIED)
    second = dispatcher.process_path(target, EVENT_TYPE_MODIFIED)
    await asyncio.gather(first, second, return_exceptions=True)

    assert first.cancelled()
    assert not second.cancelled()
    assert dispatcher.in_flight == {target: second}


@pytest.mark.asyncio
async def test_dispatcher_create_spawns_nothing(tmp_path):
    dispatcher = Dispatcher(_state([]))
    result = dispatcher.process_path(tmp_path / "new.rs", EVENT_TYPE_CREATED)
    assert result is None
    assert dispatcher.in_flight == {}


@pytest.mark.asyncio
async def test_dispatcher_error_is_contained(tmp_path):
    state = _state([])
    dispatcher = Dispatcher(state)
    missing = tmp_path / "absent.rs"

    task = dispatcher.process_path(missing, EVENT_TYPE_MODIFIED)
    await task

    assert task.exception() is None
    assert missing not in state.file2state


def test_log_content_change_new_file(caplog, tmp_path):
    caplog.set_level(logging.INFO, logger="anycoder.watcher")
    log_content_change(tmp_path / "a.rs", None, "body")
    messages = [record.getMessage() for record in caplog.records]
    assert any("added with content" in m and m.endswith("body") for m in messages)


def test_log_content_change_updated_logs_edits(caplog, tmp_path):
    caplog.set_level(logging.INFO, logger="anycoder.watcher")
    old, new = "let a = 1;", "let b = 2;"
    log_content_change(tmp_path / "a.rs", old, new)
    messages = [record.getMessage() for record in caplog.records]
    assert any("updated" in m for m in messages)
    for edit in compute_text_edits(old, new):
        assert repr(edit) in messages