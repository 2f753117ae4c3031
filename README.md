# anycoder

anycoder watches a directory tree and fills in code for you. Type the cursor
marker `??` anywhere in a file and save it: the surrounding lines are sent to
an OpenAI-compatible chat model, the model's answer is turned into a minimal
set of text edits, and the file is rewritten in place with the marker gone.

## How it works

1. A file under the watched directory is modified (`anycoder.watcher.Dispatcher`).
2. If its content differs from what was last recorded in `State.file2state`
   and it contains `??`, the lines around the marker are collected
   (`Coder.build_context`): a small context of three lines on each side and
   a large context of up to a thousand lines, with `??` replaced by
   `<|cursor|>`.
3. The model (`LlmClient.chat`) is asked for a single search/replace block:
   `<|SEARCH|>...<|DIVIDE|>...<|REPLACE|>`, where the search part keeps the
   `<|cursor|>` token at the marker's position (`Coder.parse_patch`).
4. The replacement is diffed character by character against the searched
   text (`anycoder.diff.compute_text_edits`), and only the differing spans
   are applied to the file (`Coder.apply_text_edits`), which is then written
   back.

A newer modification of the same file cancels any completion still running
for it. Errors raised while handling one event are logged and the watcher
carries on.

## Usage

The package is a library; it is driven from your own code:

```python
import asyncio
import logging

from anycoder.coder import Coder
from anycoder.llm import LlmClient
from anycoder.state import State
from anycoder.watcher import Dispatcher

logging.basicConfig(level=logging.INFO)

client = LlmClient(
    api_key="placeholder",
    base_url="https://api.example.com/v1",
    model="your-model-name",
)
state = State(Coder(client))
asyncio.run(Dispatcher(state).run("."))
```

`Dispatcher.run` watches the directory recursively until it is cancelled.
Progress is reported through the standard `logging` module.

Completions can also be requested directly, without watching files. The
cursor is given as a UTF-8 byte offset of the marker:

```python
source = 'for i in range(5):\n    print("value:", ??)\n'
cursor = len(source[: source.index("??")].encode("utf-8"))
completed = asyncio.run(Coder(client).autocomplete(source, "example.py", cursor))
```

`LlmClient` posts to `<base_url>/chat/completions` with a bearer token and
returns the content of the first choice (an empty string if there is none).
It raises `httpx.HTTPStatusError` on a non-success response, and accepts an
optional `transport` argument (an `httpx` async transport), which is handy for
pointing it at a local stub in tests. A model answer that lacks one of the
markers makes `Coder.parse_patch` raise `ValueError`.

## Ignored paths

Version-control directories, build output, caches, dependency folders, lock
files, environment files, logs, databases and key material are never touched.
The lists live in `anycoder.utils` (`DEFAULT_IGNORE_DIRS`,
`DEFAULT_IGNORE_FILES`, `get_ignore_dirs()`, `get_ignore_files()`) and can be
extended with comma-separated environment variables:

- `ANYCODER_IGNORE_DIRS` – extra directory names; a path is skipped when any
  of its components matches one (`is_ignored_dir`).
- `ANYCODER_IGNORE_FILES` – extra file names; an entry starting with `*`
  matches any file name ending in the rest of it, e.g. `*.gen.py`
  (`is_ignored_file`).

`is_ignored_path` combines both checks.

## Building blocks

- `anycoder.diff.compute_text_edits(old, new)` returns `TextEdit` spans
  (UTF-8 byte offsets into `old`) that turn `old` into `new`.
- `anycoder.utils.byte_to_point(b, s)` maps a UTF-8 byte offset to a
  zero-based `(line, column)` pair, counting columns in characters.
- `anycoder.utils.has_content_changed(old, new)` treats an unknown `old`
  (`None`) as a change.
- `anycoder.coder.Coder.apply_text_edits(original, edits)` removes the `??`
  marker and applies such edits, raising `ValueError` when one falls outside
  the text.
- `anycoder.prompts` holds the instruction texts sent to the model
  (`SYSTEM_PROMPT`, `REMINDER`).

## What it does not do

- There is no command-line program: nothing is installed to run from a
  shell, and the watcher is started from Python as shown above.
- API key, endpoint and model are not read from the environment or from a
  configuration file; pass them to `LlmClient` yourself.
- Logging is not configured by the package; set it up in your own code.

## Tests

```
pip install -e ".[test]"
pytest
```