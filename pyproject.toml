[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "anycoder"
version = "0.1.0"
description = "Watches a source tree and completes code wherever a cursor marker is typed, using an OpenAI-compatible chat model."
requires-python = ">=3.10"
keywords = ["autocomplete", "llm", "code-completion", "file-watcher", "openai"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "httpx",
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["anycoder"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
