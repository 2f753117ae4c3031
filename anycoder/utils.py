"""Helpers for deciding which paths to watch and for locating byte offsets."""

from __future__ import annotations

import os
from os import PathLike
from pathlib import PurePath

IGNORE_DIRS_ENV = "ANYCODER_IGNORE_DIRS"
IGNORE_FILES_ENV = "ANYCODER_IGNORE_FILES"

_DIR_GROUPS: dict[str, str] = {
    "tooling": ".git .idea .vscode .vim .netrwhist .vs",
    "artifacts": "node_modules dist target build out bin obj",
    "python": "__pycache__ .pytest_cache .mypy_cache .tox .coverage .venv venv env",
    "web": ".next .nuxt .output coverage .nyc_output",
    "jvm": ".gradle .m2 classes",
    "dotnet": "packages",
    "dependencies": ".bundle vendor",
    "os": ".DS_Store Thumbs.db desktop.ini",
    "scratch": "tmp temp .tmp .cache cache",
    "logging": "logs log",
    "docs": "docs/_build site _site",
    "infra": (
        ".terraform .terragrunt-cache .pulumi .vagrant .docker .kube"
        " .minikube .helm .serverless"
    ),
    "ci": ".github .gitlab-ci .circleci .buildkite .jenkins .azure-pipelines",
    "mobile": (
        ".expo .expo-shared ios/build android/build android/.gradle ios/Pods"
        " ios/DerivedData .flutter-plugins .flutter-plugins-dependencies"
    ),
    "games": "Library Temp Logs MemoryCaptures Builds UserSettings",
    "languages": (
        ".stack-work .cabal-sandbox _build .merlin .eunit .rebar .rebar3"
        " .mix deps .dart_tool .pio .platformio"
    ),
    "science": (
        ".ipynb_checkpoints .spyderproject .spyproject .RData .Rhistory .Rproj.user"
    ),
    "storage": "data db",
    "frameworks": ".svelte-kit .routify .sapper .astro .solid .qwik",
    "old_vcs": ".bzr .hg .svn CVS SCCS",
    "lint_caches": ".eslintcache .stylelintcache",
    "backups": ".backup backup backups",
    "explicit": "coder.rs",
}

_FILE_GROUPS: dict[str, str] = {
    "os": ".DS_Store Thumbs.db desktop.ini",
    "environment": ".env .env.local .env.development .env.production .envrc .direnv",
    "locks": (
        "package-lock.json yarn.lock pnpm-lock.yaml Cargo.lock Pipfile.lock"
        " poetry.lock composer.lock Gemfile.lock"
    ),
    "git": ".gitignore .gitattributes .gitmodules",
    "editors": ".vimrc .editorconfig .clang-format",
    "build": (
        "Makefile CMakeLists.txt meson.build requirements.txt setup.py"
        " pyproject.toml package.json tsconfig.json webpack.config.js"
        " Dockerfile docker-compose.yml docker-compose.yaml"
    ),
    "ci": ".travis.yml .gitlab-ci.yml appveyor.yml azure-pipelines.yml buildspec.yml",
    "scratch": "*.tmp *.swp *.swo *.bak *.orig *~",
    "logging": "*.log",
    "storage": "*.db *.sqlite *.sqlite3",
    "credentials": "*.pem *.key *.crt *.p12",
    "explicit": "coder.rs",
}


def _flatten(groups: dict[str, str]) -> tuple[str, ...]:
    return tuple(name for names in groups.values() for name in names.split())


DEFAULT_IGNORE_DIRS: tuple[str, ...] = _flatten(_DIR_GROUPS)
DEFAULT_IGNORE_FILES: tuple[str, ...] = _flatten(_FILE_GROUPS)


def _with_env_extras(defaults: tuple[str, ...], variable: str) -> list[str]:
    raw = os.environ.get(variable, "")
    extras = [item.strip() for item in raw.split(",")]
    return [*defaults, *filter(None, extras)]


def get_ignore_dirs() -> list[str]:
    """Ignored directory names, plus any listed in ANYCODER_IGNORE_DIRS."""
    return _with_env_extras(DEFAULT_IGNORE_DIRS, IGNORE_DIRS_ENV)


def get_ignore_files() -> list[str]:
    """Ignored file patterns, plus any listed in ANYCODER_IGNORE_FILES."""
    return _with_env_extras(DEFAULT_IGNORE_FILES, IGNORE_FILES_ENV)


def is_ignored_dir(path: str | PathLike[str]) -> bool:
    """Whether some component of ``path`` is an ignored directory name."""
    ignored = frozenset(get_ignore_dirs())
    return not ignored.isdisjoint(PurePath(path).parts)


def _matches(file_name: str, pattern: str) -> bool:
    if len(pattern) > 1 and pattern[0] == "*":
        return file_name.endswith(pattern[1:])
    return file_name == pattern


def is_ignored_file(file_name: str) -> bool:
    """Whether ``file_name`` equals an ignored name or ends with a ``*suffix``."""
    return any(_matches(file_name, pattern) for pattern in get_ignore_files())


def is_ignored_path(path: str | PathLike[str]) -> bool:
    """Whether ``path`` is inside an ignored directory or names an ignored file."""
    if is_ignored_dir(path):
        return True
    name = PurePath(path).name
    return bool(name) and name not in {".", ".."} and is_ignored_file(name)


def byte_to_point(b: int, s: str) -> tuple[int, int]:
    """Map a UTF-8 byte offset in ``s`` to a zero-based (line, column) pair.

    Columns are counted in characters. A character that straddles the offset
    is not counted.
    """
    prefix = s.encode("utf-8")[: max(b, 0)].decode("utf-8", errors="ignore")
    line = prefix.count("\n")
    column = len(prefix) - (prefix.rfind("\n") + 1)
    return line, column


def has_content_changed(old: str | None, new: str) -> bool:
    """Whether ``new`` differs from ``old``; an unknown ``old`` counts as a change."""
    return old is None or old != new