"""Shared pytest fixtures for the next-boil test suite.

Provides reusable fixtures for:
- Recording reporter and scripted confirmer
- Template tarball builders
- Fake cloners for the fetcher
- Mock subprocess helpers
"""

from __future__ import annotations

import io
import tarfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from nextboil.fetcher import CloneError, TemplateSource


# ---------------------------------------------------------------------------
# Reporter / confirmer doubles
# ---------------------------------------------------------------------------

class RecordingReporter:
    """Reporter that keeps every message instead of printing it."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.summaries: list[tuple[str, dict[str, str]]] = []

    def _record(self, level: str, message: str) -> None:
        self.messages.append((level, message))

    def info(self, message: str) -> None:
        self._record("info", message)

    def success(self, message: str) -> None:
        self._record("success", message)

    def warn(self, message: str) -> None:
        self._record("warn", message)

    def error(self, message: str) -> None:
        self._record("error", message)

    def debug(self, message: str) -> None:
        self._record("debug", message)

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        self._record("status", message)
        yield

    def banner(self, title: str, subtitle: str = "") -> None:
        self._record("banner", title)

    def summary(self, rows: dict[str, str], title: str = "Summary") -> None:
        self.summaries.append((title, dict(rows)))

    def lines(self, level: str) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]


class ScriptedConfirmer:
    """Confirmer that returns a fixed answer and remembers the questions."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.questions: list[str] = []

    def confirm(self, message: str) -> bool:
        self.questions.append(message)
        return self.answer


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def confirm_yes() -> ScriptedConfirmer:
    return ScriptedConfirmer(True)


@pytest.fixture
def confirm_no() -> ScriptedConfirmer:
    return ScriptedConfirmer(False)


# ---------------------------------------------------------------------------
# Template archives
# ---------------------------------------------------------------------------

def make_tarball(files: dict[str, str], top: str = "next-template-HEAD") -> bytes:
    """Build an in-memory ``.tar.gz`` shaped like a host archive download.

    Every path in *files* is placed under a single *top* directory, the way
    GitHub and friends wrap repository archives.
    """
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        top_info = tarfile.TarInfo(top)
        top_info.type = tarfile.DIRTYPE
        top_info.mode = 0o755
        tar.addfile(top_info)
        for name, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(f"{top}/{name}")
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


@pytest.fixture
def template_files() -> dict[str, str]:
    return {
        "package.json": '{"name": "next-template", "scripts": {"dev": "next dev"}}\n',
        "README.md": "# Next template\n",
        "app/page.tsx": "export default function Page() { return null }\n",
        "packages/web/index.js": "module.exports = {}\n",
    }


@pytest.fixture
def tarball_factory():
    """Factory wrapping ``make_tarball`` for tests that need custom archives."""
    return make_tarball


@pytest.fixture
def template_tarball(template_files: dict[str, str]) -> bytes:
    return make_tarball(template_files)


# ---------------------------------------------------------------------------
# Fake cloners
# ---------------------------------------------------------------------------

class FlakyCloner:
    """Cloner that fails a set number of times before writing files."""

    def __init__(self, failures: int, files: dict[str, str] | None = None) -> None:
        self.failures = failures
        self.files = files or {"package.json": "{}\n"}
        self.calls: list[tuple[TemplateSource, Path]] = []

    async def clone(self, source: TemplateSource, dest: Path) -> None:
        self.calls.append((source, dest))
        if len(self.calls) <= self.failures:
            raise CloneError(f"network unreachable (attempt {len(self.calls)})", source=source.url)
        for name, content in self.files.items():
            target = dest / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")


@pytest.fixture
def flaky_cloner():
    """Factory: ``flaky_cloner(failures=2)`` fails twice, then succeeds."""
    return FlakyCloner


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
