from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, List, Sequence, Union

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
SANDBOX_HOME = Path(os.environ.get("PYTEST_DEBUG_TEMPROOT", "/tmp/errordocs-pytest")).resolve() / "home"
os.environ.setdefault("ERRORDOCS_HOME", str(SANDBOX_HOME))
SANDBOX_HOME.mkdir(parents=True, exist_ok=True)
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from errordocs.domain.events import Diagnostic  # noqa: E402
from errordocs.ports.lint_engine import LintEngine, LintProcess, LintSession  # noqa: E402

Response = Union[Sequence[str], Exception]


class ScriptedLintEngine(LintEngine):
    """In-memory engine answering with pre-set diagnostic codes per sample text."""

    def __init__(self, responses: Dict[str, Response] | None = None) -> None:
        self.responses: Dict[str, Response] = dict(responses or {})
        self.linted: List[str] = []
        self.processes: List["ScriptedLintProcess"] = []
        self.sessions: List["ScriptedLintSession"] = []

    def create_process(self) -> "ScriptedLintProcess":
        process = ScriptedLintProcess(self)
        self.processes.append(process)
        return process


class ScriptedLintProcess(LintProcess):
    def __init__(self, engine: ScriptedLintEngine) -> None:
        self._engine = engine
        self.closed = False

    def create_session(self) -> "ScriptedLintSession":
        session = ScriptedLintSession(self._engine)
        self._engine.sessions.append(session)
        return session

    def close(self) -> None:
        self.closed = True


class ScriptedLintSession(LintSession):
    def __init__(self, engine: ScriptedLintEngine) -> None:
        self._engine = engine
        self._text = ""
        self.closed = False

    def replace_text(self, text: str) -> None:
        self._text = text

    def lint(self) -> List[Diagnostic]:
        self._engine.linted.append(self._text)
        response = self._engine.responses.get(self._text, ())
        if isinstance(response, Exception):
            raise response
        return [Diagnostic(code=code) for code in response]

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def scripted_engine() -> type[ScriptedLintEngine]:
    return ScriptedLintEngine


def write_page(directory: Path, name: str, text: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture()
def page_writer():
    return write_page
