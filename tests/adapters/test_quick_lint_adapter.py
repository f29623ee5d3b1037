from __future__ import annotations

import json
import subprocess
from typing import Any, List

import pytest

from errordocs.adapters import quick_lint
from errordocs.adapters.quick_lint import QuickLintEngine, parse_qflist
from errordocs.domain.value_objects import LinterConfig
from errordocs.ports.lint_engine import LintEngineError, LintTimeoutError


class _Recorder:
    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: List[dict] = []

    def __call__(self, args, **kwargs):
        self.calls.append({"args": args, **kwargs})
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture()
def found_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(quick_lint.shutil, "which", lambda name: f"/usr/bin/{name}")


def _completed(stdout: str, returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_session_runs_linter_with_sample_on_stdin(monkeypatch: pytest.MonkeyPatch, found_executable: None) -> None:
    output = json.dumps({"qflist": [{"nr": "E0054", "text": "unexpected token", "type": "E", "lnum": 1, "col": 9}]})
    recorder = _Recorder(_completed(output, returncode=1))
    monkeypatch.setattr(quick_lint.subprocess, "run", recorder)

    engine = QuickLintEngine(["quick-lint-js", "--language=javascript"], timeout=3)
    process = engine.create_process()
    session = process.create_session()
    session.replace_text("let x = ;\n")
    diagnostics = session.lint()

    assert [diag.code for diag in diagnostics] == ["E0054"]
    assert diagnostics[0].severity == "error"
    assert (diagnostics[0].line, diagnostics[0].column) == (1, 9)
    call = recorder.calls[0]
    assert call["args"] == [
        "/usr/bin/quick-lint-js",
        "--language=javascript",
        "--output-format=vim-qflist-json",
        "--stdin",
    ]
    assert call["input"] == "let x = ;\n"
    assert call["timeout"] == 3


def test_timeout_raises_lint_timeout(monkeypatch: pytest.MonkeyPatch, found_executable: None) -> None:
    monkeypatch.setattr(quick_lint.subprocess, "run", _Recorder(subprocess.TimeoutExpired(cmd="quick-lint-js", timeout=1)))

    session = QuickLintEngine(timeout=1).create_process().create_session()

    with pytest.raises(LintTimeoutError) as excinfo:
        session.lint()
    assert excinfo.value.code == "ERRDOCS_LINTER_TIMEOUT"


def test_crash_raises_engine_error(monkeypatch: pytest.MonkeyPatch, found_executable: None) -> None:
    monkeypatch.setattr(quick_lint.subprocess, "run", _Recorder(_completed("", returncode=134, stderr="abort")))

    session = QuickLintEngine().create_process().create_session()

    with pytest.raises(LintEngineError, match="abort"):
        session.lint()


def test_missing_executable_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(quick_lint.shutil, "which", lambda name: None)

    with pytest.raises(LintEngineError) as excinfo:
        QuickLintEngine(["no-such-linter"]).create_process()
    assert excinfo.value.code == "ERRDOCS_LINTER_FAILED"
    assert excinfo.value.remediation


def test_closed_session_refuses_to_lint(found_executable: None) -> None:
    session = QuickLintEngine().create_process().create_session()
    session.close()

    with pytest.raises(LintEngineError):
        session.lint()


def test_from_config_uses_command_and_timeout() -> None:
    engine = QuickLintEngine.from_config(LinterConfig(command=("qljs", "--flag"), timeout=2.5))

    assert engine.command == ("qljs", "--flag")


def test_parse_qflist_handles_empty_and_warning_entries() -> None:
    assert parse_qflist("") == []
    assert parse_qflist('{"qflist": []}') == []
    diagnostics = parse_qflist('{"qflist": [{"nr": "E0057", "type": "W", "text": "use of undeclared variable"}]}')
    assert diagnostics[0].code == "E0057"
    assert diagnostics[0].severity == "warning"
    assert diagnostics[0].line is None


@pytest.mark.parametrize("output", ["not json", '{"items": []}', '{"qflist": [{"text": "no code"}]}'])
def test_parse_qflist_rejects_malformed_output(output: str) -> None:
    with pytest.raises(LintEngineError):
        parse_qflist(output)
