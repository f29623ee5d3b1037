"""Linting engine adapter driving the quick-lint-js command line."""

from __future__ import annotations

import json
import shutil
import subprocess
from typing import Any, List, Sequence

from errordocs.domain.constants import DEFAULT_LINTER_COMMAND, DEFAULT_LINTER_TIMEOUT
from errordocs.domain.events import Diagnostic
from errordocs.domain.value_objects import LinterConfig
from errordocs.ports.lint_engine import (
    LintEngine,
    LintEngineError,
    LintProcess,
    LintSession,
    LintTimeoutError,
)

OUTPUT_FORMAT_ARGS = ("--output-format=vim-qflist-json", "--stdin")
# 1 means diagnostics were reported.
_OK_RETURN_CODES = {0, 1}


class QuickLintEngine(LintEngine):
    """Spawn one linter invocation per code sample."""

    def __init__(self, command: Sequence[str] = DEFAULT_LINTER_COMMAND, *, timeout: float = DEFAULT_LINTER_TIMEOUT) -> None:
        if not command:
            raise LintEngineError("linter command must not be empty")
        self._command = tuple(command)
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: LinterConfig) -> "QuickLintEngine":
        return cls(config.command, timeout=config.timeout)

    @property
    def command(self) -> tuple[str, ...]:
        return self._command

    def create_process(self) -> "QuickLintProcess":
        executable = shutil.which(self._command[0])
        if executable is None:
            raise LintEngineError(f"linter executable not found: {self._command[0]}")
        return QuickLintProcess((executable, *self._command[1:]), timeout=self._timeout)


class QuickLintProcess(LintProcess):
    def __init__(self, command: Sequence[str], *, timeout: float) -> None:
        self._command = tuple(command)
        self._timeout = timeout
        self._closed = False

    def create_session(self) -> "QuickLintSession":
        if self._closed:
            raise LintEngineError("linter process already closed")
        return QuickLintSession(self._command, timeout=self._timeout)

    def close(self) -> None:
        self._closed = True


class QuickLintSession(LintSession):
    def __init__(self, command: Sequence[str], *, timeout: float) -> None:
        self._command = tuple(command)
        self._timeout = timeout
        self._text = ""
        self._closed = False

    def replace_text(self, text: str) -> None:
        self._text = text

    def lint(self) -> List[Diagnostic]:
        if self._closed:
            raise LintEngineError("linter session already closed")
        args = [*self._command, *OUTPUT_FORMAT_ARGS]
        try:
            result = subprocess.run(
                args,
                input=self._text,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise LintTimeoutError(f"linter did not finish within {self._timeout:g}s") from exc
        except OSError as exc:
            raise LintEngineError(f"failed to run linter: {exc}") from exc

        if result.returncode not in _OK_RETURN_CODES:
            detail = (result.stderr or "").strip() or f"exit status {result.returncode}"
            raise LintEngineError(f"linter crashed: {detail}")
        return parse_qflist(result.stdout)

    def close(self) -> None:
        self._closed = True
        self._text = ""


def parse_qflist(output: str) -> List[Diagnostic]:
    """Parse ``vim-qflist-json`` output into diagnostics."""

    if not output.strip():
        return []
    try:
        payload = json.loads(output)
    except json.JSONDecodeError as exc:
        raise LintEngineError(f"linter produced invalid JSON: {exc}") from exc
    entries = payload.get("qflist") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        raise LintEngineError("linter output is missing the 'qflist' array")

    diagnostics: List[Diagnostic] = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("nr"):
            raise LintEngineError(f"linter diagnostic without code: {entry!r}")
        diagnostics.append(
            Diagnostic(
                code=str(entry["nr"]),
                message=str(entry.get("text", "")),
                severity=_severity(entry.get("type")),
                line=_int_or_none(entry.get("lnum")),
                column=_int_or_none(entry.get("col")),
            )
        )
    return diagnostics


def _severity(value: Any) -> str | None:
    if value == "E":
        return "error"
    if value == "W":
        return "warning"
    return None


def _int_or_none(value: Any) -> int | None:
    return value if isinstance(value, int) and not isinstance(value, bool) else None
