"""Port definitions for the linting engine consumed by the validator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from errordocs.domain.constants import remediation_for
from errordocs.domain.events import Diagnostic


class LintEngineError(RuntimeError):
    """Raised when the linting engine cannot produce diagnostics."""

    def __init__(self, message: str, *, code: str = "ERRDOCS_LINTER_FAILED", remediation: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.remediation = remediation if remediation is not None else remediation_for(code)


class LintTimeoutError(LintEngineError):
    """Raised when linting a single code sample exceeds its time budget."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="ERRDOCS_LINTER_TIMEOUT")


class LintSession(ABC):
    """One parse/lint context holding the text of a single code sample."""

    @abstractmethod
    def replace_text(self, text: str) -> None:
        """Replace the whole (initially empty) buffer with ``text``."""

    @abstractmethod
    def lint(self) -> Sequence[Diagnostic]:
        """Return every diagnostic for the current buffer."""

    def close(self) -> None:
        """Release the session."""


class LintProcess(ABC):
    """Engine context shared by the sessions of one corpus run."""

    @abstractmethod
    def create_session(self) -> LintSession:
        """Return a fresh, empty session."""

    def close(self) -> None:
        """Release the process."""


class LintEngine(ABC):
    """Long-lived factory for engine processes."""

    @abstractmethod
    def create_process(self) -> LintProcess:
        """Start an engine context for one corpus run."""
