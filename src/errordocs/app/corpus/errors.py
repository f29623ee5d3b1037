"""Fatal errors raised while processing a documentation corpus."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from errordocs.domain.constants import remediation_for
from errordocs.domain.events import Problem


class CorpusError(RuntimeError):
    """Base class carrying a machine code and remediation hint."""

    def __init__(self, message: str, *, code: str, remediation: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.remediation = remediation if remediation is not None else remediation_for(code)


class CorpusEmptyError(CorpusError):
    """Raised when the documentation directory holds no pages."""

    def __init__(self, docs_dir: Path) -> None:
        super().__init__(f"found no .md files in {docs_dir}", code="ERRDOCS_CORPUS_EMPTY")
        self.docs_dir = docs_dir


class CorpusValidationError(CorpusError):
    """Raised once per run with every problem found in the corpus."""

    def __init__(self, problems: Sequence[Problem]) -> None:
        self.problems = tuple(problems)
        lines = "\n".join(str(problem) for problem in self.problems)
        super().__init__(f"found problems in error documents:\n{lines}", code="ERRDOCS_VALIDATION_FAILED")
