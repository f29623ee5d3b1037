"""Application service orchestrating corpus checks and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from errordocs.domain.document import ErrorDocument
from errordocs.domain.events import Problem
from errordocs.ports.lint_engine import LintEngine

from .errors import CorpusValidationError
from .loader import CorpusLoader
from .renderer import DocumentRenderer
from .validator import CorpusValidator


@dataclass(frozen=True)
class CorpusReport:
    """Outcome of checking one documentation directory."""

    docs_dir: Path
    documents: Sequence[ErrorDocument]
    problems: Sequence[Problem]

    @property
    def status(self) -> str:
        return "error" if self.problems else "ok"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "docs_dir": str(self.docs_dir),
            "documents": len(self.documents),
            "code_blocks": sum(len(document.code_blocks) for document in self.documents),
            "problems": [problem.as_dict() for problem in self.problems],
        }

    def raise_for_problems(self) -> None:
        if self.problems:
            raise CorpusValidationError(self.problems)


class CorpusService:
    """High-level API used by the CLI: check, render and list a corpus."""

    def __init__(
        self,
        engine: LintEngine,
        *,
        loader: Optional[CorpusLoader] = None,
        renderer: Optional[DocumentRenderer] = None,
    ) -> None:
        self._loader = loader or CorpusLoader()
        self._validator = CorpusValidator(engine)
        self._renderer = renderer or DocumentRenderer()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self, docs_dir: Path) -> List[ErrorDocument]:
        return self._loader.load(docs_dir)

    def check(self, docs_dir: Path, *, known_codes: Optional[Iterable[str]] = None) -> CorpusReport:
        documents = self.load(docs_dir)
        problems = self._validator.validate(documents)
        if known_codes is not None:
            problems.extend(self._validator.check_coverage(documents, known_codes, docs_dir))
        return CorpusReport(docs_dir=docs_dir, documents=tuple(documents), problems=tuple(problems))

    def render_html(self, docs_dir: Path, *, known_codes: Optional[Iterable[str]] = None) -> str:
        """Validate the corpus and return the concatenated HTML of every page."""

        report = self.check(docs_dir, known_codes=known_codes)
        report.raise_for_problems()
        return self._renderer.render_corpus(report.documents)

    def list_entries(self, docs_dir: Path) -> List[Dict[str, Any]]:
        return [
            {
                "code": document.file_path_error_code,
                "title_code": document.title_error_code,
                "description": document.title_error_description,
                "code_blocks": len(document.code_blocks),
                "path": str(document.file_path),
            }
            for document in self.load(docs_dir)
        ]
