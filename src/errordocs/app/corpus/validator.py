"""Cross-check documented error codes against the linting engine."""

from __future__ import annotations

from contextlib import ExitStack, closing
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from errordocs.domain.document import ErrorDocument
from errordocs.domain.events import Diagnostic, Problem
from errordocs.ports.lint_engine import LintEngine, LintProcess, LintTimeoutError


class CorpusValidator:
    """Apply the page rules to every document of a corpus.

    Per page:

    * the file name must equal the title's (non-empty) error code;
    * at least one code sample must exist;
    * the first sample must produce diagnostics, all with the title's code;
    * every later sample must produce no diagnostics.

    Problems are collected in corpus order, then sample order. Nothing
    short-circuits; a timed-out sample is reported and the scan continues.
    Other engine failures propagate.
    """

    def __init__(self, engine: LintEngine) -> None:
        self._engine = engine

    def validate(self, documents: Iterable[ErrorDocument]) -> List[Problem]:
        problems: List[Problem] = []
        with ExitStack() as stack:
            process: Optional[LintProcess] = None

            def acquire() -> LintProcess:
                nonlocal process
                if process is None:
                    process = stack.enter_context(closing(self._engine.create_process()))
                return process

            for document in documents:
                problems.extend(self.validate_document(document, acquire))
        return problems

    def validate_document(self, document: ErrorDocument, acquire: Callable[[], LintProcess]) -> List[Problem]:
        problems: List[Problem] = []

        def report(code: str, message: str) -> None:
            problems.append(Problem(file_path=document.file_path, code=code, message=message))

        if not document.title_error_code or document.title_error_code != document.file_path_error_code:
            report(
                "ERRDOCS_TITLE_MISMATCH",
                f"file name doesn't match error code in title ({document.title_error_code})",
            )
        if not document.code_blocks:
            report("ERRDOCS_MISSING_CODE_BLOCKS", "missing code blocks")

        for index, block in enumerate(document.code_blocks):
            try:
                diagnostics = lint_sample(acquire(), block)
            except LintTimeoutError:
                report("ERRDOCS_LINTER_TIMEOUT", f"timed out linting code block #{index + 1}")
                continue

            if index == 0:
                if not diagnostics:
                    report("ERRDOCS_EXPECTED_ERROR", "expected error in first code block but found no errors")
                for diag in diagnostics:
                    if diag.code != document.title_error_code:
                        report(
                            "ERRDOCS_UNEXPECTED_DIAGNOSTIC",
                            f"expected only {document.title_error_code} errors in first code block "
                            f"but found {diag.code}",
                        )
            elif diagnostics:
                report("ERRDOCS_EXPECTED_CLEAN", f"expected no error in code block #{index + 1} but found errors")
        return problems

    def check_coverage(
        self,
        documents: Sequence[ErrorDocument],
        known_codes: Iterable[str],
        docs_dir: Path,
    ) -> List[Problem]:
        """Report every known diagnostic code lacking a page."""

        documented = {document.file_path_error_code for document in documents}
        return [
            Problem(
                file_path=docs_dir / f"{code}.md",
                code="ERRDOCS_UNDOCUMENTED_CODE",
                message=f"missing documentation for {code}",
            )
            for code in sorted(set(known_codes) - documented)
        ]


def lint_sample(process: LintProcess, text: str) -> List[Diagnostic]:
    """Lint one code sample in a fresh session, releasing it on every path."""

    with closing(process.create_session()) as session:
        session.replace_text(text)
        return list(session.lint())
