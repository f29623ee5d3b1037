"""Discover and parse the pages of a documentation directory."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from errordocs.adapters.markdown_parser import MarkdownDocumentParser
from errordocs.domain.constants import MARKDOWN_SUFFIX
from errordocs.domain.document import ErrorDocument, sort_corpus

from .errors import CorpusEmptyError


class CorpusLoader:
    """Load every ``*.md`` page directly inside a directory."""

    def __init__(self, parser: Optional[MarkdownDocumentParser] = None) -> None:
        self._parser = parser or MarkdownDocumentParser()

    def discover(self, docs_dir: Path) -> List[Path]:
        if not docs_dir.is_dir():
            return []
        return sorted(
            path for path in docs_dir.iterdir() if path.is_file() and path.name.endswith(MARKDOWN_SUFFIX)
        )

    def load(self, docs_dir: Path) -> List[ErrorDocument]:
        """Return the parsed corpus sorted by file-derived error code."""

        paths = self.discover(docs_dir)
        if not paths:
            raise CorpusEmptyError(docs_dir)
        return sort_corpus([self._parser.parse_file(path) for path in paths])
