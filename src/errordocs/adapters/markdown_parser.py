"""CommonMark parsing backed by markdown-it-py."""

from __future__ import annotations

from pathlib import Path
from typing import List

from markdown_it import MarkdownIt
from markdown_it.token import Token

from errordocs.domain.document import ErrorDocument

MARKDOWN_PRESET = "commonmark"


def create_markdown() -> MarkdownIt:
    """Return a fresh parser configured for the error pages."""

    return MarkdownIt(MARKDOWN_PRESET)


class MarkdownDocumentParser:
    """Turn page text into markdown-it tokens and ErrorDocument values.

    The wrapped parser keeps no per-call state, so one instance can be
    shared across threads and documents.
    """

    def __init__(self, markdown: MarkdownIt | None = None) -> None:
        self._markdown = markdown or create_markdown()

    def parse(self, text: str) -> List[Token]:
        return self._markdown.parse(text)

    def parse_document(self, file_path: Path, text: str) -> ErrorDocument:
        return ErrorDocument.from_events(file_path, self.parse(text))

    def parse_file(self, file_path: Path) -> ErrorDocument:
        text = file_path.read_text(encoding="utf-8")
        return self.parse_document(file_path, text)
