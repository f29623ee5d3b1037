"""Structured view of a single error documentation page."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol, Sequence, Tuple

from .constants import MARKDOWN_SUFFIX

HEADING_OPEN = "heading_open"
HEADING_CLOSE = "heading_close"
INLINE = "inline"
CODE_BLOCK = "code_block"
FENCE = "fence"
CODE_EVENT_TYPES = frozenset({CODE_BLOCK, FENCE})
TITLE_TAG = "h1"

_TITLE_PATTERN = re.compile(r"^(?P<code>[^:]*):\s*(?P<description>.*)$", re.DOTALL)


class MarkdownEvent(Protocol):
    """Subset of a markdown-it token consumed by the document fold."""

    type: str
    tag: str
    content: str


def split_title(text: str) -> Optional[Tuple[str, str]]:
    """Split ``CODE: description`` into its parts, or None when no colon."""

    match = _TITLE_PATTERN.match(text)
    if match is None:
        return None
    return match.group("code").strip(), match.group("description").strip()


@dataclass(frozen=True)
class ErrorDocument:
    """Parsed error page: title fields, code samples, and retained events."""

    file_path: Path
    title_error_code: str = ""
    title_error_description: str = ""
    code_blocks: Tuple[str, ...] = ()
    markdown_events: Tuple[Any, ...] = field(default=(), repr=False, compare=False)

    @property
    def file_path_error_code(self) -> str:
        name = self.file_path.name
        return name[: -len(MARKDOWN_SUFFIX)] if name.endswith(MARKDOWN_SUFFIX) else name

    @classmethod
    def from_events(cls, file_path: Path, events: Iterable[MarkdownEvent]) -> "ErrorDocument":
        """Fold a markdown event stream into a document.

        Only the first level-1 heading is treated as the title. Code blocks
        are collected from anywhere in the page, nested ones included.
        """

        events = tuple(events)
        code_blocks: list[str] = []
        title_code = ""
        title_description = ""
        title_seen = False
        in_title = False
        current = ""
        for event in events:
            if event.type == HEADING_OPEN:
                if event.tag == TITLE_TAG and not title_seen:
                    in_title = True
                    current = ""
            elif event.type == HEADING_CLOSE:
                if in_title:
                    parts = split_title(current)
                    if parts is not None:
                        title_code, title_description = parts
                    in_title = False
                    title_seen = True
            elif event.type == INLINE:
                if in_title:
                    current += event.content
            elif event.type in CODE_EVENT_TYPES:
                code_blocks.append(event.content)

        return cls(
            file_path=Path(file_path),
            title_error_code=title_code,
            title_error_description=title_description,
            code_blocks=tuple(code_blocks),
            markdown_events=events,
        )


def sort_corpus(documents: Sequence[ErrorDocument]) -> list[ErrorDocument]:
    """Order documents by the error code derived from their file name."""

    return sorted(documents, key=lambda doc: doc.file_path_error_code)
