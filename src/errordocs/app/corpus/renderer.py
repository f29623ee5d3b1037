"""HTML rendering of error pages."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, MutableMapping, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.renderer import RendererHTML
from markdown_it.token import Token
from markdown_it.utils import OptionsDict

from errordocs.adapters.markdown_parser import create_markdown
from errordocs.domain.document import TITLE_TAG, ErrorDocument

ENV_ERROR_CODE = "error_code"

RenderRule = Callable[[RendererHTML, Sequence[Token], int, OptionsDict, MutableMapping[str, Any]], str]


def _heading_open(self: RendererHTML, tokens: Sequence[Token], idx: int, options: OptionsDict, env: MutableMapping[str, Any]) -> str:
    if tokens[idx].tag == TITLE_TAG:
        anchor = escapeHtml(str(env.get(ENV_ERROR_CODE, "")))
        return f'<h2><a class="self-reference" href="#{anchor}">'
    return self.renderToken(tokens, idx, options, env)


def _heading_close(self: RendererHTML, tokens: Sequence[Token], idx: int, options: OptionsDict, env: MutableMapping[str, Any]) -> str:
    if tokens[idx].tag == TITLE_TAG:
        return "</a></h2>"
    return self.renderToken(tokens, idx, options, env)


def _code(self: RendererHTML, tokens: Sequence[Token], idx: int, options: OptionsDict, env: MutableMapping[str, Any]) -> str:
    return f"<figure><pre><code>{escapeHtml(tokens[idx].content)}</code></pre></figure>"


RENDER_RULES: Dict[str, RenderRule] = {
    "heading_open": _heading_open,
    "heading_close": _heading_close,
    "code_block": _code,
    "fence": _code,
}


class DocumentRenderer:
    """Render documents with the title and code-block rules overridden.

    Token types without an entry in ``RENDER_RULES`` keep markdown-it's
    default output. The renderer installs its rules on the MarkdownIt
    instance it owns.
    """

    def __init__(self, markdown: Optional[MarkdownIt] = None) -> None:
        self._markdown = markdown or create_markdown()
        for name, rule in RENDER_RULES.items():
            self._markdown.add_render_rule(name, rule)

    def render(self, document: ErrorDocument) -> str:
        env = {ENV_ERROR_CODE: document.title_error_code}
        return self._markdown.renderer.render(list(document.markdown_events), self._markdown.options, env)

    def render_corpus(self, documents: Iterable[ErrorDocument]) -> str:
        return "".join(self.render(document) for document in documents)
