"""Markdown rendering for flatcms.

MarkdownRenderer implements the BodyRenderer protocol on top of mistune. It
has two modes: full HTML rendering used by the publish pipeline, and block
tokenization used by the `cms blocks` diagnostic command.
"""

from __future__ import annotations

import re
from typing import Any

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url"]

EMPTY_HTML = "\n"


def _generate_heading_id(text: str) -> str:
    """Generate an anchor ID from heading text.

    Args:
        text: The rendered heading text, possibly containing inline HTML.

    Returns:
        Lower-cased ID with punctuation removed and whitespace runs
        replaced by underscores.
    """
    slug = re.sub(r"<[^>]+>", "", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    return re.sub(r"\s+", "_", slug)


class _PostHTMLRenderer(mistune.HTMLRenderer):
    """HTML renderer with heading anchors and syntax highlighting."""

    def __init__(self):
        super().__init__(escape=False)
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with an ID attribute derived from its text.

        Repeated IDs within one document get a numeric suffix.
        """
        base_id = _generate_heading_id(text)

        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}_{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        return f"<h{level} id='{heading_id}'>{text}</h{level}>\n"

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block, highlighted with Pygments when the language is known.

        Args:
            code: The code content.
            info: Language identifier from the fence (e.g. 'python').

        Returns:
            HTML string for the code block.
        """
        lang = info.split()[0] if info and info.strip() else None
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        escaped = code.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        lang_class = f' class="language-{lang}"' if lang else ""
        return f"<pre><code{lang_class}>{escaped}</code></pre>\n"


class MarkdownRenderer:
    """Renders post bodies from Markdown to HTML.

    A fresh mistune parser is built for every call, so heading ID
    de-duplication never leaks between documents.
    """

    def render(self, content: str) -> str:
        """Render a post body to HTML.

        An empty or whitespace-only body renders to a single newline.

        Args:
            content: Raw Markdown body.

        Returns:
            Rendered HTML string.
        """
        if not content.strip():
            return EMPTY_HTML
        markdown = mistune.create_markdown(
            renderer=_PostHTMLRenderer(), plugins=MARKDOWN_PLUGINS
        )
        return markdown(content)

    def blocks(self, content: str) -> list[dict[str, Any]]:
        """Tokenize a post body into mistune's block token tree.

        Args:
            content: Raw Markdown body.

        Returns:
            List of token dictionaries, as produced by mistune's AST renderer.
        """
        markdown = mistune.create_markdown(renderer="ast", plugins=MARKDOWN_PLUGINS)
        return markdown(content)


default_renderer = MarkdownRenderer()
