"""Tests for the mistune-based Markdown renderer."""

from flatcms.protocols import BodyRenderer
from flatcms.renderers import EMPTY_HTML, MarkdownRenderer, _generate_heading_id


def test_renderer_satisfies_protocol():
    assert isinstance(MarkdownRenderer(), BodyRenderer)


def test_heading_and_paragraph():
    html = MarkdownRenderer().render("# h1 title\na paragraph")
    assert html == "<h1 id='h1_title'>h1 title</h1>\n<p>a paragraph</p>\n"


def test_empty_body_renders_single_newline():
    renderer = MarkdownRenderer()
    assert renderer.render("") == EMPTY_HTML == "\n"
    assert renderer.render("  \n\n") == "\n"


def test_generate_heading_id():
    assert _generate_heading_id("h1 title") == "h1_title"
    assert _generate_heading_id("Hello, World!") == "hello_world"
    assert _generate_heading_id("<code>x</code>  spaced-out") == "x_spaced-out"


def test_duplicate_heading_ids_get_suffix():
    html = MarkdownRenderer().render("# Intro\n\n## Intro\n\n### Intro\n")
    assert "<h1 id='intro'>Intro</h1>" in html
    assert "<h2 id='intro_1'>Intro</h2>" in html
    assert "<h3 id='intro_2'>Intro</h3>" in html


def test_heading_ids_do_not_leak_between_documents():
    renderer = MarkdownRenderer()
    renderer.render("# Intro")
    assert "<h1 id='intro'>" in renderer.render("# Intro")


def test_code_block_highlighting():
    renderer = MarkdownRenderer()
    highlighted = renderer.render("```python\nprint('hi')\n```\n")
    assert 'class="highlight"' in highlighted

    plain = renderer.render("```nosuchlang\nx < y\n```\n")
    assert '<pre><code class="language-nosuchlang">' in plain
    assert "x &lt; y" in plain


def test_plugins_enabled():
    html = MarkdownRenderer().render("~~gone~~\n\n| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert "<del>gone</del>" in html
    assert "<table>" in html


def test_blocks_returns_block_tokens():
    tokens = MarkdownRenderer().blocks("# Title\n\nSome text\n")
    types = [token["type"] for token in tokens if token["type"] != "blank_line"]
    assert types == ["heading", "paragraph"]
    assert tokens[0]["attrs"]["level"] == 1


def test_blocks_of_empty_body():
    tokens = MarkdownRenderer().blocks("")
    assert all(token["type"] == "blank_line" for token in tokens)
