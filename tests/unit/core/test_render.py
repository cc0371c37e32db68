"""Unit tests for core/render.py"""

from dataclasses import dataclass

import pytest

from mdsite.core.nodes import CodeBlock, Heading, Paragraph, Text
from mdsite.core.parse import parse
from mdsite.core.render import escape_html, get_renderer, render, render_page
from mdsite.errors import UnknownNodeVariant


@dataclass(frozen=True)
class Table:
    rows: tuple


def _html(md: str) -> str:
    return render(parse(md), "html")


def test_render_is_deterministic(chapter_md):
    """Rendering the same node sequence twice gives identical output."""
    nodes = list(parse(chapter_md))
    assert render(nodes) == render(nodes)
    assert _html(chapter_md) == _html(chapter_md)


def test_level_two_heading():
    assert _html("## Title\n") == '<h2 id="title">Title</h2>\n'


def test_duplicate_heading_anchors_are_numbered():
    out = _html("## Example\n\n## Example\n")
    assert 'id="example"' in out
    assert 'id="example-1"' in out


def test_anchor_numbering_skips_issued_slugs():
    """A literal 'Example 1' heading must not reuse the id given to the second 'Example'."""
    out = _html("## Example\n\n## Example\n\n## Example 1\n")
    assert out.count('id="example-1"') == 1
    assert 'id="example-1-1"' in out


def test_anchor_state_does_not_leak_between_renders():
    nodes = list(parse("## Example\n"))
    renderer = get_renderer("html")
    assert renderer.render(nodes) == renderer.render(nodes)


def test_haskell_block_renders_verbatim():
    """A haskell fence renders as a tagged code block, not prose."""
    out = _html("```haskell\ndata Foo = Bar | Baz\n```\n")
    assert out == '<pre><code class="language-haskell">data Foo = Bar | Baz\n</code></pre>\n'


@pytest.mark.parametrize("literal", [
    "*stars* and _underscores_\n",
    "[link](http://x) ![img](y.png)\n",
    "## heading-like\n- list-like\n",
    "plain   spacing   kept\n\n\n  indented\n",
])
def test_code_block_content_is_not_altered(literal):
    """Inline markup rules never touch code block text."""
    out = _html(f"```\n{literal}```\n")
    assert out == f"<pre><code>{literal}</code></pre>\n"


def test_code_block_escapes_html():
    out = render([CodeBlock(language="haskell", literal='x < y && "z"\n')])
    assert 'x &lt; y &amp;&amp; &quot;z&quot;' in out


def test_unterminated_fence_renders_remaining_text():
    out = _html("```\nmain = print 1\n\nstill code\n")
    assert out == "<pre><code>main = print 1\n\nstill code\n</code></pre>\n"


def test_paragraph_inline_markup():
    out = _html("Use **data** or *newtype*, see [docs](https://haskell.org).\n")
    assert out == (
        '<p>Use <strong>data</strong> or <em>newtype</em>, '
        'see <a href="https://haskell.org">docs</a>.</p>\n'
    )


def test_text_is_escaped():
    assert _html("a < b & <div>\n") == "<p>a &lt; b &amp; &lt;div&gt;</p>\n"


def test_image():
    out = _html('![a "shape"](img/s.png)\n')
    assert out == '<p><img src="img/s.png" alt="a &quot;shape&quot;" /></p>\n'


def test_tight_list():
    assert _html("- a\n- b\n") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"


def test_loose_ordered_list_with_start():
    out = _html("2. a\n\n3. b\n")
    assert out == '<ol start="2">\n<li>\n<p>a</p>\n</li>\n<li>\n<p>b</p>\n</li>\n</ol>\n'


def test_blockquote_and_rule():
    assert _html("> q\n\n---\n") == "<blockquote>\n<p>q</p>\n</blockquote>\n<hr />\n"


def test_unknown_node_variant_is_fatal():
    with pytest.raises(UnknownNodeVariant, match="Table"):
        render([Paragraph(children=(Text("ok"),)), Table(rows=())])


def test_unknown_inline_variant_is_fatal():
    with pytest.raises(UnknownNodeVariant):
        render([Paragraph(children=(Table(rows=()),))], "text")


def test_unknown_format():
    with pytest.raises(ValueError, match="Unknown output format"):
        render([], "pdf")


def test_text_format():
    out = render(parse("# Types\n\nSome *text* & more.\n\n```haskell\nx = 1\n```\n"), "text")
    assert out == "Types\n=====\n\nSome text & more.\n\n    x = 1\n"


def test_text_format_lists():
    out = render(parse("1. one\n2. two\n"), "text")
    assert out == "1. one\n2. two\n"


def test_escape_html():
    assert escape_html("<a href=\"x\">'&'</a>") == "&lt;a href=&quot;x&quot;&gt;'&amp;'&lt;/a&gt;"


def test_render_page(make_doc):
    doc = make_doc(metadata={"title": "Types & Classes"})
    page = render_page(doc, render([Heading(level=1, children=(Text("Hi"),))]))
    assert "<title>Types &amp; Classes</title>" in page
    assert '<h1 id="hi">Hi</h1>' in page
    assert page.startswith("<!DOCTYPE html>")


def test_render_page_title_falls_back_to_stem(make_doc):
    page = render_page(make_doc(name="maybe.md"), "")
    assert "<title>maybe</title>" in page


def test_text_format_loose_list_keeps_paragraph_break():
    out = render(parse("- one\n\n  more\n\n- two\n"), "text")
    assert out == "- one\n\n  more\n- two\n"
