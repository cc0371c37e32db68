"""Node-to-text renderers: HTML with entity escaping, and plain text"""

import html
from typing import Iterable

from mdsite.core.models import Document
from mdsite.core.nodes import (
    BlockQuote,
    CodeBlock,
    Emphasis,
    Heading,
    Image,
    InlineCode,
    LineBreak,
    Link,
    List,
    Paragraph,
    Text,
    ThematicBreak,
    plain_text,
)
from mdsite.core.utils.slug import slugify
from mdsite.errors import UnknownNodeVariant


def escape_html(text: str) -> str:
    """Escape &, <, > and double quotes; single quotes are left alone."""
    return html.escape(text, quote=False).replace('"', "&quot;")


class HtmlRenderer:
    """Render nodes to an HTML fragment.

    The only state is the set of heading anchors issued during one render()
    call, so repeated renders of the same nodes give identical output.
    """
    name = "html"

    def render(self, nodes: Iterable) -> str:
        anchors: set[str] = set()
        return "".join(self._block(node, anchors, tight=False) for node in nodes)

    def _anchor(self, heading: Heading, anchors: set[str]) -> str:
        base = slugify(plain_text(heading.children)) or "section"
        slug, n = base, 0
        while slug in anchors:
            n += 1
            slug = f"{base}-{n}"
        anchors.add(slug)
        return slug

    def _block(self, node, anchors: set[str], tight: bool) -> str:
        if isinstance(node, Heading):
            return (
                f'<h{node.level} id="{self._anchor(node, anchors)}">'
                f'{self.inlines(node.children)}</h{node.level}>\n'
            )
        if isinstance(node, Paragraph):
            inner = self.inlines(node.children)
            return f"{inner}\n" if tight else f"<p>{inner}</p>\n"
        if isinstance(node, CodeBlock):
            cls = f' class="language-{escape_html(node.language)}"' if node.language else ""
            return f"<pre><code{cls}>{escape_html(node.literal)}</code></pre>\n"
        if isinstance(node, List):
            return self._list(node, anchors)
        if isinstance(node, BlockQuote):
            inner = "".join(self._block(child, anchors, tight=False) for child in node.children)
            return f"<blockquote>\n{inner}</blockquote>\n"
        if isinstance(node, ThematicBreak):
            return "<hr />\n"
        raise UnknownNodeVariant(node, self.name)

    def _list(self, node: List, anchors: set[str]) -> str:
        tag = "ol" if node.ordered else "ul"
        start = f' start="{node.start}"' if node.ordered and node.start != 1 else ""
        items = []
        for item in node.items:
            inner = "".join(self._block(child, anchors, tight=node.tight) for child in item)
            if node.tight and item and isinstance(item[-1], Paragraph):
                inner = inner[:-1]
            if inner and not node.tight:
                inner = "\n" + inner
            items.append(f"<li>{inner}</li>\n")
        return f"<{tag}{start}>\n{''.join(items)}</{tag}>\n"

    def inlines(self, nodes: Iterable) -> str:
        return "".join(self._inline(node) for node in nodes)

    def _inline(self, node) -> str:
        if isinstance(node, Text):
            return escape_html(node.literal)
        if isinstance(node, InlineCode):
            return f"<code>{escape_html(node.literal)}</code>"
        if isinstance(node, LineBreak):
            return "<br />\n" if node.hard else "\n"
        if isinstance(node, Emphasis):
            tag = "strong" if node.strong else "em"
            return f"<{tag}>{self.inlines(node.children)}</{tag}>"
        if isinstance(node, Link):
            title = f' title="{escape_html(node.title)}"' if node.title else ""
            return f'<a href="{escape_html(node.href)}"{title}>{self.inlines(node.children)}</a>'
        if isinstance(node, Image):
            title = f' title="{escape_html(node.title)}"' if node.title else ""
            return f'<img src="{escape_html(node.src)}" alt="{escape_html(node.alt)}"{title} />'
        raise UnknownNodeVariant(node, self.name)


class TextRenderer:
    """Render nodes to plain text. Nothing is escaped; code blocks are indented verbatim."""
    name = "text"

    def render(self, nodes: Iterable) -> str:
        return "\n".join(self._block(node) for node in nodes)

    def _block(self, node) -> str:
        if isinstance(node, Heading):
            title = self.inlines(node.children)
            if node.level <= 2:
                return f"{title}\n{('=' if node.level == 1 else '-') * len(title)}\n"
            return f"{title}\n"
        if isinstance(node, Paragraph):
            return f"{self.inlines(node.children)}\n"
        if isinstance(node, CodeBlock):
            return "".join(f"    {line}" if line.strip() else line for line in node.literal.splitlines(keepends=True))
        if isinstance(node, List):
            return self._list(node)
        if isinstance(node, BlockQuote):
            inner = "\n".join(self._block(child) for child in node.children)
            return "".join(f"> {line}" if line.strip() else ">\n" for line in inner.splitlines(keepends=True))
        if isinstance(node, ThematicBreak):
            return "----\n"
        raise UnknownNodeVariant(node, self.name)

    def _list(self, node: List) -> str:
        out = []
        for n, item in enumerate(node.items, start=node.start):
            marker = f"{n}. " if node.ordered else "- "
            sep = "" if node.tight else "\n"
            body = sep.join(self._block(child) for child in item) or "\n"
            lines = body.splitlines(keepends=True)
            out.append(marker + lines[0])
            out.extend(" " * len(marker) + line if line.strip() else line for line in lines[1:])
        return "".join(out)

    def inlines(self, nodes: Iterable) -> str:
        return "".join(self._inline(node) for node in nodes)

    def _inline(self, node) -> str:
        if isinstance(node, (Text, InlineCode)):
            return node.literal
        if isinstance(node, LineBreak):
            return "\n"
        if isinstance(node, Emphasis):
            return self.inlines(node.children)
        if isinstance(node, Link):
            text = self.inlines(node.children)
            return text if text == node.href else f"{text} <{node.href}>"
        if isinstance(node, Image):
            return f"[{node.alt}]"
        raise UnknownNodeVariant(node, self.name)


RENDERERS = {r.name: r for r in (HtmlRenderer, TextRenderer)}


def get_renderer(fmt: str):
    try:
        return RENDERERS[fmt]()
    except KeyError:
        raise ValueError(f"Unknown output format '{fmt}'; expected one of {sorted(RENDERERS)}") from None


def render(nodes: Iterable, fmt: str = "html") -> str:
    """Render a node sequence in the named output format."""
    return get_renderer(fmt).render(nodes)


PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8" />
<title>{title}</title>
</head>
<body>
{body}</body>
</html>
"""


def render_page(document: Document, body_html: str) -> str:
    """Wrap an HTML fragment in a minimal page titled from the document metadata."""
    return PAGE_TEMPLATE.format(title=escape_html(document.title), body=body_html)
