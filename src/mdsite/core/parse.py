"""markdown-it tokenization and token-to-node conversion"""

from typing import Iterator

from markdown_it import MarkdownIt
from markdown_it.common.utils import unescapeAll

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
from mdsite.errors import BodyParseError


def _make_parser() -> MarkdownIt:
    """CommonMark tokenizer with raw HTML disabled, so markup like <div> stays literal text."""
    return MarkdownIt("commonmark", options_update={"html": False})


class NodeStream:
    """Lazy, restartable sequence of block nodes for one body.

    Every iteration tokenizes the body afresh and converts one top-level
    block at a time; no state is shared between iterations.
    """

    def __init__(self, body: str):
        self.body = body

    def __iter__(self) -> Iterator:
        tokens = _make_parser().parse(self.body)
        i = 0
        while i < len(tokens):
            node, i = _block(tokens, i)
            yield node

    def __repr__(self) -> str:
        return f"NodeStream({len(self.body)} chars)"


def parse(body: str) -> NodeStream:
    """Return the block nodes of a markdown body as a restartable stream."""
    return NodeStream(body)


def _fence_language(info: str) -> str:
    """First word of a fence info string, e.g. '```haskell title=x' -> 'haskell'."""
    info = unescapeAll(info).strip()
    return info.split()[0] if info else ""


def _heading_level(token) -> int:
    """Heading level from the token tag ('h2' -> 2); ATX and setext headings share it."""
    return int(token.tag[1:])


def _expect(tokens: list, i: int, token_type: str) -> None:
    if i >= len(tokens) or tokens[i].type != token_type:
        found = tokens[i].type if i < len(tokens) else "end of input"
        raise BodyParseError(f"expected '{token_type}' token, found '{found}'")


def _inline_at(tokens: list, i: int) -> tuple:
    """Convert the inline token following an *_open token at index i."""
    _expect(tokens, i + 1, 'inline')
    return _inlines(tokens[i + 1].children or [])


def _blocks_until(tokens: list, i: int, close_type: str) -> tuple[list, int]:
    """Convert blocks from i up to the matching close token; return (nodes, index after close)."""
    nodes = []
    while i < len(tokens) and tokens[i].type != close_type:
        node, i = _block(tokens, i)
        nodes.append(node)
    _expect(tokens, i, close_type)
    return nodes, i + 1


def _list(tokens: list, i: int) -> tuple[List, int]:
    tok = tokens[i]
    ordered = tok.type == 'ordered_list_open'
    close_type = 'ordered_list_close' if ordered else 'bullet_list_close'
    start = int(tok.attrGet('start') or 1) if ordered else 1
    tight = True
    items = []
    i += 1
    while i < len(tokens) and tokens[i].type == 'list_item_open':
        item_level = tokens[i].level
        j = i + 1
        while j < len(tokens) and not (tokens[j].type == 'list_item_close' and tokens[j].level == item_level):
            if tokens[j].type == 'paragraph_open' and tokens[j].level == item_level + 1 and not tokens[j].hidden:
                tight = False
            j += 1
        children, i = _blocks_until(tokens, i + 1, 'list_item_close')
        items.append(tuple(children))
    _expect(tokens, i, close_type)
    return List(items=tuple(items), ordered=ordered, start=start, tight=tight), i + 1


def _block(tokens: list, i: int) -> tuple:
    """Convert the block starting at tokens[i]; return (node, index of the next block)."""
    tok = tokens[i]
    kind = tok.type

    if kind == 'heading_open':
        node = Heading(level=_heading_level(tok), children=_inline_at(tokens, i))
        _expect(tokens, i + 2, 'heading_close')
        return node, i + 3
    if kind == 'paragraph_open':
        node = Paragraph(children=_inline_at(tokens, i))
        _expect(tokens, i + 2, 'paragraph_close')
        return node, i + 3
    if kind == 'fence':
        # An unclosed fence runs to the end of the body; markdown-it already captures it whole.
        return CodeBlock(language=_fence_language(tok.info), literal=tok.content), i + 1
    if kind == 'code_block':
        return CodeBlock(language="", literal=tok.content), i + 1
    if kind == 'hr':
        return ThematicBreak(), i + 1
    if kind in ('bullet_list_open', 'ordered_list_open'):
        return _list(tokens, i)
    if kind == 'blockquote_open':
        children, end = _blocks_until(tokens, i + 1, 'blockquote_close')
        return BlockQuote(children=tuple(children)), end
    if kind == 'html_block':
        return Paragraph(children=(Text(tok.content.rstrip('\n')),)), i + 1

    line = tok.map[0] + 1 if tok.map else '?'
    raise BodyParseError(f"unsupported block token '{kind}' at line {line}")


_CONTAINERS = {
    'em_open': 'em_close',
    'strong_open': 'strong_close',
    'link_open': 'link_close',
}


def _inlines(tokens: list) -> tuple:
    """Convert inline child tokens into a tuple of inline nodes by pairing open/close delimiters."""
    stack: list[tuple] = [(None, [])]

    for tok in tokens:
        kind = tok.type
        children = stack[-1][1]

        if kind in ('text', 'text_special', 'html_inline'):
            if children and isinstance(children[-1], Text):
                children[-1] = Text(children[-1].literal + tok.content)
            else:
                children.append(Text(tok.content))
        elif kind == 'code_inline':
            children.append(InlineCode(tok.content))
        elif kind in ('softbreak', 'hardbreak'):
            children.append(LineBreak(hard=kind == 'hardbreak'))
        elif kind == 'image':
            children.append(Image(
                alt=plain_text(_inlines(tok.children or [])),
                src=tok.attrGet('src') or "",
                title=tok.attrGet('title') or "",
            ))
        elif kind in _CONTAINERS:
            stack.append((tok, []))
        elif kind in _CONTAINERS.values():
            opener, inner = stack.pop()
            if opener is None or _CONTAINERS[opener.type] != kind:
                raise BodyParseError(f"unbalanced inline delimiter '{tok.markup or kind}'")
            stack[-1][1].append(_container(opener, tuple(inner)))
        else:
            raise BodyParseError(f"unsupported inline token '{kind}'")

    if len(stack) != 1:
        raise BodyParseError(f"unclosed inline delimiter '{stack[-1][0].markup}'")
    return tuple(stack[0][1])


def _container(opener, children: tuple):
    if opener.type == 'link_open':
        return Link(children=children, href=opener.attrGet('href') or "", title=opener.attrGet('title') or "")
    return Emphasis(children=children, strong=opener.type == 'strong_open')
