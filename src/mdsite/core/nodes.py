"""Closed set of block and inline nodes produced by the parser.

Nodes are frozen and hold tuples, so a parsed sequence can be rendered any
number of times without being changed by the renderer.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Text:
    literal: str


@dataclass(frozen=True)
class InlineCode:
    literal: str


@dataclass(frozen=True)
class LineBreak:
    hard: bool = False


@dataclass(frozen=True)
class Emphasis:
    children: tuple
    strong: bool = False


@dataclass(frozen=True)
class Link:
    children: tuple
    href: str
    title: str = ""

    @property
    def text(self) -> str:
        return plain_text(self.children)


@dataclass(frozen=True)
class Image:
    alt: str
    src: str
    title: str = ""


@dataclass(frozen=True)
class Heading:
    level: int
    children: tuple


@dataclass(frozen=True)
class Paragraph:
    children: tuple


@dataclass(frozen=True)
class CodeBlock:
    language: str
    literal: str


@dataclass(frozen=True)
class List:
    items: tuple                    # one tuple of block nodes per item
    ordered: bool = False
    start: int = 1
    tight: bool = True


@dataclass(frozen=True)
class BlockQuote:
    children: tuple


@dataclass(frozen=True)
class ThematicBreak:
    pass


Inline = Union[Text, InlineCode, LineBreak, Emphasis, Link, Image]
Block = Union[Heading, Paragraph, CodeBlock, List, BlockQuote, ThematicBreak]
Node = Union[Inline, Block]


def plain_text(nodes) -> str:
    """Concatenate the literal text of inline nodes, dropping markup."""
    parts = []
    for node in nodes:
        if isinstance(node, (Text, InlineCode)):
            parts.append(node.literal)
        elif isinstance(node, (Emphasis, Link)):
            parts.append(plain_text(node.children))
        elif isinstance(node, Image):
            parts.append(node.alt)
        elif isinstance(node, LineBreak):
            parts.append(" ")
    return "".join(parts)
