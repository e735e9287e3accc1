# mdbook_tailwind/markdown/tokens.py
"""
Flat token stream used by the annotation pipeline.

Pandoc hands us a tree. The annotation scanner and rewriter work on a flat
sequence of events instead, so the tree is flattened into the tokens below
(see ``tokenizer.py``). Only ``ParagraphStart``, ``ParagraphEnd``,
``TextRun`` and ``RawMarkup`` carry meaning for the pipeline; every other
token is carried through untouched and in order.
"""

from dataclasses import dataclass
from typing import Any, List, Union


@dataclass(frozen=True)
class ParagraphStart:
    pass


@dataclass(frozen=True)
class ParagraphEnd:
    pass


@dataclass(frozen=True)
class TextRun:
    """A run of words and single spaces inside a paragraph."""

    content: str


@dataclass(frozen=True)
class RawMarkup:
    """Raw markup passed through to the output, e.g. an HTML tag."""

    content: str
    format: str = "html"


@dataclass(frozen=True)
class ContainerStart:
    """Opens a block container (block quote, div, list, list item)."""

    kind: str
    attr: Any = None


@dataclass(frozen=True)
class ContainerEnd:
    kind: str


@dataclass(frozen=True)
class Opaque:
    """Any Pandoc node the pipeline does not look into."""

    node: Any


Token = Union[
    ParagraphStart,
    ParagraphEnd,
    TextRun,
    RawMarkup,
    ContainerStart,
    ContainerEnd,
    Opaque,
]

Stream = List[Token]
