# mdbook_tailwind/markdown/tokenizer.py
"""
Markdown <-> token stream conversion backed by Pandoc.

Pandoc parses markdown into a JSON AST (a tree). The annotation pipeline
wants a flat event stream, so the tree is flattened on the way in and
rebuilt on the way out:

    Para                      -> ParagraphStart, <inlines>, ParagraphEnd
    Str / Space runs          -> TextRun("{:.a b}")
    RawBlock / RawInline      -> RawMarkup
    BlockQuote, Div, lists    -> ContainerStart, <blocks>, ContainerEnd
    anything else             -> Opaque(node)

Rebuilding turns a ``RawMarkup`` into a ``RawBlock`` when it sits between
blocks and into a ``RawInline`` when it sits inside a paragraph, which is
how the synthetic wrapper ``<div>`` tags end up as block-level HTML.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pypandoc

from ..errors import RoundTripError
from .config import get_pandoc_config
from .tokens import (
    ContainerEnd,
    ContainerStart,
    Opaque,
    ParagraphEnd,
    ParagraphStart,
    RawMarkup,
    Stream,
    TextRun,
)

logger = logging.getLogger(__name__)

LIST_ITEM = "ListItem"
_LIST_KINDS = {"BulletList", "OrderedList"}
_LEADING_BREAKS = {"Space", "SoftBreak", "LineBreak"}
_SPACE_RE = re.compile(r"( )")
_MATH_DELIMITER_RE = re.compile(r"(\\[()\[\]])")

# Raw HTML inlines are written verbatim by the commonmark writer
MATH_DELIMITER_FORMAT = "html"


@dataclass
class Document:
    """A parsed chapter: its token stream plus the AST envelope Pandoc needs back."""

    tokens: Stream
    api_version: List[int] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_ast(self) -> Dict[str, Any]:
        return {
            "pandoc-api-version": self.api_version,
            "meta": self.meta,
            "blocks": build_blocks(self.tokens),
        }


# ---------------------------------------------------------------------------
# Flattening
# ---------------------------------------------------------------------------


def flatten_blocks(blocks: List[Dict[str, Any]]) -> Stream:
    """Flatten a list of Pandoc blocks into a token stream."""
    tokens: Stream = []
    for block in blocks:
        _flatten_block(block, tokens)
    return tokens


def _flatten_block(block: Dict[str, Any], out: Stream) -> None:
    kind = block.get("t")
    content = block.get("c")

    if kind == "Para":
        out.append(ParagraphStart())
        _flatten_inlines(content, out)
        out.append(ParagraphEnd())
    elif kind == "RawBlock":
        fmt, text = content
        out.append(RawMarkup(text, fmt))
    elif kind == "BlockQuote":
        out.append(ContainerStart(kind))
        for child in content:
            _flatten_block(child, out)
        out.append(ContainerEnd(kind))
    elif kind == "Div":
        attr, children = content
        out.append(ContainerStart(kind, attr))
        for child in children:
            _flatten_block(child, out)
        out.append(ContainerEnd(kind))
    elif kind == "BulletList":
        _flatten_list(kind, None, content, out)
    elif kind == "OrderedList":
        list_attr, items = content
        _flatten_list(kind, list_attr, items, out)
    else:
        out.append(Opaque(block))


def _flatten_list(kind: str, attr: Any, items: List[List[Dict]], out: Stream) -> None:
    out.append(ContainerStart(kind, attr))
    for item in items:
        out.append(ContainerStart(LIST_ITEM))
        for child in item:
            _flatten_block(child, out)
        out.append(ContainerEnd(LIST_ITEM))
    out.append(ContainerEnd(kind))


def _flatten_inlines(inlines: List[Dict[str, Any]], out: Stream) -> None:
    # Str and Space nodes are merged so that "{:.a b}" is a single run,
    # as it would be in the source text.
    words: List[str] = []
    for inline in inlines:
        kind = inline.get("t")
        if kind == "Str":
            words.append(inline["c"])
            continue
        if kind == "Space":
            words.append(" ")
            continue

        if words:
            out.append(TextRun("".join(words)))
            words = []

        if kind == "RawInline":
            fmt, text = inline["c"]
            out.append(RawMarkup(text, fmt))
        else:
            out.append(Opaque(inline))

    if words:
        out.append(TextRun("".join(words)))


# ---------------------------------------------------------------------------
# Rebuilding
# ---------------------------------------------------------------------------


class _Frame:
    def __init__(self, kind: str, attr: Any = None):
        self.kind = kind
        self.attr = attr
        self.children: List[Any] = []

    @property
    def is_paragraph(self) -> bool:
        return self.kind == "Para"

    @property
    def is_list(self) -> bool:
        return self.kind in _LIST_KINDS

    def close(self) -> Any:
        if self.kind == "Para":
            return {"t": "Para", "c": _trim_leading_breaks(self.children)}
        if self.kind == "BlockQuote":
            return {"t": "BlockQuote", "c": self.children}
        if self.kind == "Div":
            return {"t": "Div", "c": [self.attr, self.children]}
        if self.kind == "BulletList":
            return {"t": "BulletList", "c": self.children}
        if self.kind == "OrderedList":
            return {"t": "OrderedList", "c": [self.attr, self.children]}
        # A list item is a bare list of blocks inside its list node
        return self.children


def _broken(index: int, reason: str) -> RoundTripError:
    return RoundTripError(f"token {index}: {reason}", stage="rebuild")


def build_blocks(tokens: Stream) -> List[Dict[str, Any]]:
    """
    Rebuild Pandoc blocks from a token stream.

    Raises:
        RoundTripError: if the stream is not well nested.
    """
    root = _Frame("Document")
    stack = [root]

    for index, token in enumerate(tokens):
        top = stack[-1]

        if top.is_list and not (
            isinstance(token, ContainerEnd)
            or (isinstance(token, ContainerStart) and token.kind == LIST_ITEM)
        ):
            raise _broken(index, f"{type(token).__name__} directly inside {top.kind}")

        if isinstance(token, ParagraphStart):
            if top.is_paragraph:
                raise _broken(index, "paragraph opened inside a paragraph")
            stack.append(_Frame("Para"))
        elif isinstance(token, ParagraphEnd):
            if not top.is_paragraph:
                raise _broken(index, "paragraph end without a paragraph")
            stack.pop()
            stack[-1].children.append(top.close())
        elif isinstance(token, TextRun):
            if not top.is_paragraph:
                raise _broken(index, "text outside a paragraph")
            top.children.extend(_split_text(token.content))
        elif isinstance(token, RawMarkup):
            kind = "RawInline" if top.is_paragraph else "RawBlock"
            top.children.append({"t": kind, "c": [token.format, token.content]})
        elif isinstance(token, ContainerStart):
            if top.is_paragraph:
                raise _broken(index, f"{token.kind} opened inside a paragraph")
            stack.append(_Frame(token.kind, token.attr))
        elif isinstance(token, ContainerEnd):
            if top is root or top.kind != token.kind:
                raise _broken(index, f"unexpected end of {token.kind}")
            stack.pop()
            stack[-1].children.append(top.close())
        elif isinstance(token, Opaque):
            top.children.append(token.node)
        else:
            raise _broken(index, f"unknown token {token!r}")

    if len(stack) > 1:
        raise _broken(len(tokens), f"{stack[-1].kind} never closed")
    return root.children


def _split_text(content: str) -> List[Dict[str, Any]]:
    nodes = []
    for piece in _SPACE_RE.split(content):
        if piece == " ":
            nodes.append({"t": "Space"})
        elif piece:
            nodes.extend(_split_math_delimiters(piece))
    return nodes


def _split_math_delimiters(piece: str) -> List[Dict[str, Any]]:
    # The commonmark writer drops the bracket from a Str holding a literal
    # "\(" or "\[", which breaks mdBook's MathJax delimiters. Such pieces go
    # back out as raw markup with the backslash escaped again.
    nodes = []
    for part in _MATH_DELIMITER_RE.split(piece):
        if not part:
            continue
        if _MATH_DELIMITER_RE.fullmatch(part):
            nodes.append({"t": "RawInline", "c": [MATH_DELIMITER_FORMAT, "\\" + part]})
        else:
            nodes.append({"t": "Str", "c": part})
    return nodes


def _trim_leading_breaks(inlines: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # Removing the annotation run can leave the paragraph opening with the
    # line break that followed it.
    start = 0
    while start < len(inlines) and inlines[start].get("t") in _LEADING_BREAKS:
        start += 1
    return inlines[start:]


# ---------------------------------------------------------------------------
# Pandoc boundary
# ---------------------------------------------------------------------------


def parse_markdown(text: str, reader: Optional[str] = None) -> Document:
    """
    Parse markdown text into a ``Document``.

    Args:
        text: Markdown source of one chapter
        reader: Pandoc input format (default: from ``get_pandoc_config``)

    Returns:
        Document holding the flattened token stream

    Raises:
        RoundTripError: if Pandoc fails or is not installed
    """
    config = get_pandoc_config()
    reader = reader or config["reader"]

    try:
        raw = pypandoc.convert_text(text, "json", format=reader)
    except (RuntimeError, OSError) as e:
        raise RoundTripError(f"Pandoc could not parse markdown: {e}", stage="parse") from e

    ast = json.loads(raw)
    document = Document(
        tokens=flatten_blocks(ast.get("blocks", [])),
        api_version=ast.get("pandoc-api-version", []),
        meta=ast.get("meta", {}),
    )
    logger.debug("Parsed %d blocks into %d tokens", len(ast.get("blocks", [])), len(document.tokens))
    return document


def render_markdown_stream(document: Document, writer: Optional[str] = None) -> str:
    """
    Serialize a ``Document`` back to markdown.

    Raises:
        RoundTripError: if the stream cannot be rebuilt or Pandoc fails
    """
    config = get_pandoc_config()
    writer = writer or config["writer"]

    ast = document.to_ast()
    try:
        return pypandoc.convert_text(
            json.dumps(ast),
            writer,
            format="json",
            extra_args=config["writer_args"],
        )
    except (RuntimeError, OSError) as e:
        raise RoundTripError(f"Pandoc could not render markdown: {e}", stage="serialize") from e
