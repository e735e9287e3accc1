"""Token builders and markers shared by the test modules."""

from __future__ import annotations

import pypandoc
import pytest

from mdbook_tailwind.errors import UtilityNotFound
from mdbook_tailwind.markdown.tokens import Opaque, ParagraphEnd, ParagraphStart, TextRun


def _pandoc_available() -> bool:
    try:
        pypandoc.get_pandoc_version()
    except OSError:
        return False
    return True


requires_pandoc = pytest.mark.skipif(not _pandoc_available(), reason="Pandoc not installed")

P = ParagraphStart()
PE = ParagraphEnd()
SOFT_BREAK = Opaque({"t": "SoftBreak"})


def T(content: str) -> TextRun:
    return TextRun(content)


def paragraph(*texts: str) -> list:
    """A paragraph whose lines are joined by soft breaks."""
    tokens: list = [P]
    for i, text in enumerate(texts):
        if i:
            tokens.append(SOFT_BREAK)
        tokens.append(T(text))
    tokens.append(PE)
    return tokens


class FakeResolver:
    """Resolves a fixed table of keywords and records every query."""

    def __init__(self, styles: dict[str, str]) -> None:
        self.styles = styles
        self.queries: list[str] = []

    def inline(self, keyword: str) -> tuple[str, str]:
        self.queries.append(keyword)
        if keyword not in self.styles:
            raise UtilityNotFound(keyword)
        return f".{keyword}", self.styles[keyword]
