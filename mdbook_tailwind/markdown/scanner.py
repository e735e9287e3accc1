# mdbook_tailwind/markdown/scanner.py
"""
Finds paragraphs that open with a utility-class annotation.

Syntax:
    {:.text-red-500 custom-class}
    This paragraph gets wrapped in a styled <div>.

The annotation must be the whole first text run of the paragraph: it starts
with ``{:.`` and ends with ``}``, with nothing before or after and no
whitespace tolerance at the delimiters.

Each match closes at the next paragraph end seen after it. On a
well-formed stream that is its own paragraph end; if the stream runs out
first the match is left open and consumes the rest of the stream.
"""

from dataclasses import dataclass
from typing import List, Optional

from .tokens import ParagraphEnd, ParagraphStart, Stream, TextRun

ANNOTATION_OPEN = "{:."
ANNOTATION_CLOSE = "}"
_MIN_LENGTH = len(ANNOTATION_OPEN) + len(ANNOTATION_CLOSE)


@dataclass(frozen=True)
class AnnotationMatch:
    """
    One annotated paragraph.

    ``paragraph_end_index`` is None when the stream ended before the
    paragraph closed. ``class_names`` and ``style_declarations`` are filled
    in by ``styles.resolve_matches``.
    """

    paragraph_start_index: int
    payload: str
    paragraph_end_index: Optional[int] = None
    class_names: str = ""
    style_declarations: str = ""

    @property
    def is_closed(self) -> bool:
        return self.paragraph_end_index is not None


def extract_payload(text: str) -> Optional[str]:
    """Return the text between ``{:.`` and ``}``, or None if ``text`` is not an annotation."""
    if len(text) < _MIN_LENGTH:
        return None
    if not (text.startswith(ANNOTATION_OPEN) and text.endswith(ANNOTATION_CLOSE)):
        return None
    return text[len(ANNOTATION_OPEN):-len(ANNOTATION_CLOSE)]


def scan(stream: Stream) -> List[AnnotationMatch]:
    """
    Scan a token stream for annotated paragraphs.

    Args:
        stream: Token stream of one chapter

    Returns:
        Matches in stream order, at most one per paragraph
    """
    # [paragraph start, payload, paragraph end]
    found: List[list] = []

    for index, token in enumerate(stream):
        if isinstance(token, TextRun):
            if index == 0 or not isinstance(stream[index - 1], ParagraphStart):
                continue
            payload = extract_payload(token.content)
            if payload is None:
                continue
            found.append([index - 1, payload, None])
        elif isinstance(token, ParagraphEnd):
            if found and found[-1][2] is None:
                found[-1][2] = index

    return [
        AnnotationMatch(paragraph_start_index=start, payload=payload, paragraph_end_index=end)
        for start, payload, end in found
    ]
