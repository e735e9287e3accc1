# mdbook_tailwind/markdown/rewriter.py
"""
Splices wrapper tags around annotated paragraphs.

For every match the output holds, in order:

    <div class="..." style="...">
    ParagraphStart
    ...paragraph content without the annotation run...
    ParagraphEnd
    </div>

Tokens outside the matches are copied unchanged.
"""

from html import escape
from typing import List

from .scanner import AnnotationMatch
from .tokens import RawMarkup, Stream

WRAPPER_CLOSE = "</div>"


def wrapper_open(match: AnnotationMatch) -> RawMarkup:
    return RawMarkup(
        f'<div class="{escape(match.class_names)}" style="{escape(match.style_declarations)}">'
    )


def wrapper_close() -> RawMarkup:
    return RawMarkup(WRAPPER_CLOSE)


def rewrite(
    stream: Stream,
    matches: List[AnnotationMatch],
    skip_empty_wrapper: bool = False,
) -> Stream:
    """
    Build a new stream with every match wrapped.

    Args:
        stream: Original token stream
        matches: Resolved matches in ascending start order
        skip_empty_wrapper: Leave out the wrapper when a match has neither
            classes nor styles (the annotation run is still dropped)

    Returns:
        New token stream; ``stream`` is not modified
    """
    output: Stream = []
    last_end = 0

    for match in matches:
        start = match.paragraph_start_index
        # An unclosed match takes everything up to the end of the stream
        end = match.paragraph_end_index if match.is_closed else len(stream) - 1

        output.extend(stream[last_end:start])

        wrap = not (
            skip_empty_wrapper and not match.class_names and not match.style_declarations
        )
        if wrap:
            output.append(wrapper_open(match))
        output.append(stream[start])
        output.extend(stream[start + 2:end + 1])
        if wrap:
            output.append(wrapper_close())

        last_end = end + 1

    output.extend(stream[last_end:])
    return output
