# mdbook_tailwind/markdown/preprocessors/utility_classes.py
"""
Preprocessor that turns utility-class annotations into styled wrappers.

Converts:
    {:.text-red-500 note}
    Careful now.

into:
    <div class="note" style="color:#ef4444;">

    Careful now.

    </div>

Known Tailwind utilities become inline styles; any other keyword is kept as
a CSS class. The annotation text itself is removed from the output.
"""

import logging
from dataclasses import replace
from typing import Optional

from ..rewriter import rewrite
from ..scanner import scan
from ..styles import resolve_matches
from ..tokenizer import parse_markdown, render_markdown_stream
from ..utilities import UtilityResolver, get_default_resolver

logger = logging.getLogger(__name__)


def utility_class_annotations(
    text: str,
    context: dict,
    resolver: Optional[UtilityResolver] = None,
    skip_empty_wrapper: bool = False,
) -> str:
    """
    Wrap annotated paragraphs of a markdown document.

    Args:
        text: Markdown text to process
        context: Context dictionary (``chapter`` name is used in log messages)
        resolver: Utility resolver (default: the built-in Tailwind resolver)
        skip_empty_wrapper: Omit wrappers for annotations that resolve to
            nothing, e.g. ``{:.}``

    Returns:
        Processed markdown. Text without annotations is returned as is,
        without a Pandoc round trip.

    Raises:
        RoundTripError: if Pandoc cannot parse or re-render the text
    """
    resolver = resolver or get_default_resolver()
    chapter = context.get("chapter", "<text>")

    document = parse_markdown(text)
    matches = scan(document.tokens)
    if not matches:
        return text

    for match in matches:
        if not match.is_closed:
            logger.warning(
                f"{chapter}: annotation {{:.{match.payload}}} is never closed by a paragraph end, "
                "wrapping the rest of the chapter"
            )

    matches = resolve_matches(matches, resolver)
    logger.debug(f"{chapter}: wrapping {len(matches)} annotated paragraph(s)")

    tokens = rewrite(document.tokens, matches, skip_empty_wrapper=skip_empty_wrapper)
    return render_markdown_stream(replace(document, tokens=tokens))


def utility_class_annotations_default(text: str, context: dict) -> str:
    """
    Default configuration for utility_class_annotations.

    This is the function that should be registered in PREPROCESSORS.
    """
    return utility_class_annotations(
        text,
        context,
        resolver=context.get("resolver"),
        skip_empty_wrapper=context.get("skip_empty_wrapper", False),
    )
