# mdbook_tailwind/book.py
"""
mdBook preprocessor protocol.

mdBook runs the preprocessor twice:

1. ``mdbook-tailwindcss supports <renderer>``: exit status 0 means the
   renderer is supported.
2. ``mdbook-tailwindcss`` with ``[context, book]`` JSON on stdin: the
   processed book must be written back to stdout as JSON.

A book holds a list of items; each item is ``{"Chapter": {...}}``,
``"Separator"`` or ``{"PartTitle": "..."}``. Chapters nest through
``sub_items``. Only chapter ``content`` is rewritten; everything else is
handed back untouched.
"""

import copy
import json
import logging
from typing import Any, Dict, Iterator, List, Tuple

from .errors import PreprocessorError, ProtocolError
from .markdown.config import get_preprocessor_config
from .markdown.preprocessors import apply_preprocessors

logger = logging.getLogger(__name__)

PREPROCESSOR_NAME = "tailwindcss"

# mdBook release this preprocessor is built and tested against
MDBOOK_VERSION = "0.4.40"

SUPPORTED_RENDERERS = ("html",)

# mdBook 0.4 calls the item list "sections", later releases "items"
_ITEM_KEYS = ("sections", "items")


def supports_renderer(renderer: str) -> bool:
    return renderer in SUPPORTED_RENDERERS


def parse_input(stream) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Read the ``[context, book]`` pair mdBook writes to stdin.

    Raises:
        ProtocolError: if the input is not valid JSON or has the wrong shape
    """
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as e:
        raise ProtocolError(f"Unable to parse the input from mdbook: {e}") from e

    if not isinstance(payload, list) or len(payload) != 2:
        raise ProtocolError("Expected a [context, book] pair from mdbook")

    context, book = payload
    if not isinstance(context, dict) or not isinstance(book, dict):
        raise ProtocolError("Expected a [context, book] pair from mdbook")
    return context, book


def check_version(context: Dict[str, Any]) -> bool:
    """Warn when mdBook's version differs from the one we were built against."""
    version = context.get("mdbook_version")
    if version == MDBOOK_VERSION:
        return True

    logger.warning(
        f"The {PREPROCESSOR_NAME} preprocessor was built against version "
        f"{MDBOOK_VERSION} of mdbook, but we're being called from version {version}"
    )
    return False


def book_items(book: Dict[str, Any]) -> List[Any]:
    for key in _ITEM_KEYS:
        if key in book:
            return book[key]
    return []


def iter_chapters(items: List[Any]) -> Iterator[Dict[str, Any]]:
    """Yield every chapter, depth first, in book order."""
    for item in items:
        if not isinstance(item, dict) or "Chapter" not in item:
            continue
        chapter = item["Chapter"]
        yield chapter
        yield from iter_chapters(chapter.get("sub_items") or [])


def preprocess_chapter(chapter: Dict[str, Any], context: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``chapter`` with its content processed.

    Raises:
        PreprocessorError: if the content cannot be processed
    """
    processed = dict(chapter)
    content = chapter.get("content")
    if not content:
        # Draft chapters have no content
        return processed

    processed["content"] = apply_preprocessors(content, context)
    return processed


def run(context: Dict[str, Any], book: Dict[str, Any], resolver=None) -> Dict[str, Any]:
    """
    Process every chapter of ``book``.

    ``resolver`` replaces the built-in Tailwind resolver when given.

    A chapter that fails is logged and left as it was; the remaining
    chapters are still processed.

    Returns:
        A new book; the input is not modified
    """
    config = get_preprocessor_config(context)
    book = copy.deepcopy(book)

    processed = failed = 0
    for chapter in iter_chapters(book_items(book)):
        chapter_context = {
            "chapter": chapter.get("name", "<unnamed>"),
            "skip_empty_wrapper": config["skip_empty_wrapper"],
            "resolver": resolver,
        }
        try:
            chapter.update(preprocess_chapter(chapter, chapter_context))
        except PreprocessorError as e:
            failed += 1
            logger.error(f"{PREPROCESSOR_NAME} error in chapter {chapter_context['chapter']!r}: {e}")
            continue
        processed += 1

    logger.debug(f"Processed {processed} chapter(s), {failed} failed")
    return book


def handle_preprocessing(stdin, stdout) -> None:
    """
    Housekeeping around ``run``: read mdBook's input, check the version,
    process the book and write it back.
    """
    context, book = parse_input(stdin)
    check_version(context)

    processed_book = run(context, book)
    json.dump(processed_book, stdout)
