# mdbook_tailwind/markdown/styles.py
"""
Splits an annotation payload into pass-through classes and inline styles.

Every keyword is offered to the utility resolver. Keywords it knows become
CSS declarations; everything else is assumed to be a hand-written CSS class
and is passed through as a class name.
"""

import logging
from dataclasses import replace
from typing import List, Tuple

from ..errors import UtilityNotFound
from .scanner import AnnotationMatch
from .utilities import UtilityResolver

logger = logging.getLogger(__name__)


def split_keywords(payload: str) -> List[str]:
    """Dots separate keywords just like whitespace does: ``a.b c`` -> a, b, c."""
    return payload.replace(".", " ").split()


def resolve(payload: str, resolver: UtilityResolver) -> Tuple[str, str]:
    """
    Resolve an annotation payload.

    Args:
        payload: Text between ``{:.`` and ``}``
        resolver: Utility resolver queried once per keyword, in order

    Returns:
        (class_names, style_declarations): classes joined by spaces,
        declarations concatenated as returned by the resolver
    """
    class_names: List[str] = []
    declarations: List[str] = []

    for keyword in split_keywords(payload):
        try:
            _selector, declaration = resolver.inline(keyword)
        except UtilityNotFound:
            class_names.append(keyword)
            continue
        except Exception as e:
            logger.warning(f"Utility resolver failed on {keyword!r}, keeping it as a class: {e}")
            class_names.append(keyword)
            continue
        declarations.append(declaration)

    return " ".join(class_names), "".join(declarations)


def resolve_matches(
    matches: List[AnnotationMatch], resolver: UtilityResolver
) -> List[AnnotationMatch]:
    """Return copies of ``matches`` with their class names and styles filled in."""
    resolved = []
    for match in matches:
        class_names, style_declarations = resolve(match.payload, resolver)
        resolved.append(
            replace(match, class_names=class_names, style_declarations=style_declarations)
        )
    return resolved
