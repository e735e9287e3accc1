# mdbook_tailwind/markdown/postprocessors/wrapper_cleanup.py
"""
Postprocessor that tidies annotation wrappers in rendered HTML.

Wrappers always carry both attributes, so an annotation made only of CSS
classes renders as:
    <div class="note" style="">

This postprocessor drops the empty attributes:
    <div class="note">

Only <div> elements are touched; attributes with content are kept.
"""

from typing import List, Optional

from bs4 import BeautifulSoup

DEFAULT_ATTRIBUTES = ["class", "style"]


def wrapper_cleanup(
    html: str,
    context: dict,
    attributes: Optional[List[str]] = None,
) -> str:
    """
    Remove empty attributes from <div> elements.

    Args:
        html: HTML string to process
        context: Context dictionary (unused but required for postprocessor signature)
        attributes: Attributes to drop when empty (default: class and style)

    Returns:
        Processed HTML
    """
    attributes = attributes or DEFAULT_ATTRIBUTES

    soup = BeautifulSoup(html, "html.parser")

    for div in soup.find_all("div"):
        for name in attributes:
            if name not in div.attrs:
                continue
            value = div[name]
            # bs4 parses class into a list
            if isinstance(value, list):
                value = " ".join(value)
            if not value.strip():
                del div[name]

    return str(soup)


def wrapper_cleanup_default(html: str, context: dict) -> str:
    """
    Default configuration for wrapper_cleanup.

    This is the function that should be registered in POSTPROCESSORS.
    """
    return wrapper_cleanup(html, context)
