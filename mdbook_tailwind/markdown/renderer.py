# mdbook_tailwind/markdown/renderer.py

import pypandoc

from ..errors import RoundTripError
from .config import get_pandoc_config
from .postprocessors import apply_postprocessors
from .preprocessors import apply_preprocessors


def render_markdown(text, context=None):
    """
    Render a chapter to HTML the way the book will show it, for previewing.

    Args:
        text: Raw markdown text
        context: Optional dict for processors that need additional data
    """
    context = context or {}

    # Pre-processing: annotations become wrapper divs
    text = apply_preprocessors(text, context)

    pandoc_config = get_pandoc_config()

    try:
        html = pypandoc.convert_text(
            text,
            to="html5",
            format=pandoc_config["reader"],
            extra_args=pandoc_config["preview_args"],
        )
    except (RuntimeError, OSError) as e:
        raise RoundTripError(f"Pandoc could not render HTML: {e}", stage="preview") from e

    # Post-processing: After markdown conversion
    html = apply_postprocessors(html, context)

    return html
