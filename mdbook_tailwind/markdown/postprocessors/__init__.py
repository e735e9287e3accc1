# mdbook_tailwind/markdown/postprocessors/__init__.py

from .wrapper_cleanup import wrapper_cleanup_default

POSTPROCESSORS = [
    wrapper_cleanup_default,  # Drop empty class/style attributes left on wrappers
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
    return html
