# mdbook_tailwind/markdown/config.py

PREPROCESSOR_TABLE = "tailwindcss"

# Markdown flavour read and written by Pandoc. mdBook renders with
# pulldown-cmark, i.e. CommonMark plus these extensions.
MARKDOWN_FORMAT = "commonmark+pipe_tables+footnotes+strikeout+task_lists"

DEFAULT_PREPROCESSOR_CONFIG = {
    "skip_empty_wrapper": False,
}


def get_pandoc_config():
    """
    Configuration for the pypandoc round trip and the HTML preview.

    The reader and writer use the same markdown flavour so that chapters
    without annotations come back equivalent to what went in. Wrapping is
    preserved so soft line breaks stay where the author put them.
    """
    return {
        "reader": MARKDOWN_FORMAT,
        "writer": MARKDOWN_FORMAT,
        "writer_args": [
            "--wrap=preserve",
        ],
        "preview_args": [
            "--wrap=preserve",
            # Math rendering with MathJax, as mdBook does
            "--mathjax",
        ],
    }


def get_preprocessor_config(context=None):
    """
    Options for this preprocessor taken from ``book.toml``.

    mdBook passes the parsed ``book.toml`` in the context; our table lives
    under ``[preprocessor.tailwindcss]``. Keys may be spelled with hyphens
    or underscores. Unknown keys (``command``, ``before``, ...) belong to
    mdBook and are ignored.
    """
    config = dict(DEFAULT_PREPROCESSOR_CONFIG)
    context = context or {}

    table = (
        (context.get("config") or {})
        .get("preprocessor", {})
        .get(PREPROCESSOR_TABLE, {})
    )
    for key, value in table.items():
        normalized = key.replace("-", "_")
        if normalized in config:
            config[normalized] = value

    config["skip_empty_wrapper"] = bool(config["skip_empty_wrapper"])
    return config
