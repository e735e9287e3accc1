"""mdBook preprocessor that turns ``{:.class}`` annotations into styled blocks."""

__version__ = "0.1.0"
