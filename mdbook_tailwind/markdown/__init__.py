"""Markdown machinery: tokenizer, annotation pipeline and HTML preview."""
