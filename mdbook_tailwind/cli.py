# mdbook_tailwind/cli.py
"""Command-line entry point: ``mdbook-tailwindcss``."""

import argparse
import logging
import sys

from . import __version__
from .book import PREPROCESSOR_NAME, handle_preprocessing, supports_renderer
from .errors import PreprocessorError
from .markdown.renderer import render_markdown

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=f"mdbook-{PREPROCESSOR_NAME}",
        description="An mdbook preprocessor for tailwindcss classes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command")

    supports = subparsers.add_parser(
        "supports",
        help="Checks whether a renderer is supported by this preprocessor",
    )
    supports.add_argument("renderer")

    render = subparsers.add_parser(
        "render",
        help="Preview a markdown file as HTML with annotations applied",
    )
    render.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="Markdown file to render (default: stdin).",
    )

    return parser


def configure_logging(verbose: bool = False) -> None:
    # stdout carries the book JSON, so logs go to stderr
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "supports":
        return 0 if supports_renderer(args.renderer) else 1

    try:
        if args.command == "render":
            name = getattr(args.file, "name", "<stdin>")
            with args.file as source:
                text = source.read()
            sys.stdout.write(render_markdown(text, {"chapter": name}))
        else:
            handle_preprocessing(sys.stdin, sys.stdout)
    except PreprocessorError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
