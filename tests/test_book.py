"""Tests for the mdBook preprocessor protocol."""

from __future__ import annotations

import copy
import io
import json
import logging

import pytest

import mdbook_tailwind.book as book_module
from mdbook_tailwind.book import (
    MDBOOK_VERSION,
    check_version,
    handle_preprocessing,
    iter_chapters,
    parse_input,
    preprocess_chapter,
    run,
    supports_renderer,
)
from mdbook_tailwind.errors import ProtocolError, RoundTripError
from tests.helpers import FakeResolver, requires_pandoc


def _chapter(name: str, content: str, sub_items: list | None = None) -> dict:
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": None,
            "sub_items": sub_items or [],
            "path": f"{name.lower()}.md",
            "source_path": f"{name.lower()}.md",
            "parent_names": [],
        }
    }


def _book(*items) -> dict:
    return {"sections": list(items), "__non_exhaustive": None}


def _context(**preprocessor_config) -> dict:
    return {
        "root": "/book",
        "config": {
            "book": {"title": "Test"},
            "preprocessor": {"tailwindcss": preprocessor_config},
        },
        "renderer": "html",
        "mdbook_version": MDBOOK_VERSION,
    }


@pytest.fixture
def upper_preprocessor(monkeypatch: pytest.MonkeyPatch) -> list:
    """Replace the markdown pipeline with an upper-casing stub; record contexts."""
    contexts: list = []

    def fake(text: str, context: dict) -> str:
        contexts.append(context)
        if "BROKEN" in text:
            raise RoundTripError("pandoc exploded", stage="serialize")
        return text.upper()

    monkeypatch.setattr(book_module, "apply_preprocessors", fake)
    return contexts


class TestSupportsRenderer:
    def test_html_supported(self) -> None:
        assert supports_renderer("html") is True

    @pytest.mark.parametrize("renderer", ["latex", "epub", "markdown", "HTML", ""])
    def test_others_rejected(self, renderer: str) -> None:
        assert supports_renderer(renderer) is False


class TestParseInput:
    def test_context_and_book(self) -> None:
        payload = [_context(), _book(_chapter("One", "text"))]
        context, book = parse_input(io.StringIO(json.dumps(payload)))

        assert context["renderer"] == "html"
        assert book["sections"][0]["Chapter"]["name"] == "One"

    def test_invalid_json(self) -> None:
        with pytest.raises(ProtocolError):
            parse_input(io.StringIO("{not json"))

    @pytest.mark.parametrize("payload", [{}, [], [{}], [{}, {}, {}], [[], {}]])
    def test_wrong_shape(self, payload) -> None:
        with pytest.raises(ProtocolError):
            parse_input(io.StringIO(json.dumps(payload)))


class TestCheckVersion:
    def test_matching_version(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            assert check_version({"mdbook_version": MDBOOK_VERSION}) is True
        assert caplog.text == ""

    def test_mismatch_warns(self, caplog) -> None:
        """A different mdBook version is a warning, not an error."""
        with caplog.at_level(logging.WARNING):
            assert check_version({"mdbook_version": "0.1.0"}) is False
        assert "0.1.0" in caplog.text
        assert MDBOOK_VERSION in caplog.text


class TestIterChapters:
    def test_nested_chapters_in_order(self) -> None:
        """Sub-chapters follow their parent; separators and part titles are skipped."""
        items = [
            {"PartTitle": "Part I"},
            _chapter("One", "1", [_chapter("One.A", "1a", [_chapter("One.A.i", "1ai")])]),
            "Separator",
            _chapter("Two", "2"),
        ]
        names = [chapter["name"] for chapter in iter_chapters(items)]
        assert names == ["One", "One.A", "One.A.i", "Two"]


class TestPreprocessChapter:
    def test_returns_copy(self, upper_preprocessor: list) -> None:
        chapter = _chapter("One", "hello")["Chapter"]
        processed = preprocess_chapter(chapter, {})

        assert processed["content"] == "HELLO"
        assert chapter["content"] == "hello"
        assert processed["name"] == "One"

    def test_draft_chapter_skipped(self, upper_preprocessor: list) -> None:
        """Draft chapters have no content and are not processed."""
        chapter = _chapter("Draft", "")["Chapter"]
        assert preprocess_chapter(chapter, {}) == chapter
        assert upper_preprocessor == []


class TestRun:
    def test_every_chapter_processed(self, upper_preprocessor: list) -> None:
        book = _book(_chapter("One", "one", [_chapter("Sub", "sub")]), _chapter("Two", "two"))
        result = run(_context(), book)

        chapters = list(iter_chapters(result["sections"]))
        assert [c["content"] for c in chapters] == ["ONE", "SUB", "TWO"]

    def test_input_book_untouched(self, upper_preprocessor: list) -> None:
        book = _book(_chapter("One", "one"))
        before = copy.deepcopy(book)
        run(_context(), book)
        assert book == before

    def test_failing_chapter_left_alone(self, upper_preprocessor: list, caplog) -> None:
        """One broken chapter is logged and the others are still processed."""
        book = _book(_chapter("One", "one"), _chapter("Bad", "BROKEN"), _chapter("Two", "two"))

        with caplog.at_level(logging.ERROR):
            result = run(_context(), book)

        contents = [c["content"] for c in iter_chapters(result["sections"])]
        assert contents == ["ONE", "BROKEN", "TWO"]
        assert "Bad" in caplog.text
        assert "pandoc exploded" in caplog.text

    def test_chapter_context(self, upper_preprocessor: list, resolver: FakeResolver) -> None:
        """Chapter name, book.toml options and the resolver reach the pipeline."""
        run(_context(**{"skip-empty-wrapper": True}), _book(_chapter("One", "x")), resolver=resolver)

        assert upper_preprocessor == [
            {"chapter": "One", "skip_empty_wrapper": True, "resolver": resolver}
        ]

    def test_newer_item_key(self, upper_preprocessor: list) -> None:
        """Books that call their item list ``items`` work too."""
        result = run(_context(), {"items": [_chapter("One", "one")]})
        assert result["items"][0]["Chapter"]["content"] == "ONE"

    def test_book_metadata_preserved(self, upper_preprocessor: list) -> None:
        book = _book({"PartTitle": "Part I"}, "Separator", _chapter("One", "one"))
        result = run(_context(), book)

        assert result["sections"][:2] == [{"PartTitle": "Part I"}, "Separator"]
        assert result["__non_exhaustive"] is None


class TestHandlePreprocessing:
    def test_round_trip_json(self, upper_preprocessor: list) -> None:
        payload = [_context(), _book(_chapter("One", "one"))]
        stdout = io.StringIO()

        handle_preprocessing(io.StringIO(json.dumps(payload)), stdout)

        result = json.loads(stdout.getvalue())
        assert result["sections"][0]["Chapter"]["content"] == "ONE"

    def test_bad_input_raises(self) -> None:
        with pytest.raises(ProtocolError):
            handle_preprocessing(io.StringIO("[]"), io.StringIO())

    @requires_pandoc
    def test_real_pipeline(self) -> None:
        """A chapter with an annotation comes back wrapped."""
        payload = [
            _context(),
            _book(_chapter("One", "{:.callout text-red-500}\nHello\n"), _chapter("Two", "Plain.\n")),
        ]
        stdout = io.StringIO()

        handle_preprocessing(io.StringIO(json.dumps(payload)), stdout)

        one, two = iter_chapters(json.loads(stdout.getvalue())["sections"])
        assert '<div class="callout" style="color:#ef4444;">' in one["content"]
        assert "Hello" in one["content"]
        assert two["content"] == "Plain.\n"
