# mdbook_tailwind/errors.py
"""Exceptions raised by the preprocessor."""


class PreprocessorError(Exception):
    """Base class for errors surfaced by the preprocessor."""


class RoundTripError(PreprocessorError):
    """Pandoc could not parse or re-render a chapter.

    Fatal for the chapter being processed only; the book run logs it and
    moves on to the next chapter.
    """

    def __init__(self, message: str, stage: str) -> None:
        self.stage = stage
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.args[0]} (stage: {self.stage})"


class ProtocolError(PreprocessorError):
    """The JSON handed over by mdBook is not a ``[context, book]`` pair."""


class UtilityNotFound(LookupError):
    """A keyword is not a known utility class."""

    def __init__(self, keyword: str) -> None:
        self.keyword = keyword
        super().__init__(f"unknown utility class: {keyword!r}")
