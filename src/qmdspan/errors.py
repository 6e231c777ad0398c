"""Exception classes for qmdspan.

Scanning never raises on malformed markup: unclosed fences and unmatched
container markers are reported as data. Exceptions are reserved for bad
configuration and for the dispatch boundary.
"""

from __future__ import annotations

from collections.abc import Iterable


class QmdspanError(Exception):
    """Base exception for all qmdspan errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(QmdspanError):
    """Invalid scan configuration.

    Raised when a ScanConfig is created with glyphs or limits the
    scanners cannot work with.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending ScanConfig field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"Invalid config field '{field}': {message}")


class UnknownLanguageError(QmdspanError):
    """No session command is configured for a language.

    Raised by the dispatcher before any text is sent, so a failed
    lookup never leaves a session half-fed.
    """

    def __init__(self, language: str, known: Iterable[str] = ()) -> None:
        """Initialize unknown language error.

        Args:
            language: The language key that failed to resolve
            known: Languages that do have commands (for the message)
        """
        self.language = language
        self.known = tuple(sorted(known))

        hint = f" (known: {', '.join(self.known)})" if self.known else ""
        super().__init__(f"No session command for language '{language}'{hint}")


class DispatchError(QmdspanError):
    """A session failed while receiving code."""

    def __init__(self, language: str, message: str) -> None:
        self.language = language
        super().__init__(f"Session '{language}': {message}")
