"""Custom exception hierarchy for pyconcat."""

from __future__ import annotations


class ConcatError(Exception):
    """Base exception for all pyconcat errors."""


class ConcatConfigError(ConcatError):
    """Invalid or missing configuration."""


class DuplicateEntryError(ConcatError):
    """``add_file`` was called twice for the same identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Trying to add {identifier} but it has already been added")


class UnknownEntryError(ConcatError):
    """A patch referenced an identifier the store does not hold.

    Raised by ``update_file`` and ``remove_file`` for identifiers that were
    never added, or that have already been removed.
    """

    def __init__(self, message: str, *, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(message)


class EmptyResultError(ConcatError):
    """Nothing was added and empty results are not allowed."""


class AssemblerDisposedError(ConcatError):
    """The assembler was disposed and can no longer be used."""


class ExternalMapResolutionWarning(UserWarning):
    """An embedded source map reference could not be resolved.

    This is never raised by the library.  It is handed to the assembler's
    warning sink, and the offending entry falls back to a line-for-line
    mapping of its own content.
    """

    def __init__(self, identifier: str, url: str, reason: str) -> None:
        self.identifier = identifier
        self.url = url
        self.reason = reason
        super().__init__(f"ignoring input source map for {identifier} because {reason}")
