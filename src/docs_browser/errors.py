"""Exceptions raised by the documentation browser core."""


class DocsBrowserError(Exception):
    """Base class for all documentation browser errors."""


class CorpusError(DocsBrowserError, ValueError):
    """Raised when a corpus violates its structural preconditions.

    A corpus must contain at least one section, every section at least one
    page, section identifiers must be unique and page identifiers must be
    unique within their section.
    """


class CorpusLoadError(CorpusError):
    """Raised when corpus source data cannot be turned into a corpus."""
