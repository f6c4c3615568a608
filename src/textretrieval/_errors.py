"""Textretrieval error types."""


class TextRetrievalError(Exception):
    """Base error for all textretrieval failures."""


class InputError(TextRetrievalError):
    """Source collection missing, unreadable, or empty."""


class BlockIOError(TextRetrievalError):
    """A block file could not be written or read."""


class IndexIOError(TextRetrievalError):
    """The global index could not be written or read."""


class QueryNotFound(TextRetrievalError):
    """Query document is not part of the index."""


class OutputIOError(TextRetrievalError):
    """A run file or its directory could not be created."""


class UsageError(TextRetrievalError):
    """Malformed command-line arguments or configuration."""
