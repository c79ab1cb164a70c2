class PostatsError(Exception):
    """Base class for every error raised by postats."""


class UnsupportedInputError(PostatsError):
    """The item is not a complete in-memory buffer (e.g. a stream)."""

    def __init__(self, filename: str, message: str = "Streaming not supported"):
        self.filename = filename
        super().__init__(message)


class MalformedCatalogError(PostatsError):
    """The text cannot be tokenized as a PO catalog at all."""

    def __init__(self, message: str, filename: str | None = None):
        self.filename = filename
        super().__init__(message)


class EntryError(PostatsError):
    """A single message block could not be turned into an entry.

    These are recovered by the parser: the block is dropped and parsing
    carries on with the next one.
    """

    def __init__(self, message: str, line: int = 0):
        self.line = line
        super().__init__(f"line {line}: {message}" if line else message)


class MissingIdentifierError(EntryError):
    pass


class MalformedEntryError(EntryError):
    pass
