'''Exceptions raised by the suffix tree package.

Both error kinds are deterministic: the same input always fails at the same
place, so nothing here is worth retrying.
'''


class SuffixTreeError(Exception):
    """Base class for every error raised by this package."""


class InvalidSymbolError(SuffixTreeError, ValueError):
    """Raised when a character outside {A, C, G, T} is met in a sequence or pattern.

    Attributes:
        symbol (str): The offending character.
        index (int | None): Its 0-based position in the input, when known.
    """

    def __init__(self, symbol: str, index: int | None = None):
        self.symbol = symbol
        self.index = index
        where = f" at index {index}" if index is not None else ""
        super().__init__(f"Invalid DNA base {symbol!r}{where}. Only 'A', 'C', 'G' and 'T' are accepted.")


class ResourceExhausted(SuffixTreeError, MemoryError):
    """Raised when a configured node or sequence length cap would be exceeded.

    Attributes:
        limit (int): The cap that was hit.
    """

    def __init__(self, message: str, limit: int):
        self.limit = limit
        super().__init__(message)


InvalidSymbol = InvalidSymbolError
