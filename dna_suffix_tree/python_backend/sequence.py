'''Immutable encoded sequence buffer with an appended terminator.'''
import numpy as np

from .alphabet import DTYPE, TERMINATOR, decode_sequence, encode_sequence


class Sequence:
    """An encoded DNA sequence followed by one terminator symbol.

    The buffer is a `bytes` object holding symbol indexes (0-3 for bases, 4 for
    the terminator). Tree edges reference ranges of this buffer instead of
    copying substrings, and since `bytes` is immutable the buffer can be shared
    freely between the builder, the finished tree and concurrent readers.

    Attributes:
        buffer (bytes): The `n + 1` encoded symbols, terminator last.
    """
    __slots__ = ('buffer', '_length')

    def __init__(self, text: str | bytes):
        """Encodes `text` and appends the terminator.

        Raises:
            InvalidSymbolError: If `text` contains anything but A, C, G, T.
        """
        codes = encode_sequence(text)
        self._length = int(codes.size)
        self.buffer = codes.tobytes() + bytes((TERMINATOR,))

    def __len__(self) -> int:
        # Length of the DNA sequence itself, terminator excluded.
        return self._length

    def __getitem__(self, position: int) -> int:
        return self.buffer[position]

    @property
    def codes(self) -> np.ndarray:
        """Read-only numpy view over the whole buffer, terminator included."""
        return np.frombuffer(self.buffer, dtype=DTYPE)

    @property
    def text(self) -> str:
        return decode_sequence(self.codes[:self._length])

    def __repr__(self) -> str:
        preview = self.text if self._length <= 20 else self.text[:17] + "..."
        return f"Sequence('{preview}', length={self._length})"
