'''DNA alphabet codec.

Maps the four DNA bases to compact indexes and back. This module is the single
source of truth for what counts as a valid symbol: everything else in the
package goes through `encode` / `encode_sequence` and never inspects raw
characters itself.

Encoding of whole sequences is vectorized with a 256-entry numpy lookup table,
so validating and encoding a multi-megabase string is a single array
operation. Unknown bytes map to an `_INVALID` marker and the first one found
is reported together with its position.

Lowercase bases and IUPAC ambiguity codes are rejected, not normalized.
'''
import numpy as np

from ..errors import InvalidSymbolError

SYMBOLS = "ACGT"
ALPHABET_SIZE = len(SYMBOLS)

# Appended once at the end of every sequence buffer. Never produced by encode,
# so no pattern can ever match across it.
TERMINATOR = ALPHABET_SIZE
TERMINATOR_CHAR = "$"

# One child slot per base plus one for the terminator.
CHILD_SLOTS = ALPHABET_SIZE + 1

DTYPE = np.uint8
_INVALID = np.iinfo(DTYPE).max

_LOOKUP = np.full(256, _INVALID, dtype=DTYPE)
_LOOKUP[np.frombuffer(SYMBOLS.encode('ascii'), dtype=DTYPE)] = np.arange(ALPHABET_SIZE, dtype=DTYPE)

_SYMBOL_TO_INDEX = {symbol: index for index, symbol in enumerate(SYMBOLS)}


def encode(symbol: str) -> int:
    """Encodes a single DNA base to its index in [0, 3].

    Args:
        symbol: One of 'A', 'C', 'G', 'T'.

    Returns:
        The symbol index.

    Raises:
        InvalidSymbolError: If `symbol` is anything else, including lowercase bases.
    """
    try:
        return _SYMBOL_TO_INDEX[symbol]
    except (KeyError, TypeError):
        raise InvalidSymbolError(str(symbol)) from None


def decode(index: int) -> str:
    """Decodes a symbol index back to its base. Diagnostics only."""
    if not 0 <= index < ALPHABET_SIZE:
        raise ValueError(f"Symbol index must be in [0, {ALPHABET_SIZE - 1}], got {index}.")
    return SYMBOLS[index]


def encode_sequence(text: str | bytes) -> np.ndarray:
    """Encodes a whole DNA string into an array of symbol indexes.

    Args:
        text: The sequence as `str` or ASCII `bytes`.

    Returns:
        A new `np.uint8` array of the same length as `text`.

    Raises:
        TypeError: If `text` is neither `str` nor `bytes`.
        InvalidSymbolError: At the first character outside {A, C, G, T}.
    """
    if isinstance(text, str):
        # Non-ASCII characters become '?' one for one, so offsets still line up.
        raw = text.encode('ascii', errors='replace')
    elif isinstance(text, (bytes, bytearray)):
        raw = bytes(text)
    else:
        raise TypeError(f"Sequence must be a str or bytes, got {type(text).__name__}.")

    codes = _LOOKUP[np.frombuffer(raw, dtype=DTYPE)]
    bad = np.flatnonzero(codes == _INVALID)
    if bad.size:
        first = int(bad[0])
        symbol = text[first] if isinstance(text, str) else chr(raw[first])
        raise InvalidSymbolError(symbol, first)
    return codes


def decode_sequence(codes) -> str:
    """Inverse of `encode_sequence` for arrays holding only base indexes."""
    codes = np.asarray(codes, dtype=DTYPE)
    if codes.size and int(codes.max()) >= ALPHABET_SIZE:
        raise ValueError("Only base indexes can be decoded; the terminator has no DNA symbol.")
    return np.frombuffer(SYMBOLS.encode('ascii'), dtype=DTYPE)[codes].tobytes().decode('ascii')
