'''Brute-force reference search.

`naive_find` compares the pattern against every window of the sequence, which
is O(n * m). It exists as an independent oracle: the test suite and the
benchmark check the suffix tree against it, so it deliberately shares nothing
with the tree beyond the alphabet codec.
'''
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .alphabet import encode_sequence


def naive_find(text: str, pattern: str) -> set[int]:
    """Finds all occurrences of `pattern` in `text` by checking every offset.

    Args:
        text: DNA sequence.
        pattern: DNA pattern.

    Returns:
        The set of 0-based start offsets. An empty pattern matches at every
        offset of `text`; a pattern longer than `text` never matches.

    Raises:
        InvalidSymbolError: If either string holds a non-DNA character.
    """
    text_codes = encode_sequence(text)
    pattern_codes = encode_sequence(pattern)
    n, m = text_codes.size, pattern_codes.size
    if m == 0:
        return set(range(n))
    if m > n:
        return set()
    windows = sliding_window_view(text_codes, m)
    hits = np.flatnonzero((windows == pattern_codes).all(axis=1))
    return {int(i) for i in hits}
