import os
import sys

import numpy as np
import pytest

_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from dna_suffix_tree.errors import InvalidSymbolError, SuffixTreeError
from dna_suffix_tree.python_backend.alphabet import (
    ALPHABET_SIZE, CHILD_SLOTS, SYMBOLS, TERMINATOR,
    decode, decode_sequence, encode, encode_sequence,
)


class TestSymbolCodec:
    def test_bases_map_to_indexes_in_order(self):
        assert [encode(s) for s in "ACGT"] == [0, 1, 2, 3]
        assert [decode(i) for i in range(4)] == list("ACGT")

    def test_terminator_is_outside_the_alphabet(self):
        assert ALPHABET_SIZE == 4
        assert TERMINATOR == 4
        assert CHILD_SLOTS == 5
        assert SYMBOLS == "ACGT"

    @pytest.mark.parametrize("symbol", ["a", "c", "N", "U", "$", "", "AC", " "])
    def test_encode_rejects_anything_else(self, symbol):
        with pytest.raises(InvalidSymbolError):
            encode(symbol)

    def test_encode_rejects_non_strings(self):
        with pytest.raises(InvalidSymbolError):
            encode(0)

    def test_decode_rejects_terminator_and_out_of_range(self):
        for index in (TERMINATOR, -1, 17):
            with pytest.raises(ValueError):
                decode(index)

    def test_invalid_symbol_is_a_value_error(self):
        with pytest.raises(ValueError):
            encode("X")
        assert issubclass(InvalidSymbolError, SuffixTreeError)


class TestSequenceEncoding:
    def test_encode_sequence(self):
        codes = encode_sequence("GATTACA")
        assert codes.dtype == np.uint8
        np.testing.assert_array_equal(codes, [2, 0, 3, 3, 0, 1, 0])

    def test_encode_bytes(self):
        np.testing.assert_array_equal(encode_sequence(b"ACGT"), [0, 1, 2, 3])

    def test_empty(self):
        assert encode_sequence("").size == 0
        assert decode_sequence(encode_sequence("")) == ""

    def test_first_invalid_symbol_is_reported_with_its_index(self):
        with pytest.raises(InvalidSymbolError) as excinfo:
            encode_sequence("ACGXNN")
        assert excinfo.value.symbol == "X"
        assert excinfo.value.index == 3
        assert "index 3" in str(excinfo.value)

    def test_lowercase_is_rejected_not_normalized(self):
        with pytest.raises(InvalidSymbolError) as excinfo:
            encode_sequence("ACgt")
        assert excinfo.value.index == 2

    def test_non_ascii_is_reported_at_its_index(self):
        with pytest.raises(InvalidSymbolError) as excinfo:
            encode_sequence("ACéGT")
        assert excinfo.value.symbol == "é"
        assert excinfo.value.index == 2

    @pytest.mark.parametrize("text, symbol, index", [
        ("AXé", "X", 1),
        ("AéX", "é", 1),
        ("ACGT?é", "?", 4),
        ("ACGé中", "é", 3),
    ])
    def test_earliest_invalid_symbol_wins_over_non_ascii(self, text, symbol, index):
        with pytest.raises(InvalidSymbolError) as excinfo:
            encode_sequence(text)
        assert excinfo.value.symbol == symbol
        assert excinfo.value.index == index

    def test_bytearray_input(self):
        np.testing.assert_array_equal(encode_sequence(bytearray(b"TGCA")), [3, 2, 1, 0])

    def test_non_string_input(self):
        with pytest.raises(TypeError):
            encode_sequence(["A", "C"])

    def test_decode_sequence(self):
        assert decode_sequence(encode_sequence("TTGCAAG")) == "TTGCAAG"

    def test_decode_sequence_rejects_terminator(self):
        with pytest.raises(ValueError):
            decode_sequence([0, 1, TERMINATOR])
