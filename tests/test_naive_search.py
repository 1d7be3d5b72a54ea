import os
import sys

import pytest

_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from dna_suffix_tree import InvalidSymbolError, naive_find


def test_finds_overlapping_occurrences():
    assert naive_find("AAAA", "AA") == {0, 1, 2}
    assert naive_find("ACGTACGT", "ACGT") == {0, 4}


def test_absent_and_too_long():
    assert naive_find("ACGT", "TG") == set()
    assert naive_find("ACG", "ACGT") == set()


def test_empty_pattern_and_empty_text():
    assert naive_find("ACG", "") == {0, 1, 2}
    assert naive_find("", "") == set()
    assert naive_find("", "A") == set()


def test_validates_both_inputs():
    with pytest.raises(InvalidSymbolError):
        naive_find("ACGX", "A")
    with pytest.raises(InvalidSymbolError):
        naive_find("ACGT", "n")
