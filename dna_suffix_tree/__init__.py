'''Initialize dna_suffix_tree, exposing the suffix tree index and its errors.'''

from .suffix_tree import SuffixTree, build
from .errors import SuffixTreeError, InvalidSymbolError, InvalidSymbol, ResourceExhausted
from .python_backend.naive_search import naive_find

__all__ = [
    'SuffixTree', 'build',
    'SuffixTreeError', 'InvalidSymbolError', 'InvalidSymbol', 'ResourceExhausted',
    'naive_find'
]
