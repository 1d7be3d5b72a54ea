'''Suffix tree index over a DNA sequence.

This module provides `SuffixTree`, the public entry point of the package, and
the `build` shortcut. A tree is constructed once, in the constructor, with
Ukkonen's algorithm and is read-only afterwards: all queries only read the
node arena and the shared sequence buffer, so a finished tree can be queried
from several threads at once without locking.

Typical usage:

    tree = build("ACGTACGT")
    tree.find("ACGT")        # {0, 4}
    tree.positions("ACGT")   # array([0, 4])

Construction can be bounded with `max_length` (sequence length) and
`max_nodes` (arena size), both of which raise `ResourceExhausted`, and can be
cancelled from a `checkpoint` callable invoked after every phase.
'''
import logging
from typing import Callable, Iterable, Iterator, Optional

import numpy as np

from .errors import ResourceExhausted
from .python_backend.alphabet import SYMBOLS, TERMINATOR, TERMINATOR_CHAR, encode_sequence
from .python_backend.arena import ROOT
from .python_backend.matcher import PatternMatcher
from .python_backend.sequence import Sequence
from .python_backend.ukkonen import UkkonenBuilder

logger = logging.getLogger(__name__)


class SuffixTree:
    """A suffix tree for exact substring search over a DNA sequence.

    Attributes:
        sequence (Sequence): The encoded, terminated input.
        max_nodes (int | None): Node cap used during construction.
    """

    def __init__(self, sequence: str | bytes, max_nodes: Optional[int] = None,
                 max_length: Optional[int] = None,
                 checkpoint: Optional[Callable[[int], None]] = None):
        """Encodes `sequence` and builds its suffix tree.

        Args:
            sequence: DNA string over 'A', 'C', 'G', 'T' (case-sensitive).
            max_nodes: Optional cap on tree nodes. A sequence of length n needs
                       at most 2n + 2 nodes.
            max_length: Optional cap on the sequence length, checked before
                        any tree node is created.
            checkpoint: Optional callable receiving each finished position. Raising
                        from it aborts construction with that exception.

        Raises:
            TypeError: If `sequence` is not a string.
            InvalidSymbolError: At the first non-DNA character.
            ResourceExhausted: If `max_length` or `max_nodes` is exceeded.
        """
        self.sequence = Sequence(sequence)
        if max_length is not None and len(self.sequence) > max_length:
            logger.debug("Rejecting sequence of length %d (max_length=%d)", len(self.sequence), max_length)
            raise ResourceExhausted(
                f"Sequence length {len(self.sequence)} exceeds max_length={max_length}.", max_length)

        self.max_nodes = max_nodes
        builder = UkkonenBuilder(self.sequence, max_nodes=max_nodes, checkpoint=checkpoint)
        arena, leaf_end = builder.build()
        self._arena = arena
        self._matcher = PatternMatcher(self.sequence, arena, leaf_end)

    # --- Queries ---

    def find(self, pattern: str) -> set[int]:
        """Returns the set of 0-based offsets where `pattern` occurs.

        The set has no defined order; use `positions` for a sorted result. An
        empty pattern matches at every offset of the sequence.

        Raises:
            TypeError: If `pattern` is not a string.
            InvalidSymbolError: If `pattern` holds a non-DNA character.
        """
        return self._matcher.find(self._encode_pattern(pattern))

    def positions(self, pattern: str) -> np.ndarray:
        """Sorted occurrence offsets of `pattern` as an `np.int64` array."""
        return np.array(sorted(self.find(pattern)), dtype=np.int64)

    def count(self, pattern: str) -> int:
        return self._matcher.count(self._encode_pattern(pattern))

    def contains(self, pattern: str) -> bool:
        codes = self._encode_pattern(pattern)
        if len(codes) == 0:
            return len(self.sequence) > 0
        return self._matcher.locate(codes) is not None

    def count_many(self, patterns: Iterable[str]) -> np.ndarray:
        """Occurrence counts for a batch of patterns, in input order.

        Every pattern is validated before any is searched, so an invalid one
        fails the whole batch.
        """
        encoded = [self._encode_pattern(p) for p in patterns]
        return np.array([self._matcher.count(codes) for codes in encoded], dtype=np.int64)

    def __contains__(self, pattern: str) -> bool:
        return self.contains(pattern)

    @staticmethod
    def _encode_pattern(pattern: str) -> bytes:
        if not isinstance(pattern, str):
            raise TypeError("Pattern must be a string.")
        return encode_sequence(pattern).tobytes()

    # --- Statistics ---

    @property
    def text(self) -> str:
        return self.sequence.text

    @property
    def node_count(self) -> int:
        return len(self._arena)

    @property
    def leaf_count(self) -> int:
        return self._arena.leaf_count

    @property
    def internal_node_count(self) -> int:
        """Nodes that are neither leaves nor the root."""
        return len(self._arena) - self._arena.leaf_count - 1

    def __len__(self) -> int:
        return len(self.sequence)

    def __repr__(self) -> str:
        return f"SuffixTree(length={len(self)}, nodes={self.node_count}, leaves={self.leaf_count})"

    # --- Diagnostics ---

    def leaves(self) -> Iterator[tuple[int, int]]:
        """Yields `(node_id, suffix_index)` for every leaf, in id order."""
        arena = self._arena
        for node in range(len(arena)):
            if arena.is_leaf(node):
                yield node, arena.suffix_index(node)

    def edge_label(self, node: int) -> str:
        """The edge label leading into `node`, with the terminator shown as '$'."""
        arena = self._arena
        start = arena.start(node)
        end = start + arena.edge_length(node, self._matcher.leaf_end)
        return "".join(
            TERMINATOR_CHAR if code == TERMINATOR else SYMBOLS[code]
            for code in self.sequence.buffer[start:end]
        )

    def render(self) -> str:
        """Text drawing of the tree, one edge per line, children in symbol order.

        Leaves show the suffix offset they stand for; internal nodes show their
        suffix link target when it is not the root.
        """
        arena = self._arena
        lines = ["Suffix Tree (Root):"]
        # Explicit stack of (node, prefix, is_last) to avoid deep recursion.
        stack = [(child, "", i == 0) for i, child in enumerate(reversed(arena.children(ROOT)))]
        while stack:
            node, prefix, is_last = stack.pop()
            connector = "└── " if is_last else "├── "
            if arena.is_leaf(node):
                info = f" [suffix {arena.suffix_index(node)}]"
            elif arena.has_suffix_link(node) and arena.suffix_link(node) != ROOT:
                info = f" (SL->{arena.suffix_link(node)})"
            else:
                info = ""
            lines.append(f"{prefix}{connector}'{self.edge_label(node)}' (node {node}){info}")

            child_prefix = prefix + ("    " if is_last else "│   ")
            children = arena.children(node)
            for i, child in enumerate(reversed(children)):
                stack.append((child, child_prefix, i == 0))
        return "\n".join(lines)

    def display(self) -> None:
        """Prints `render()`; meant for small trees while debugging."""
        print(self.render())


def build(sequence: str | bytes, max_nodes: Optional[int] = None, max_length: Optional[int] = None,
          checkpoint: Optional[Callable[[int], None]] = None) -> SuffixTree:
    """Builds a `SuffixTree`; same arguments and errors as the constructor."""
    return SuffixTree(sequence, max_nodes=max_nodes, max_length=max_length, checkpoint=checkpoint)
