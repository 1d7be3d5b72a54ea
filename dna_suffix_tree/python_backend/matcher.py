'''Exact pattern lookup over a finished suffix tree.

The matcher descends from the root comparing pattern symbols directly against
the shared sequence buffer (edge labels are never materialized). Once the
pattern is used up, whether on a node or part way along an edge, every leaf
below the current node marks one occurrence. Leaves are enumerated with an
explicit stack so that deep trees (long repeats) cannot hit the recursion
limit.

Patterns are expected already encoded (see `alphabet.encode_sequence`), so
validation happens before any traversal starts.
'''
from .arena import ROOT, NodeArena
from .sequence import Sequence


class PatternMatcher:
    """Read-only queries over a built suffix tree.

    Attributes:
        sequence (Sequence): The terminated sequence the tree indexes.
        arena (NodeArena): The finished nodes.
        leaf_end (int): Final end of every open leaf edge (`len(sequence) + 1`).
    """
    __slots__ = ('sequence', 'arena', 'leaf_end')

    def __init__(self, sequence: Sequence, arena: NodeArena, leaf_end: int):
        self.sequence = sequence
        self.arena = arena
        self.leaf_end = leaf_end

    def locate(self, pattern) -> int | None:
        """Finds the node whose subtree holds every occurrence of `pattern`.

        Args:
            pattern: A sequence of base indexes (0-3), non-empty.

        Returns:
            The id of the node at or just below the end of the match path, or
            None if `pattern` does not occur.
        """
        buf = self.sequence.buffer
        arena = self.arena
        m = len(pattern)
        if m > len(self.sequence):
            return None

        node = ROOT
        i = 0
        while i < m:
            child = arena.child(node, pattern[i])
            if child is None:
                return None
            start = arena.start(child)
            edge_length = arena.edge_length(child, self.leaf_end)
            j = 0
            while j < edge_length and i < m:
                # The terminator never equals a base index, so leaf edges stop here.
                if buf[start + j] != pattern[i]:
                    return None
                i += 1
                j += 1
            node = child
        return node

    def find(self, pattern) -> set[int]:
        """Returns every 0-based offset at which `pattern` occurs.

        An empty pattern occurs at every offset of the sequence.
        """
        if len(pattern) == 0:
            return set(range(len(self.sequence)))
        node = self.locate(pattern)
        if node is None:
            return set()
        return self.collect_leaves(node)

    def count(self, pattern) -> int:
        if len(pattern) == 0:
            return len(self.sequence)
        node = self.locate(pattern)
        if node is None:
            return 0
        return sum(1 for _ in self._iter_leaves(node))

    def collect_leaves(self, node: int) -> set[int]:
        """Suffix offsets of all leaves in the subtree rooted at `node`."""
        arena = self.arena
        return {arena.suffix_index(leaf) for leaf in self._iter_leaves(node)}

    def _iter_leaves(self, node: int):
        arena = self.arena
        stack = [node]
        while stack:
            current = stack.pop()
            if arena.is_leaf(current):
                yield current
            else:
                stack.extend(arena.children(current))
