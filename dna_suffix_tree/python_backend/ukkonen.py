'''Linear-time suffix tree construction using Ukkonen's algorithm.

This module provides `UkkonenBuilder`, which consumes a terminated `Sequence`
one position at a time and grows a `NodeArena` into the full suffix tree of
that sequence, together with the small `ActivePoint` cursor it threads between
phases.

Phase `p` conceptually inserts every suffix ending at position `p`. Three
things keep the total work linear:

- Open leaves. Leaf edges end at the tree-wide `leaf_end` counter, so bumping
  that counter at the start of a phase extends every existing leaf in O(1).
- Walk-down (skip/count). When the active length covers a whole edge, the
  cursor jumps to the child node without comparing the symbols on the edge.
- Show-stopper. As soon as the next symbol is already on the active edge, all
  remaining shorter suffixes are present too and the phase ends early.

The terminator appended by `Sequence` guarantees that after the last phase
every suffix ends in its own leaf, so the finished tree has exactly `n + 1`
leaves.

Edges use the half-open convention `[start, end)`; after phase `p` the leaf end
counter equals `p + 1`.
'''
import logging
from typing import Callable, Optional

from .arena import OPEN, ROOT, NodeArena
from .sequence import Sequence

logger = logging.getLogger(__name__)


class ActivePoint:
    """Where the next suffix insertion resumes.

    Attributes:
        node (int): Id of the active node.
        edge (int): Buffer offset of the first symbol of the active edge. Only
                    meaningful while `length > 0`.
        length (int): Number of symbols matched along the active edge.
    """
    __slots__ = ('node', 'edge', 'length')

    def __init__(self, node: int = ROOT, edge: int = 0, length: int = 0):
        self.node = node
        self.edge = edge
        self.length = length

    def __repr__(self) -> str:
        return f"ActivePoint(node={self.node}, edge={self.edge}, length={self.length})"


class UkkonenBuilder:
    """Builds the suffix tree of a `Sequence` into a `NodeArena`.

    A builder is single use: create it, call `build()`, keep the returned arena.
    The remaining-suffix counter and active point only matter while building.

    Attributes:
        sequence (Sequence): The terminated input.
        arena (NodeArena): The node store being filled.
        active (ActivePoint): The active point.
        remaining (int): Suffixes still to be inserted explicitly.
        leaf_end (int): End (exclusive) shared by every open leaf edge.
        checkpoint (callable | None): Called with the position after every phase.
    """

    def __init__(self, sequence: Sequence, max_nodes: Optional[int] = None,
                 checkpoint: Optional[Callable[[int], None]] = None):
        self.sequence = sequence
        self.arena = NodeArena(max_nodes=max_nodes)
        self.arena.create(0, 0)  # ROOT
        self.active = ActivePoint()
        self.remaining = 0
        self.leaf_end = 0
        self.checkpoint = checkpoint
        self._finished = False

    def build(self) -> tuple[NodeArena, int]:
        """Runs one phase per buffer position, terminator included.

        Returns:
            The finished arena and the final leaf end (`len(sequence) + 1`).

        Raises:
            ResourceExhausted: If the arena's node cap is hit.
            RuntimeError: If the builder was already used.
            Any exception raised by `checkpoint`, which aborts construction.
        """
        if self._finished:
            raise RuntimeError("UkkonenBuilder.build() can only be called once.")
        self._finished = True

        total = len(self.sequence.buffer)
        logger.debug("Building suffix tree for sequence of length %d", total - 1)
        for position in range(total):
            self.extend(position)
            if self.checkpoint is not None:
                self.checkpoint(position)

        logger.debug("Suffix tree built: %d nodes, %d leaves", len(self.arena), self.arena.leaf_count)
        return self.arena, self.leaf_end

    def extend(self, position: int) -> None:
        """Phase `position`: adds buffer symbol `position` to every pending suffix."""
        buf = self.sequence.buffer
        arena = self.arena
        active = self.active
        symbol = buf[position]

        self.leaf_end = position + 1
        self.remaining += 1
        pending: int | None = None  # Internal node created this phase still waiting for its suffix link

        while self.remaining > 0:
            if active.length == 0:
                active.edge = position

            edge_symbol = buf[active.edge]
            next_node = arena.child(active.node, edge_symbol)

            if next_node is None:
                # No edge starts with this symbol: hang a new leaf off the active node.
                leaf = arena.create(position, OPEN, suffix_index=position - self.remaining + 1)
                arena.set_child(active.node, edge_symbol, leaf)
                if pending is not None:
                    arena.set_suffix_link(pending, active.node)
                    pending = None
            else:
                edge_length = arena.edge_length(next_node, self.leaf_end)
                if active.length >= edge_length:
                    # Walk down: the active point lies beyond this edge.
                    active.edge += edge_length
                    active.length -= edge_length
                    active.node = next_node
                    continue

                edge_start = arena.start(next_node)
                if buf[edge_start + active.length] == symbol:
                    # Show-stopper: this suffix and all shorter ones are already implicit.
                    active.length += 1
                    if pending is not None:
                        arena.set_suffix_link(pending, active.node)
                    break

                # Mismatch inside the edge: split it.
                split = arena.create(edge_start, edge_start + active.length)
                arena.set_child(active.node, edge_symbol, split)

                leaf = arena.create(position, OPEN, suffix_index=position - self.remaining + 1)
                arena.set_child(split, symbol, leaf)

                arena.set_start(next_node, edge_start + active.length)
                arena.set_child(split, buf[edge_start + active.length], next_node)

                if pending is not None:
                    arena.set_suffix_link(pending, split)
                pending = split

            self.remaining -= 1
            if active.node == ROOT and active.length > 0:
                active.length -= 1
                active.edge = position - self.remaining + 1
            elif active.node != ROOT:
                active.node = arena.suffix_link(active.node)
