'''Node storage for the suffix tree.

Nodes are not objects. The arena keeps one Python list per node field and a
node is simply an index into those lists, so suffix links (which point back up
and across the tree) are plain integers and there is no reference cycle to
manage. Ids are handed out sequentially, stay valid for the life of the tree
and are never freed.

Each node carries:

- one child id per symbol (`NO_CHILD` when absent), see `CHILD_SLOTS`;
- the half-open edge range `[start, end)` into the sequence buffer of the edge
  leading *into* the node. Leaves have `end == OPEN` and read their end from the
  tree-wide leaf-end counter instead, which lets the builder lengthen every
  leaf at once by bumping a single integer;
- a suffix link (`NO_LINK` until set, followed as the root);
- for leaves, the start offset of the suffix spelled by the root-to-leaf path.
'''
import logging

from ..errors import ResourceExhausted
from .alphabet import CHILD_SLOTS

logger = logging.getLogger(__name__)

ROOT = 0
OPEN = -1
NO_CHILD = -1
NO_LINK = -1


class NodeArena:
    """Growable store of suffix tree nodes addressed by integer id.

    Attributes:
        max_nodes (int | None): Optional cap on the number of nodes. `create`
                                raises `ResourceExhausted` instead of growing past it.
    """
    __slots__ = ('_children', '_start', '_end', '_link', '_suffix_index', '_leaf_count', 'max_nodes')

    def __init__(self, max_nodes: int | None = None):
        if max_nodes is not None and max_nodes < 1:
            raise ValueError(f"max_nodes must be at least 1 (room for the root), got {max_nodes}.")
        self.max_nodes = max_nodes
        self._children: list[list[int]] = []
        self._start: list[int] = []
        self._end: list[int] = []
        self._link: list[int] = []
        self._suffix_index: list[int] = []
        self._leaf_count = 0

    def create(self, start: int, end: int = OPEN, suffix_index: int = -1) -> int:
        """Allocates a node and returns its id.

        Args:
            start: First buffer position of the incoming edge label.
            end: One past the last position, or `OPEN` for a leaf.
            suffix_index: For leaves, the sequence offset of the suffix the leaf ends.

        Raises:
            ResourceExhausted: If `max_nodes` nodes already exist.
        """
        node_id = len(self._start)
        if self.max_nodes is not None and node_id >= self.max_nodes:
            logger.debug("Node cap of %d reached while creating node for edge start %d", self.max_nodes, start)
            raise ResourceExhausted(
                f"Suffix tree needs more than max_nodes={self.max_nodes} nodes.", self.max_nodes)
        self._children.append([NO_CHILD] * CHILD_SLOTS)
        self._start.append(start)
        self._end.append(end)
        self._link.append(NO_LINK)
        self._suffix_index.append(suffix_index)
        if end == OPEN:
            self._leaf_count += 1
        return node_id

    def child(self, node: int, symbol: int) -> int | None:
        child_id = self._children[node][symbol]
        return None if child_id == NO_CHILD else child_id

    def set_child(self, node: int, symbol: int, child_id: int) -> None:
        self._children[node][symbol] = child_id

    def children(self, node: int) -> list[int]:
        """Ids of the node's children, in symbol order."""
        return [c for c in self._children[node] if c != NO_CHILD]

    def start(self, node: int) -> int:
        return self._start[node]

    def set_start(self, node: int, start: int) -> None:
        # Only used when a split hands the upper part of an edge to a new node.
        self._start[node] = start

    def end(self, node: int) -> int:
        return self._end[node]

    def edge_length(self, node: int, leaf_end: int) -> int:
        """Length of the edge into `node`, given the current global leaf end."""
        end = self._end[node]
        return (leaf_end if end == OPEN else end) - self._start[node]

    def is_leaf(self, node: int) -> bool:
        return self._end[node] == OPEN

    def suffix_index(self, node: int) -> int:
        return self._suffix_index[node]

    def suffix_link(self, node: int) -> int:
        """Suffix link target of `node`; unset links resolve to the root."""
        link = self._link[node]
        return ROOT if link == NO_LINK else link

    def set_suffix_link(self, node: int, target: int) -> None:
        self._link[node] = target

    def has_suffix_link(self, node: int) -> bool:
        return self._link[node] != NO_LINK

    @property
    def leaf_count(self) -> int:
        return self._leaf_count

    def __len__(self) -> int:
        return len(self._start)

    def __repr__(self) -> str:
        return f"NodeArena(nodes={len(self)}, leaves={self._leaf_count}, max_nodes={self.max_nodes})"
