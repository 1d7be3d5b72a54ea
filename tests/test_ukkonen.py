'''Structural checks on trees produced by UkkonenBuilder.

Every tree is walked from the root to recover the full path label of each
node, then checked against the defining properties of a suffix tree: one leaf
per suffix, each leaf spelling its suffix, non-empty edges, and suffix links
from the node for "xA" to the node for "A".
'''
import itertools
import os
import random
import sys

import pytest

_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from dna_suffix_tree.errors import ResourceExhausted
from dna_suffix_tree.python_backend.arena import ROOT
from dna_suffix_tree.python_backend.sequence import Sequence
from dna_suffix_tree.python_backend.ukkonen import ActivePoint, UkkonenBuilder


def generate_random_dna_string(min_len=0, max_len=60):
    length = random.randint(min_len, max_len)
    return "".join(random.choices("ACGT", k=length))


def build_arena(text):
    sequence = Sequence(text)
    arena, leaf_end = UkkonenBuilder(sequence).build()
    return sequence, arena, leaf_end


def path_labels(sequence, arena, leaf_end):
    """Maps every node id to the tuple of buffer symbols on its root path."""
    labels = {ROOT: ()}
    stack = [ROOT]
    while stack:
        node = stack.pop()
        for child in arena.children(node):
            start = arena.start(child)
            length = arena.edge_length(child, leaf_end)
            labels[child] = labels[node] + tuple(sequence.buffer[start:start + length])
            stack.append(child)
    return labels


def check_tree(text):
    sequence, arena, leaf_end = build_arena(text)
    n = len(text)
    buffer = sequence.buffer
    labels = path_labels(sequence, arena, leaf_end)

    # Every node reachable from the root.
    assert len(labels) == len(arena)
    assert leaf_end == n + 1

    # One leaf per suffix, terminator-only suffix included.
    assert arena.leaf_count == n + 1
    suffix_indexes = sorted(arena.suffix_index(node) for node in labels if arena.is_leaf(node))
    assert suffix_indexes == list(range(n + 1))

    for node, label in labels.items():
        if node == ROOT:
            continue
        assert arena.edge_length(node, leaf_end) >= 1
        if arena.is_leaf(node):
            assert label == tuple(buffer[arena.suffix_index(node):])
        else:
            assert len(arena.children(node)) >= 2
            target = arena.suffix_link(node)
            assert labels[target] == label[1:]

    # At most 2n + 2 nodes for a buffer of n + 1 symbols.
    assert len(arena) <= 2 * (n + 1)
    return arena


class TestUkkonenBuilder:
    @pytest.mark.parametrize("text", [
        "", "A", "ACGT", "AAAA", "ACGTACGT", "ACACACAC", "GATTACA",
        "ATATATATAT", "CCCCCCCCCCG", "AGAGAGCTCTCT",
    ])
    def test_known_strings(self, text):
        check_tree(text)

    def test_all_short_strings(self):
        for length in range(0, 6):
            for letters in itertools.product("ACGT", repeat=length):
                check_tree("".join(letters))

    def test_random_strings(self):
        random.seed(20241016)
        for _ in range(200):
            check_tree(generate_random_dna_string(0, 120))

    def test_empty_sequence_has_single_terminator_leaf(self):
        arena = check_tree("")
        assert len(arena) == 2
        assert arena.children(ROOT) == [1]

    def test_repeated_base_builds_chain_of_internal_nodes(self):
        _, arena, _ = build_arena("AAAA")
        # root + 5 leaves + internal nodes for A, AA, AAA
        assert len(arena) == 9

    def test_no_repeats_means_no_internal_nodes(self):
        _, arena, _ = build_arena("ACGT")
        assert len(arena) == 6

    def test_checkpoint_sees_every_position(self):
        seen = []
        sequence = Sequence("ACGTTA")
        UkkonenBuilder(sequence, checkpoint=seen.append).build()
        assert seen == list(range(7))

    def test_checkpoint_can_cancel(self):
        class Cancelled(Exception):
            pass

        def stop_at_three(position):
            if position == 3:
                raise Cancelled()

        builder = UkkonenBuilder(Sequence("ACGTACGT"), checkpoint=stop_at_three)
        with pytest.raises(Cancelled):
            builder.build()

    def test_fresh_builder_holds_only_the_root(self):
        builder = UkkonenBuilder(Sequence("ACGT"))
        assert len(builder.arena) == 1
        assert builder.arena.children(ROOT) == []
        assert builder.arena.edge_length(ROOT, 0) == 0

    def test_builder_is_single_use(self):
        builder = UkkonenBuilder(Sequence("ACG"))
        builder.build()
        with pytest.raises(RuntimeError):
            builder.build()

    def test_max_nodes(self):
        with pytest.raises(ResourceExhausted):
            UkkonenBuilder(Sequence("ACGT"), max_nodes=5).build()
        arena, _ = UkkonenBuilder(Sequence("ACGT"), max_nodes=6).build()
        assert len(arena) == 6

    def test_active_point_defaults(self):
        point = ActivePoint()
        assert (point.node, point.edge, point.length) == (ROOT, 0, 0)
        assert "length=0" in repr(point)
