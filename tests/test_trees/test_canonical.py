from collections import Counter
from math import factorial, prod

import pytest

from cooperax.trees.bck_trees import enumerate_bck_trees
from cooperax.trees.canonical import (
    automorphism_count,
    canonical_level_sequence,
    canonical_parent,
    canonicalize,
    forest_canonical_code,
    levelseq_to_parent,
)
from cooperax.trees.mkw_trees import enumerate_mkw_trees
from cooperax.trees.rooted_trees import Tree, tree, leaf, trees_from_shapes
from tests.conftest import DEEP_CHAIN, chain_tree, cherry_tree, star_tree


def _child_order_choices(tr: Tree) -> int:
    """Number of ways to order the children at every node."""
    return factorial(len(tr.children)) * prod(_child_order_choices(c) for c in tr.children)


@pytest.mark.parametrize(
    "tr,expected",
    [
        (leaf("x"), 1),
        (chain_tree(5), 1),
        (cherry_tree(), 2),
        (star_tree(4), 24),
        (tree("r", [leaf("a"), tree("b", [leaf("c")])]), 1),
        (
            tree("r", [tree("a", [leaf("b"), leaf("c")]), tree("d", [leaf("e"), leaf("f")])]),
            8,
        ),
        (tree("r", [chain_tree(2, "p"), chain_tree(2, "q"), leaf("s")]), 2),
    ],
)
def test_automorphism_count(tr: Tree, expected: int) -> None:
    assert automorphism_count(tr) == expected, f"|Aut| of {tr} should be {expected}"


def test_automorphism_count_is_exact_for_large_stars() -> None:
    assert automorphism_count(star_tree(25)) == factorial(25)


def test_canonical_code_ignores_labels_and_order() -> None:
    a = tree("r", [leaf("x"), tree("y", [leaf("z")])])
    b = tree("s", [tree("u", [leaf("v")]), leaf("w")])
    assert canonicalize(a) == canonicalize(b)
    assert canonical_level_sequence(a) == [1, 2, 3, 2]
    assert canonicalize(a).code == "1,2,3,2"


def test_canonical_code_separates_shapes() -> None:
    assert canonicalize(chain_tree(3)).code == "1,2,3"
    assert canonicalize(cherry_tree()).code == "1,2,2"


def test_forest_code() -> None:
    assert forest_canonical_code([]) == "1"
    assert forest_canonical_code([leaf("a")]) == "1,2"
    assert forest_canonical_code([leaf("a"), chain_tree(2)]) == forest_canonical_code(
        [chain_tree(2, "q"), leaf("b")]
    )


def test_levelseq_to_parent() -> None:
    assert levelseq_to_parent([1, 2, 3, 2]) == [-1, 0, 1, 0]
    assert levelseq_to_parent([1]) == [-1]


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6, 7])
def test_bck_rows_are_canonical(n: int) -> None:
    batch = enumerate_bck_trees(n)[n - 1]
    for row, tr in zip(batch.rows(), trees_from_shapes(batch)):
        assert canonical_parent(tr) == row, f"BCK row {row} is not its own canonical form"


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6])
def test_plane_embeddings_match_orbit_stabilizer(n: int) -> None:
    """#plane embeddings of a shape equals (prod of k_v!) / |Aut|."""
    plane = trees_from_shapes(enumerate_mkw_trees(n)[n - 1])
    embeddings = Counter(canonicalize(tr).code for tr in plane)
    for tr in trees_from_shapes(enumerate_bck_trees(n)[n - 1]):
        form = canonicalize(tr)
        expected = _child_order_choices(tr) // form.automorphism_count
        assert embeddings[form.code] == expected, (
            f"Shape {form.code}: expected {expected} plane embeddings, got {embeddings[form.code]}"
        )


def test_canonical_form_of_deep_trees() -> None:
    form = canonicalize(chain_tree(DEEP_CHAIN))
    assert form.code == ",".join(map(str, range(1, DEEP_CHAIN + 1)))
    assert form.automorphism_count == 1
    broom = tree("r", [chain_tree(DEEP_CHAIN), chain_tree(DEEP_CHAIN, prefix="d")])
    assert automorphism_count(broom) == 2, "Two isomorphic chains can be swapped"
    assert canonical_parent(broom)[: DEEP_CHAIN + 2] == [-1] + list(range(DEEP_CHAIN)) + [0]
