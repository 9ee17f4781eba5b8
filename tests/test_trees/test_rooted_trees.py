import pytest

from cooperax.trees.rooted_trees import (
    Tree,
    tree,
    leaf,
    pretty,
    key_of,
    key_forest,
    pair_key,
    node_count,
    preorder_labels,
    shape_of,
    from_parent,
    to_parent,
    trees_from_shapes,
)
from tests.conftest import DEEP_CHAIN, chain_tree, mixed_tree, shapes_from_parents


def test_pretty_and_keys() -> None:
    tr = mixed_tree()
    assert pretty(tr) == "f(g(x, y), z)"
    assert key_of(tr) == pretty(tr)
    assert key_forest([leaf("a"), tree("b", [leaf("c")])]) == "[a|b(c)]"
    assert key_forest([]) == "[]"
    assert pair_key([leaf("a")], tree("r", [leaf("b")])) == "[a]|r(b)"


def test_custom_label_rendering() -> None:
    tr = tree(1, [leaf(2), leaf(3)])
    assert key_of(tr, show=lambda a: f"n{a}") == "n1(n2, n3)"


def test_structural_equality_is_by_content() -> None:
    a = tree("r", [leaf("x"), leaf("y")])
    b = Tree("r", (Tree("x"), Tree("y")))
    assert a == b
    assert key_of(a) == key_of(b)
    assert key_of(a) != key_of(tree("r", [leaf("y"), leaf("x")])), "Planar order is part of the key"


def test_tree_accepts_any_sequence_of_children() -> None:
    tr = tree("r", [leaf("a")])
    assert isinstance(tr.children, tuple)
    assert leaf("a").is_leaf
    assert not tr.is_leaf


def test_node_count_and_labels() -> None:
    tr = mixed_tree()
    assert node_count(tr) == 5
    assert preorder_labels(tr) == ["f", "g", "x", "y", "z"]


def test_shape_of_drops_labels() -> None:
    shape = shape_of(mixed_tree())
    assert preorder_labels(shape) == [None] * 5
    assert to_parent(shape) == to_parent(mixed_tree())


@pytest.mark.parametrize(
    "parent",
    [[-1], [-1, 0], [-1, 0, 1], [-1, 0, 0], [-1, 0, 1, 1, 0], [-1, 0, 1, 0, 3, 3]],
)
def test_parent_round_trip(parent: list[int]) -> None:
    tr = from_parent(parent)
    assert to_parent(tr) == parent
    assert preorder_labels(tr) == list(range(len(parent))), "Default labels are preorder indices"


def test_from_parent_with_labels() -> None:
    tr = from_parent([-1, 0, 1, 0], labels=["f", "g", "x", "z"])
    assert key_of(tr) == "f(g(x), z)"


@pytest.mark.parametrize("parent", [[], [0], [-1, 1], [-1, 0, 2], [-1, -1]])
def test_from_parent_rejects_malformed(parent: list[int]) -> None:
    with pytest.raises(ValueError):
        from_parent(parent)


def test_from_parent_rejects_label_mismatch() -> None:
    with pytest.raises(ValueError):
        from_parent([-1, 0], labels=["only-one"])


def test_trees_from_shapes() -> None:
    batch = shapes_from_parents([[-1, 0, 1], [-1, 0, 0]])
    trees = trees_from_shapes(batch)
    assert [key_of(tr) for tr in trees] == ["0(1(2))", "0(1, 2)"]
    assert batch.degree == 3
    assert batch.size == 2
    assert batch.rows() == [[-1, 0, 1], [-1, 0, 0]]


def test_deep_trees_round_trip_through_parent_arrays() -> None:
    tr = chain_tree(DEEP_CHAIN)
    parent = to_parent(tr)
    assert parent == [-1] + list(range(DEEP_CHAIN - 1))
    rebuilt = from_parent(parent, preorder_labels(tr))
    assert key_of(rebuilt) == key_of(tr)
    assert node_count(tr) == DEEP_CHAIN
    assert pretty(shape_of(tr), lambda _: "*").count("(") == DEEP_CHAIN - 1
