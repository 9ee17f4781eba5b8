import pytest
from typing import Callable
from pytest_benchmark.fixture import BenchmarkFixture
from cooperax.trees.rooted_trees import Tree, tree, leaf
from cooperax.trees.shape_types import ShapeBatch
import jax.numpy as jnp

# deeper than the default interpreter recursion limit
DEEP_CHAIN = 2000

BENCH_CUT_CASES: list = [
    pytest.param(6, id="star-6"),
    pytest.param(10, id="star-10"),
    pytest.param(12, id="star-12"),
]


def benchmark_wrapper(
    benchmark: BenchmarkFixture,
    func: Callable,
    *args,
    **kwargs,
):
    # Warm-up: one execution outside the timed loop
    warmed = func(*args, **kwargs)

    def run():
        func(*args, **kwargs)

    benchmark(run)
    return warmed


def shapes_from_parents(parents: list[list[int]]) -> ShapeBatch:
    """Create a ShapeBatch from a list of parent arrays (one per tree)."""
    arr = jnp.asarray(parents, dtype=jnp.int32)
    return ShapeBatch(parent=arr)


def chain_tree(n_nodes: int, prefix: str = "c") -> Tree[str]:
    """Linear chain ``c0(c1(...))`` with ``n_nodes`` nodes."""
    if n_nodes < 1:
        raise ValueError("n_nodes must be >= 1")
    tr = leaf(f"{prefix}{n_nodes - 1}")
    for i in range(n_nodes - 2, -1, -1):
        tr = tree(f"{prefix}{i}", [tr])
    return tr


def star_tree(n_leaves: int, root: str = "r") -> Tree[str]:
    """Root with ``n_leaves`` distinct leaf children ``l0 .. l{n-1}``."""
    return tree(root, [leaf(f"l{i}") for i in range(n_leaves)])


def cherry_tree() -> Tree[str]:
    """Root with two leaf children: ``root(a, b)``."""
    return tree("root", [leaf("a"), leaf("b")])


def mixed_tree() -> Tree[str]:
    """``f(g(x, y), z)``: uniquely labelled, uneven branching."""
    return tree("f", [tree("g", [leaf("x"), leaf("y")]), leaf("z")])


def deep_mixed_tree() -> Tree[str]:
    """``r(a(b(c, d), e), f(g), h)``: uniquely labelled, depth 3."""
    return tree(
        "r",
        [
            tree("a", [tree("b", [leaf("c"), leaf("d")]), leaf("e")]),
            tree("f", [leaf("g")]),
            leaf("h"),
        ],
    )


SAMPLE_TREES: list = [
    pytest.param(leaf("x"), id="leaf"),
    pytest.param(chain_tree(2), id="chain-2"),
    pytest.param(chain_tree(4), id="chain-4"),
    pytest.param(cherry_tree(), id="cherry"),
    pytest.param(star_tree(4), id="star-4"),
    pytest.param(mixed_tree(), id="mixed"),
    pytest.param(deep_mixed_tree(), id="deep-mixed"),
]


def assert_preorder_parents(parents: jnp.ndarray, n: int, count: int | None = None) -> None:
    """Every row is a preorder parent array on ``n`` nodes: root -1, 0 <= p[i] < i."""
    assert parents.dtype == jnp.int32, f"Expected dtype int32, got {parents.dtype}"
    assert parents.ndim == 2 and parents.shape[1] == n, f"Expected rows of length {n}, got {parents.shape}"
    if count is not None:
        assert parents.shape[0] == count, f"Expected {count} rows, got {parents.shape[0]}"
    assert bool(jnp.all(parents[:, 0] == -1)), "Column 0 holds the root"
    if n > 1:
        below = jnp.arange(1, n, dtype=jnp.int32)
        assert bool(jnp.all((parents[:, 1:] >= 0) & (parents[:, 1:] < below))), "Parents precede children"
