"""Render rooted trees as Unicode art.

``draw_tree`` draws a single labelled ``Tree``; ``print_forest`` draws every
row of a ``ShapeBatch`` inside a fenced Markdown code block. Leaves take one
horizontal unit each, parents sit above the middle of their children's spans,
and each depth uses three rows (label, rail, stems).
"""

from __future__ import annotations
from typing import Callable, NamedTuple, TypeVar

from cooperax.trees.rooted_trees import Tree, trees_from_shapes
from cooperax.trees.shape_types import ShapeBatch

A = TypeVar("A")


class _Placed(NamedTuple):
    label: str
    depth: int
    x: float
    child_xs: tuple[float, ...]


def _place(
    node: Tree[A],
    show: Callable[[A], str],
    offset: float,
    depth: int,
    out: list[_Placed | None],
) -> tuple[int, float]:
    """Append placements of ``node``'s subtree in preorder; return (width, x)."""
    if node.is_leaf:
        x = offset + 0.5
        out.append(_Placed(show(node.label), depth, x, ()))
        return 1, x
    slot = len(out)
    out.append(None)
    width = 0
    span_centers: list[float] = []
    child_xs: list[float] = []
    for child in node.children:
        child_width, child_x = _place(child, show, offset + width, depth + 1, out)
        span_centers.append(offset + width + child_width / 2.0)
        child_xs.append(child_x)
        width += child_width
    x = sum(span_centers) / len(span_centers)
    out[slot] = _Placed(show(node.label), depth, x, tuple(child_xs))
    return width, x


def _render(placed: list[_Placed]) -> list[str]:
    # columns per unit; wide labels spread subtrees further apart
    scale = max(4, max(len(p.label) for p in placed) + 1)

    def col(x: float) -> int:
        return int(round(x * scale))

    n_rows = 3 * max(p.depth for p in placed) + 1
    last_col = 0
    for p in placed:
        start = col(p.x) - len(p.label) // 2
        last_col = max(last_col, start + len(p.label) - 1, *(col(x) for x in p.child_xs))
        if p.child_xs:
            last_col = max(last_col, col(p.x))
    n_cols = last_col + 1
    canvas = [[" "] * n_cols for _ in range(n_rows)]

    def put(r: int, c: int, ch: str) -> None:
        if 0 <= r < n_rows and 0 <= c < n_cols:
            canvas[r][c] = ch

    for p in placed:
        top = 3 * p.depth
        here = col(p.x)
        for i, ch in enumerate(p.label):
            put(top, here - len(p.label) // 2 + i, ch)
        if not p.child_xs:
            continue
        below = [col(x) for x in p.child_xs]
        if len(below) == 1:
            put(top + 1, here, "│")
            put(top + 2, below[0], "│")
            continue
        for c in range(below[0], below[-1] + 1):
            put(top + 1, c, "─")
        put(top + 1, below[0], "┌")
        put(top + 1, below[-1], "┐")
        for c in below[1:-1]:
            put(top + 1, c, "┬")
        put(top + 1, here, "┼" if here in below else "┴")
        for c in below:
            put(top + 2, c, "│")

    return ["".join(row).rstrip() for row in canvas]


def draw_tree(tr: Tree[A], show: Callable[[A], str] = str) -> str:
    """Multi-line drawing of a labelled tree."""
    placed: list[_Placed | None] = []
    _place(tr, show, 0.0, 0, placed)
    return "\n".join(_render(placed))  # type: ignore[arg-type]


def print_forest(batch: ShapeBatch, show_node_ids: bool = True) -> str:
    """Render a ``ShapeBatch`` as a fenced Markdown code block.

    Args:
        batch: A ``ShapeBatch`` with ``parent`` of shape ``(num_trees, n)``.
        show_node_ids: If ``True``, include preorder node indices next to bullets.

    Returns:
        A single string containing a fenced code block with one Unicode tree
        per row, separated by a blank line.
    """
    show: Callable[[int], str] = (lambda i: f"•{i}") if show_node_ids else (lambda _: "•")
    body = "\n\n".join(draw_tree(tr, show) for tr in trees_from_shapes(batch))
    return f"```\n{body}\n```"
