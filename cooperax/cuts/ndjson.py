"""Stream coproduct terms to newline-delimited JSON files.

Each line is one term. By default forests and trunks are written as their
compact structural keys (``key_forest``/``key_of``); with ``structural=True``
they are written as nested ``{"label": ..., "children": [...]}`` objects.
"""

from __future__ import annotations
from fractions import Fraction
from os import PathLike
from typing import Any, Callable, TypeVar
import json
import logging

from cooperax.algebra.weights import WeightMonoid
from cooperax.cuts.admissible_cuts import delta_stream
from cooperax.cuts.weighted import delta_w
from cooperax.trees.rooted_trees import Forest, Tree, fold_tree, key_forest, key_of

_logger = logging.getLogger(__name__)

A = TypeVar("A")
W = TypeVar("W")


def tree_to_json(tr: Tree[A], encode_label: Callable[[A], Any]) -> dict[str, Any]:
    return fold_tree(tr, lambda node, kids: {"label": encode_label(node.label), "children": kids})


def _encode(
    forest: Forest, trunk: Tree, structural: bool, encode_label: Callable[[Any], Any]
) -> dict[str, Any]:
    if structural:
        return {
            "forest": [tree_to_json(tr, encode_label) for tr in forest],
            "trunk": tree_to_json(trunk, encode_label),
        }
    return {"forest": key_forest(forest), "trunk": key_of(trunk)}


def write_delta_ndjson(
    tr: Tree[A],
    path: str | PathLike[str],
    structural: bool = False,
    encode_label: Callable[[A], Any] | None = None,
    flush_every: int = 1000,
) -> int:
    """Write every ``delta_stream`` term of ``tr`` to ``path``.

    Terms are pulled lazily, so memory use does not grow with the number of
    cuts. Returns the number of lines written.
    """
    if flush_every <= 0:
        raise ValueError(f"flush_every must be >= 1, got {flush_every}.")
    enc = encode_label if encode_label is not None else (lambda a: a)
    line_count = 0
    with open(path, "w", encoding="utf-8") as fh:
        for forest, trunk in delta_stream(tr):
            fh.write(json.dumps(_encode(forest, trunk, structural, enc), ensure_ascii=False) + "\n")
            line_count += 1
            if line_count % flush_every == 0:
                fh.flush()
    _logger.debug("write_delta_ndjson: %d lines to %s", line_count, path)
    return line_count


def _default_weight(w: Any) -> Any:
    """Exact rationals are written as ``"p/q"`` strings (``"3"`` when integral)."""
    if isinstance(w, Fraction):
        return str(w)
    return w


def write_delta_w_ndjson(
    tr: Tree[A],
    path: str | PathLike[str],
    monoid: WeightMonoid[W],
    coef_of: Callable[[Forest, Tree[A]], W] | None = None,
    structural: bool = False,
    encode_label: Callable[[A], Any] | None = None,
    encode_weight: Callable[[W], Any] | None = None,
    flush_every: int = 1000,
) -> int:
    """Write the merged terms of ``delta_w`` to ``path``, one per line.

    Each line carries an extra ``"coef"`` field. ``encode_weight`` makes
    other non-JSON coefficients serialisable; ``Fraction`` coefficients are
    written as strings by default. ``delta_w`` is materialised anyway, so
    every line is serialised before ``path`` is opened: an encoding error
    leaves an existing file untouched. Returns the number of lines written.
    """
    if flush_every <= 0:
        raise ValueError(f"flush_every must be >= 1, got {flush_every}.")
    enc = encode_label if encode_label is not None else (lambda a: a)
    enc_w = encode_weight if encode_weight is not None else _default_weight
    lines: list[str] = []
    for term in delta_w(tr, monoid, coef_of).values():
        record = {"coef": enc_w(term.coefficient)}
        record.update(_encode(term.forest, term.trunk, structural, enc))
        lines.append(json.dumps(record, ensure_ascii=False) + "\n")
    with open(path, "w", encoding="utf-8") as fh:
        for line_count, line in enumerate(lines, start=1):
            fh.write(line)
            if line_count % flush_every == 0:
                fh.flush()
    _logger.debug("write_delta_w_ndjson: %d lines to %s", len(lines), path)
    return len(lines)
