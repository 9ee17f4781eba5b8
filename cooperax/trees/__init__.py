"""Rooted tree model, canonical forms and shape enumeration.

Exports
- ``Tree``/``tree``/``leaf``: immutable labelled, ordered rooted trees.
- ``key_of``/``key_forest``/``pretty``: structural string encodings.
- ``canonicalize``/``automorphism_count``: unordered canonical forms.
- ``enumerate_bck_trees``/``enumerate_mkw_trees``: all shapes per degree.
"""

from cooperax.trees.rooted_trees import (
    Tree,
    Forest,
    tree,
    leaf,
    pretty,
    key_of,
    key_forest,
    pair_key,
    shape_of,
)
from cooperax.trees.canonical import CanonicalForm, canonicalize, automorphism_count
from cooperax.trees.bck_trees import enumerate_bck_trees
from cooperax.trees.mkw_trees import enumerate_mkw_trees

__all__ = [
    "Tree",
    "Forest",
    "tree",
    "leaf",
    "pretty",
    "key_of",
    "key_forest",
    "pair_key",
    "shape_of",
    "CanonicalForm",
    "canonicalize",
    "automorphism_count",
    "enumerate_bck_trees",
    "enumerate_mkw_trees",
]
