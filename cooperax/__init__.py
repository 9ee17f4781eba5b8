"""Cooperax: admissible cuts and weighted coproducts of rooted trees.

## Features

### Trees
- Immutable labelled rooted trees with structural keys
- Canonical forms and exact automorphism counts
- Enumeration of unordered (BCK) and plane (MKW) tree shapes
- Unicode rendering

### Coproducts
- Lazy admissible-cut enumeration
- Weighted coproducts over pluggable monoids and semirings
- Symmetry-aware coproducts (planar, symmetric aggregation, orbit normalisation)
- Per-degree cut tables and NDJSON export
"""

__version__ = "0.1.0"
__license__ = "MIT"
