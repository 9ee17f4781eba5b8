from __future__ import annotations
from typing import NamedTuple, NewType
import jax.numpy as jnp


class ShapeBatch(NamedTuple):
    """A batch container for rooted tree shapes of a single degree.

    Parameters
    - parent: 2D array of shape ``(num_trees, n)`` with dtype ``int32``.
      Each row encodes one rooted tree via its parent array in preorder:
      ``parent[0] == -1`` and for ``i > 0`` we have ``0 <= parent[i] < i``.

    Notes
    - This container is a JAX pytree; ``parent`` can be a ``jax.Array``.
    - Shapes carry no labels. ``cooperax.trees.rooted_trees.trees_from_shapes``
      turns each row into a labelled ``Tree`` (labels are preorder indices).

    Example
    >>> import jax.numpy as jnp
    >>> batch = ShapeBatch(parent=jnp.array([[-1, 0, 0]], dtype=jnp.int32))
    >>> batch.degree, batch.size
    (3, 1)
    """

    parent: jnp.ndarray

    @property
    def degree(self) -> int:
        """Number of nodes in each tree of the batch."""
        return int(self.parent.shape[1])

    @property
    def size(self) -> int:
        """Number of trees in the batch."""
        return int(self.parent.shape[0])

    def rows(self) -> list[list[int]]:
        """Parent arrays as plain Python lists, one per tree."""
        return [list(map(int, row)) for row in self.parent.tolist()]


MKWShapes = NewType("MKWShapes", ShapeBatch)
BCKShapes = NewType("BCKShapes", ShapeBatch)
