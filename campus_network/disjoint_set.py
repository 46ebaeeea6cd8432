"""Union-find over node indices for Kruskal's algorithm."""

from typing import List


class DisjointSet:
    """Disjoint-set forest with path compression and union by rank.

    Indices run from ``0`` to ``size - 1``. One instance is created per MST
    computation and thrown away afterwards.

    Args:
        size (int): Number of elements, each starting in its own set.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError("size must be non-negative")
        self.size = size
        self.parent: List[int] = list(range(size))
        self.rank: List[int] = [0] * size
        self.component_count = size

    def _check(self, x: int) -> None:
        if not 0 <= x < self.size:
            raise IndexError(f"index {x} out of range for disjoint set of size {self.size}")

    def find(self, x: int) -> int:
        """Return the root of the set containing ``x``.

        Every index visited on the way up is re-pointed to the root.
        """
        self._check(x)
        root = x
        while self.parent[root] != root:
            root = self.parent[root]

        while x != root:
            next_x = self.parent[x]
            self.parent[x] = root
            x = next_x

        return root

    def union(self, x: int, y: int) -> bool:
        """Merge the sets holding ``x`` and ``y``.

        On equal ranks y's root is attached under x's root.

        Returns:
            bool: False if both were already in the same set.
        """
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return False

        if self.rank[root_x] < self.rank[root_y]:
            self.parent[root_x] = root_y
        elif self.rank[root_x] > self.rank[root_y]:
            self.parent[root_y] = root_x
        else:
            self.parent[root_y] = root_x
            self.rank[root_x] += 1

        self.component_count -= 1
        return True
