"""
Agglomerative merge tree over a set of 2-D points.

The tree is stored as a scipy linkage matrix: row i merges nodes Z[i, 0] and
Z[i, 1] at height Z[i, 2] into node n + i holding Z[i, 3] leaves. Ids below n
are leaves, i.e. positions in the point array the tree was built from.

Complete linkage is the default: a group's diameter never exceeds the merge
height, which keeps bus pickup areas compact. Single linkage chains along
dense corridors and average linkage sits in between.
"""

import heapq
import logging
from typing import Iterator, List, Tuple

import numpy as np
from scipy.cluster.hierarchy import linkage
from scipy.spatial.distance import pdist

from .exceptions import InvalidCutError, InvalidInputError, InvalidParameterError
from .validation import validate_points

logger = logging.getLogger(__name__)

DEFAULT_LINKAGE = "complete"
SUPPORTED_LINKAGES = ("complete", "average", "single")


class Dendrogram:
    """Read-only binary merge tree built by build_dendrogram"""

    def __init__(self, linkage_matrix: np.ndarray, n_leaves: int, method: str = DEFAULT_LINKAGE):
        self.linkage_matrix = linkage_matrix
        self.n_leaves = n_leaves
        self.method = method
        self.linkage_matrix.setflags(write=False)

    @property
    def root(self) -> int:
        return 2 * self.n_leaves - 2

    @property
    def heights(self) -> np.ndarray:
        return self.linkage_matrix[:, 2]

    def is_leaf(self, node: int) -> bool:
        return node < self.n_leaves

    def children(self, node: int) -> Tuple[int, int]:
        if self.is_leaf(node):
            raise ValueError(f"Node {node} is a leaf")
        row = self.linkage_matrix[node - self.n_leaves]
        return int(row[0]), int(row[1])

    def node_size(self, node: int) -> int:
        if self.is_leaf(node):
            return 1
        return int(self.linkage_matrix[node - self.n_leaves, 3])

    def leaves(self, node: int) -> List[int]:
        """Leaf positions under a node, ascending"""
        result = []
        stack = [node]
        while stack:
            current = stack.pop()
            if self.is_leaf(current):
                result.append(current)
            else:
                stack.extend(self.children(current))
        return sorted(result)

    def cut_nodes(self, k: int) -> List[int]:
        """Roots of the k subtrees left after undoing the last k - 1 merges"""
        if not 1 <= k <= self.n_leaves:
            raise InvalidCutError(k, self.n_leaves)

        nodes = {self.root}
        # Undoing merges newest first: node 2n-1-j is always a current root at step j
        for step in range(1, k):
            node = self.root - (step - 1)
            nodes.remove(node)
            nodes.update(self.children(node))
        return list(nodes)

    def __repr__(self):
        return f"Dendrogram(n_leaves={self.n_leaves}, method={self.method!r})"


def build_dendrogram(points, method: str = DEFAULT_LINKAGE) -> Dendrogram:
    """Build the full merge tree over points using Euclidean distance.

    Coordinates are used as given; any scaling is the caller's business.
    """
    if method not in SUPPORTED_LINKAGES:
        raise InvalidParameterError(f"Unknown linkage method '{method}', expected one of {SUPPORTED_LINKAGES}")

    coords = validate_points(points, allow_empty=False)
    n = len(coords)

    if n == 1:
        return Dendrogram(np.empty((0, 4), dtype=float), 1, method)

    distances = pdist(coords, metric='euclidean')
    Z = linkage(distances, method=method)
    logger.debug(f"Built {method} linkage over {n} points, top merge height {Z[-1, 2]:.4f}")
    return Dendrogram(Z, n, method)


def cut_dendrogram(dendrogram: Dendrogram, k: int) -> List[List[int]]:
    """Partition the leaves into exactly k groups.

    Groups are ordered by their smallest leaf position so labels are stable
    for a given tree.
    """
    groups = [dendrogram.leaves(node) for node in dendrogram.cut_nodes(k)]
    groups.sort(key=lambda members: members[0])
    return groups


def iter_cut_profiles(dendrogram: Dendrogram, start: int = 1) -> Iterator[Tuple[int, int]]:
    """Yield (k, largest group size) for k = start .. n.

    Each step splits one node, so the whole sweep costs O(n log n) instead of
    re-cutting the tree for every k.
    """
    n = dendrogram.n_leaves
    if not 1 <= start <= n:
        raise InvalidCutError(start, n)

    active = {dendrogram.root}
    heap = [(-n, dendrogram.root)]

    for k in range(1, n + 1):
        if k > 1:
            node = dendrogram.root - (k - 2)
            active.remove(node)
            for child in dendrogram.children(node):
                active.add(child)
                heapq.heappush(heap, (-dendrogram.node_size(child), child))

        while heap[0][1] not in active:
            heapq.heappop(heap)

        if k >= start:
            yield k, -heap[0][0]
