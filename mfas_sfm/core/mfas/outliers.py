"""
Outlier weights for MFAS orderings

An edge whose tail is placed before its head agrees with the ordering and gets
an outlier weight of zero. Every other edge gets its full stored weight.
"""

import logging
from typing import Dict, Hashable, Mapping, Sequence, Set, Tuple

from ...exceptions import InvalidOrderingError
from .graph import MFASGraph

logger = logging.getLogger(__name__)

KeyPair = Tuple[Hashable, Hashable]


def ordering_positions(graph: MFASGraph, ordering: Sequence[Hashable]) -> Dict[Hashable, int]:
    """
    Map each node to its index in the ordering

    Raises:
        InvalidOrderingError: ordering is not a permutation of the graph nodes
    """
    positions = {node: index for index, node in enumerate(ordering)}

    if len(positions) != len(ordering):
        raise InvalidOrderingError("Ordering contains duplicate nodes")
    if len(positions) != graph.num_nodes() or not all(graph.has_node(n) for n in positions):
        raise InvalidOrderingError(
            f"Ordering of {len(ordering)} nodes is not a permutation of the "
            f"{graph.num_nodes()} graph nodes"
        )

    return positions


def compute_outlier_weights(graph: MFASGraph, ordering: Sequence[Hashable]) -> Dict[KeyPair, float]:
    """
    Score every stored edge against an ordering

    Args:
        graph: MFASGraph with non-negative edge weights
        ordering: Permutation of graph.nodes

    Returns:
        {(tail, head): 0.0 if tail precedes head else weight}, same keys as
        graph.edge_weights
    """
    positions = ordering_positions(graph, ordering)

    outlier_weights = {}
    for tail, head, weight in graph.edges():
        if positions[tail] < positions[head]:
            outlier_weights[(tail, head)] = 0.0
        else:
            outlier_weights[(tail, head)] = weight

    return outlier_weights


def classify_edges(
    outlier_weights: Mapping[KeyPair, float],
    threshold: float = 0.0,
) -> Tuple[Set[KeyPair], Set[KeyPair]]:
    """
    Split edges into inliers and outliers

    Args:
        outlier_weights: Output of compute_outlier_weights
        threshold: Edges with outlier weight above this value are outliers

    Returns:
        (inliers, outliers) as sets of edge keys
    """
    inliers = set()
    outliers = set()

    for key, weight in outlier_weights.items():
        if weight > threshold:
            outliers.add(key)
        else:
            inliers.add(key)

    return inliers, outliers
