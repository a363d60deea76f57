"""
Directed weighted graph for MFAS

Read-only container built once from a node list and non-negative edge weights:
- Nodes: borrowed from the caller (never copied or mutated)
- Edges: owned {(tail, head): weight} map, exposed read-only
- Degree sums: derived from the edge set on every call
"""

import math
import logging
from types import MappingProxyType
from typing import Dict, Hashable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ...exceptions import GraphValidationError

logger = logging.getLogger(__name__)

KeyPair = Tuple[Hashable, Hashable]


class MFASGraph:
    """
    Immutable weighted directed graph

    The node sequence is held by reference. The caller owns it and must keep
    it alive and unchanged for as long as the graph is in use. Multiple
    threads may read one graph concurrently; no state is cached.
    """

    __slots__ = ("_nodes", "_node_set", "_edge_weights")

    def __init__(self, nodes: Sequence[Hashable], edge_weights: Mapping[KeyPair, float]):
        """
        Args:
            nodes: Node identifiers (hashable and totally ordered), borrowed
            edge_weights: {(tail, head): weight >= 0}

        Raises:
            GraphValidationError: duplicate node, unknown endpoint, self loop,
                negative or non-finite weight
        """
        node_set = frozenset(nodes)
        if len(node_set) != len(nodes):
            raise GraphValidationError("Node list contains duplicate identifiers")

        edges: Dict[KeyPair, float] = {}
        for (tail, head), weight in edge_weights.items():
            if tail not in node_set or head not in node_set:
                raise GraphValidationError(
                    f"Edge ({tail}, {head}) references a node not in the graph"
                )
            if tail == head:
                raise GraphValidationError(f"Self loop on node {tail}")

            weight = float(weight)
            if not math.isfinite(weight) or weight < 0:
                raise GraphValidationError(
                    f"Edge ({tail}, {head}) has invalid weight {weight}, expected finite >= 0"
                )
            edges[(tail, head)] = weight

        self._nodes = nodes
        self._node_set = node_set
        self._edge_weights = MappingProxyType(edges)

    @property
    def nodes(self) -> Sequence[Hashable]:
        """The borrowed node sequence (same object passed at construction)"""
        return self._nodes

    @property
    def edge_weights(self) -> Mapping[KeyPair, float]:
        """Read-only view of {(tail, head): weight}"""
        return self._edge_weights

    def has_node(self, node: Hashable) -> bool:
        return node in self._node_set

    def has_edge(self, tail: Hashable, head: Hashable) -> bool:
        return (tail, head) in self._edge_weights

    def weight(self, tail: Hashable, head: Hashable, default: Optional[float] = None) -> Optional[float]:
        """Weight of the stored edge tail -> head, or default if absent"""
        return self._edge_weights.get((tail, head), default)

    def edges(self) -> Iterator[Tuple[Hashable, Hashable, float]]:
        """Iterate over (tail, head, weight)"""
        for (tail, head), weight in self._edge_weights.items():
            yield tail, head, weight

    def out_weight(self, node: Hashable) -> float:
        """Sum of weights of edges leaving node"""
        return sum(w for (tail, _), w in self._edge_weights.items() if tail == node)

    def in_weight(self, node: Hashable) -> float:
        """Sum of weights of edges entering node"""
        return sum(w for (_, head), w in self._edge_weights.items() if head == node)

    def degree_sums(self) -> Tuple[Dict[Hashable, float], Dict[Hashable, float]]:
        """
        Weighted out- and in-degree of every node in a single pass

        Returns:
            (out_weights, in_weights), each {node: weight sum}; isolated nodes map to 0.0
        """
        out_weights = {node: 0.0 for node in self._nodes}
        in_weights = {node: 0.0 for node in self._nodes}

        for (tail, head), weight in sorted(self._edge_weights.items()):
            out_weights[tail] += weight
            in_weights[head] += weight

        return out_weights, in_weights

    def sorted_nodes(self) -> List[Hashable]:
        """Nodes in ascending identifier order (fresh list)"""
        return sorted(self._nodes)

    def num_nodes(self) -> int:
        return len(self._nodes)

    def num_edges(self) -> int:
        return len(self._edge_weights)

    def __repr__(self) -> str:
        return f"MFASGraph(nodes={self.num_nodes()}, edges={self.num_edges()})"
