"""
Greedy MFAS ordering

Repeatedly peels off the most source-like remaining node:
1. Score every remaining node as weighted out-degree minus weighted in-degree,
   counting only edges between remaining nodes
2. Place the highest scoring node next (ties go to the lowest node id)
3. Remove it and discount its edges from the neighbors' degree sums

The result approximates the ordering that minimizes the weight of backward
edges. It is not optimal in general.
"""

import heapq
import logging
from typing import Any, Dict, Hashable, List, Optional, Set, Tuple

from .config import OrderingConfig
from .graph import MFASGraph

logger = logging.getLogger(__name__)

Adjacency = Dict[Hashable, List[Tuple[Hashable, float]]]


class _PeelingState:
    """
    Mutable working structure for one ordering run

    Holds the remaining node set and incremental weighted degree sums. Edges
    are visited in sorted order so the floating point sums, and therefore the
    ordering, never depend on map iteration order.
    """

    def __init__(self, graph: MFASGraph):
        self.out_weight, self.in_weight = graph.degree_sums()
        self.remaining: Set[Hashable] = set(graph.nodes)

        self.successors: Adjacency = {node: [] for node in graph.nodes}
        self.predecessors: Adjacency = {node: [] for node in graph.nodes}
        for (tail, head), weight in sorted(graph.edge_weights.items()):
            self.successors[tail].append((head, weight))
            self.predecessors[head].append((tail, weight))

    def score(self, node: Hashable) -> float:
        return self.out_weight[node] - self.in_weight[node]

    def remove(self, node: Hashable) -> List[Hashable]:
        """
        Remove node and discount its edges from remaining neighbors

        Returns:
            Remaining neighbors whose score changed
        """
        self.remaining.discard(node)
        touched = []

        for head, weight in self.successors[node]:
            if head in self.remaining:
                self.in_weight[head] -= weight
                touched.append(head)

        for tail, weight in self.predecessors[node]:
            if tail in self.remaining:
                self.out_weight[tail] -= weight
                touched.append(tail)

        return touched


class GreedyOrdering:
    """
    Greedy ordering engine for weighted minimum feedback arc set

    Two selection strategies are available and return identical orderings:
    - "heap": lazy-deletion priority queue keyed on (-score, node)
    - "scan": linear rescan of the remaining nodes in ascending id order
    """

    def __init__(self, config: Optional[OrderingConfig] = None):
        """
        Args:
            config: OrderingConfig or None (uses defaults)
        """
        self.config = config or OrderingConfig()
        self.logger = logging.getLogger(__name__)

    def compute(self, graph: MFASGraph) -> List[Hashable]:
        """
        Compute the greedy ordering of all graph nodes

        Args:
            graph: MFASGraph (read only, never modified)

        Returns:
            New list containing every node exactly once, first = most source-like
        """
        if graph.num_nodes() == 0:
            return []

        state = _PeelingState(graph)

        if self.config.method == "scan":
            ordering = self._order_by_scan(graph, state)
        else:
            ordering = self._order_by_heap(state)

        self.logger.debug(
            f"Greedy ordering ({self.config.method}) placed {len(ordering)} nodes "
            f"from {graph}"
        )
        return ordering

    def _order_by_heap(self, state: _PeelingState) -> List[Hashable]:
        """Priority queue selection, O((N + E) log N)"""
        heap: List[Tuple[float, Any]] = [(-state.score(node), node) for node in state.remaining]
        heapq.heapify(heap)

        ordering = []
        while heap:
            neg_score, node = heapq.heappop(heap)

            # Stale entry: node already placed or its score changed since the push
            if node not in state.remaining or -neg_score != state.score(node):
                continue

            ordering.append(node)
            for neighbor in state.remove(node):
                heapq.heappush(heap, (-state.score(neighbor), neighbor))

        return ordering

    def _order_by_scan(self, graph: MFASGraph, state: _PeelingState) -> List[Hashable]:
        """Linear rescan selection, O(N^2 + E)"""
        candidates = graph.sorted_nodes()

        ordering = []
        while candidates:
            best_index = 0
            best_score = state.score(candidates[0])

            # Strict comparison keeps the lowest id among equal scores
            for index in range(1, len(candidates)):
                score = state.score(candidates[index])
                if score > best_score:
                    best_index, best_score = index, score

            node = candidates.pop(best_index)
            ordering.append(node)
            state.remove(node)

        return ordering


def compute_ordering(graph: MFASGraph, config: Optional[OrderingConfig] = None) -> List[Hashable]:
    """Greedy MFAS ordering of graph nodes"""
    return GreedyOrdering(config).compute(graph)
