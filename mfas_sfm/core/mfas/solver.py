"""
Minimum feedback arc set solver

Implements the MFAS step of:
Kyle Wilson and Noah Snavely, "Robust Global Translations with 1DSfM",
ECCV 2014

Given a weighted directed graph, find a node ordering such that the total
weight of edges pointing backwards in that ordering is small. Edges pointing
backwards are outlier candidates.
"""

import logging
from typing import Dict, Hashable, List, Mapping, Optional, Sequence, Tuple

from .config import OrderingConfig
from .edge_weights import (
    DirectionLike,
    TranslationEdges,
    build_edge_weights,
    normalize_edge_weights,
)
from .graph import MFASGraph
from .ordering import GreedyOrdering
from .outliers import compute_outlier_weights

logger = logging.getLogger(__name__)

KeyPair = Tuple[Hashable, Hashable]


class MFAS:
    """
    MFAS ordering and outlier weights for one weighted directed graph

    The node list is shared with the caller rather than copied, since MFAS is
    typically run on large graphs already held in memory. The caller must keep
    it alive and unchanged while the solver is in use.

    Usage:
        mfas = MFAS(nodes, {(0, 1): 0.5, (2, 1): -0.3})
        ordering = mfas.compute_ordering()
        outlier_weights = mfas.compute_outlier_weights()
    """

    def __init__(
        self,
        nodes: Sequence[Hashable],
        edge_weights: Mapping[KeyPair, float],
        config: Optional[OrderingConfig] = None,
    ):
        """
        Args:
            nodes: Nodes in the graph (borrowed)
            edge_weights: {(u, v): signed weight}; negative edges are flipped
            config: OrderingConfig or None (uses defaults)

        Raises:
            GraphValidationError: malformed graph
            DegenerateDirectionError: non-finite weight
        """
        self.config = config or OrderingConfig()
        self._graph = MFASGraph(nodes, normalize_edge_weights(edge_weights))
        self._engine = GreedyOrdering(self.config)

    @classmethod
    def from_translations(
        cls,
        nodes: Sequence[Hashable],
        relative_translations: TranslationEdges,
        projection_direction: DirectionLike,
        config: Optional[OrderingConfig] = None,
    ) -> "MFAS":
        """
        Build the 1D problem for translation averaging

        Nodes are cameras and edges carry unit translation directions. Edge
        weights are the projections of those directions onto
        projection_direction.

        Args:
            nodes: Camera keys (borrowed)
            relative_translations: {(i, j): direction from camera i to camera j}
            projection_direction: Axis to project the directions onto
            config: OrderingConfig or None (uses defaults)
        """
        edge_weights = build_edge_weights(relative_translations, projection_direction)
        return cls(nodes, edge_weights, config)

    @property
    def graph(self) -> MFASGraph:
        return self._graph

    @property
    def edge_weights(self) -> Mapping[KeyPair, float]:
        """Stored non-negative edge weights"""
        return self._graph.edge_weights

    def compute_ordering(self) -> List[Hashable]:
        """
        Compute the 1D MFAS ordering of nodes in the graph

        Returns:
            New list of all nodes in the obtained order
        """
        return self._engine.compute(self._graph)

    def compute_outlier_weights(self, ordering: Optional[Sequence[Hashable]] = None) -> Dict[KeyPair, float]:
        """
        Compute outlier weights of all edges

        The outlier weight of an edge is zero if it agrees with the ordering
        and the magnitude of its weight otherwise.

        Args:
            ordering: Ordering to evaluate; computed with compute_ordering() if None

        Returns:
            {(tail, head): outlier weight}, keyed like edge_weights
        """
        if ordering is None:
            ordering = self.compute_ordering()
        return compute_outlier_weights(self._graph, ordering)

    def __repr__(self) -> str:
        return f"MFAS({self._graph})"
