"""
Quality metrics for MFAS orderings
"""

import numpy as np
from typing import Dict, Any, Hashable, Mapping, Optional, Sequence
from scipy.stats import kendalltau
import logging

from ..core.mfas.graph import MFASGraph
from ..core.mfas.outliers import compute_outlier_weights

logger = logging.getLogger(__name__)


class OrderingMetrics:
    """Quality metrics for evaluating an ordering against its graph"""

    def __init__(self):
        self.metrics = {}

    def evaluate(
        self,
        graph: MFASGraph,
        ordering: Sequence[Hashable],
        reference_positions: Optional[Mapping[Hashable, float]] = None,
    ) -> Dict[str, Any]:
        """
        Evaluate an ordering

        Args:
            graph: Graph the ordering was computed for
            ordering: Permutation of graph nodes
            reference_positions: Optional known 1D coordinate per node (e.g.
                ground-truth camera centers projected on the same axis)

        Returns:
            Dictionary of metrics
        """
        outlier_weights = compute_outlier_weights(graph, ordering)

        metrics = {
            'num_nodes': graph.num_nodes(),
            'num_edges': graph.num_edges(),
        }
        metrics.update(self._feedback_metrics(graph, outlier_weights))

        if reference_positions is not None:
            metrics['kendall_tau'] = self._rank_correlation(ordering, reference_positions)

        self.metrics = metrics
        return metrics

    def _feedback_metrics(self, graph: MFASGraph, outlier_weights: Dict) -> Dict[str, float]:
        """Weight and count of backward edges"""
        total_weight = float(sum(graph.edge_weights.values()))
        feedback_weight = float(sum(outlier_weights.values()))
        num_outliers = sum(1 for w in outlier_weights.values() if w > 0)

        metrics = {
            'total_weight': total_weight,
            'feedback_arc_weight': feedback_weight,
            'feedback_ratio': feedback_weight / total_weight if total_weight > 0 else 0.0,
            'num_outlier_edges': num_outliers,
            'inlier_fraction': 1.0 - num_outliers / len(outlier_weights) if outlier_weights else 1.0,
        }
        return metrics

    def _rank_correlation(
        self,
        ordering: Sequence[Hashable],
        reference_positions: Mapping[Hashable, float],
    ) -> float:
        """Kendall's tau between ordering rank and reference position"""
        nodes = [node for node in ordering if node in reference_positions]
        if len(nodes) < 2:
            return 0.0

        ranks = np.arange(len(nodes))
        positions = np.array([reference_positions[node] for node in nodes], dtype=np.float64)

        tau, _ = kendalltau(ranks, positions)
        if np.isnan(tau):
            logger.warning("Kendall tau undefined (constant reference positions)")
            return 0.0
        return float(tau)
