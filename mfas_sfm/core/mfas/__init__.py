"""
Minimum Feedback Arc Set (MFAS) module

Computes a 1D ordering of graph nodes that keeps the total weight of backward
edges small, and scores edges against that ordering.

Key Features:
- Edge weights from translation directions projected on an axis
- Deterministic greedy ordering (lowest node id wins ties)
- Per-edge outlier weights

Usage:
    from mfas_sfm.core.mfas import MFAS

    mfas = MFAS.from_translations(nodes, relative_translations, projection_direction)
    ordering = mfas.compute_ordering()
    outlier_weights = mfas.compute_outlier_weights(ordering)
"""

from .config import OrderingConfig, ProjectionConfig, TranslationFilterConfig
from .edge_weights import build_edge_weights, normalize_edge_weights
from .graph import MFASGraph
from .ordering import GreedyOrdering, compute_ordering
from .outliers import classify_edges, compute_outlier_weights
from .solver import MFAS

__all__ = [
    # Configuration
    "OrderingConfig",
    "ProjectionConfig",
    "TranslationFilterConfig",

    # Graph model
    "MFASGraph",
    "build_edge_weights",
    "normalize_edge_weights",

    # Ordering and evaluation
    "GreedyOrdering",
    "compute_ordering",
    "compute_outlier_weights",
    "classify_edges",

    # Solver
    "MFAS",
]
