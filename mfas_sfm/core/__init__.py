"""
Core MFAS components
"""

from .mfas import MFAS, MFASGraph, GreedyOrdering, OrderingConfig, TranslationFilterConfig
from .translation_filter import TranslationOutlierFilter, TranslationFilterResult


# Convenience functions for direct usage
def compute_ordering(nodes, edge_weights, config=None):
    """MFAS ordering of nodes from signed edge weights"""
    return MFAS(nodes, edge_weights, config).compute_ordering()


def compute_outlier_weights(nodes, edge_weights, config=None):
    """Outlier weights of the (sign-normalized) edges under the MFAS ordering"""
    return MFAS(nodes, edge_weights, config).compute_outlier_weights()


def filter_outliers(relative_translations, nodes=None, config=None):
    """Reject inconsistent relative translation directions with 1DSfM"""
    return TranslationOutlierFilter(config).run(relative_translations, nodes)


__all__ = [
    # Core classes
    "MFAS",
    "MFASGraph",
    "GreedyOrdering",
    "OrderingConfig",
    "TranslationFilterConfig",
    "TranslationOutlierFilter",
    "TranslationFilterResult",
    # Convenience functions
    "compute_ordering",
    "compute_outlier_weights",
    "filter_outliers",
]
