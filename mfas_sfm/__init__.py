"""
MFAS for Structure-from-Motion
Minimum feedback arc set ordering and 1DSfM translation outlier rejection
"""

__version__ = "0.1.0"


# Lazy imports - only import when actually used
def __getattr__(name):
    """Lazy import for module attributes"""

    # Core components
    if name == "MFAS":
        from .core.mfas.solver import MFAS
        return MFAS
    elif name == "MFASGraph":
        from .core.mfas.graph import MFASGraph
        return MFASGraph
    elif name == "GreedyOrdering":
        from .core.mfas.ordering import GreedyOrdering
        return GreedyOrdering
    elif name == "TranslationOutlierFilter":
        from .core.translation_filter import TranslationOutlierFilter
        return TranslationOutlierFilter
    elif name == "TranslationFilterConfig":
        from .core.mfas.config import TranslationFilterConfig
        return TranslationFilterConfig
    elif name == "Unit3":
        from .geometry.unit3 import Unit3
        return Unit3
    # Convenience functions
    elif name in ("compute_ordering", "compute_outlier_weights", "filter_outliers"):
        from . import core
        return getattr(core, name)
    # Utilities
    elif name == "OrderingMetrics":
        from .utils.ordering_metrics import OrderingMetrics
        return OrderingMetrics

    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    # Core components
    "MFAS",
    "MFASGraph",
    "GreedyOrdering",
    "TranslationOutlierFilter",
    "TranslationFilterConfig",
    "Unit3",

    # Convenience functions
    "compute_ordering",
    "compute_outlier_weights",
    "filter_outliers",

    # Utilities
    "OrderingMetrics",
]
