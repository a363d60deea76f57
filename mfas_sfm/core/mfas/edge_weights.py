"""
Edge weight construction for MFAS

Turns signed pairwise measurements into directed, non-negative edge weights:
- Translation directions are projected onto a single reference direction
- Negative weights are flipped, (u, v) -> w < 0 becomes (v, u) -> -w
- A weight of exactly zero keeps its measured direction
"""

import math
import logging
from typing import Dict, Hashable, Mapping, Tuple, Union

import numpy as np

from ...exceptions import DegenerateDirectionError, GraphValidationError
from ...geometry.unit3 import Unit3

logger = logging.getLogger(__name__)

KeyPair = Tuple[Hashable, Hashable]
DirectionLike = Union[Unit3, np.ndarray]
TranslationEdges = Mapping[KeyPair, DirectionLike]


def orient_edge(u: Hashable, v: Hashable, w: float) -> Tuple[KeyPair, float]:
    """Return the stored key and non-negative weight for a signed measurement"""
    if w >= 0:
        # + 0.0 turns -0.0 into 0.0
        return (u, v), float(w) + 0.0
    return (v, u), float(-w)


def normalize_edge_weights(edge_weights: Mapping[KeyPair, float]) -> Dict[KeyPair, float]:
    """
    Flip negatively weighted edges so that every stored weight is >= 0

    Args:
        edge_weights: {(u, v): signed weight}, at most one entry per unordered pair

    Returns:
        {(tail, head): non-negative weight}

    Raises:
        GraphValidationError: two entries describe the same unordered pair
        DegenerateDirectionError: a weight is NaN or infinite
    """
    normalized: Dict[KeyPair, float] = {}

    for (u, v), w in edge_weights.items():
        w = float(w)
        if not math.isfinite(w):
            raise DegenerateDirectionError(f"Edge ({u}, {v}) has non-finite weight {w}")

        key, weight = orient_edge(u, v, w)
        if key in normalized or (key[1], key[0]) in normalized:
            raise GraphValidationError(f"Duplicate measurement for node pair ({u}, {v})")
        normalized[key] = weight

    return normalized


def build_edge_weights(
    relative_translations: TranslationEdges,
    projection_direction: DirectionLike,
) -> Dict[KeyPair, float]:
    """
    Project translation directions onto a reference direction

    Args:
        relative_translations: {(u, v): direction from u to v}
        projection_direction: Reference axis for this 1D problem

    Returns:
        {(tail, head): non-negative projected weight}, one entry per measured pair

    Raises:
        DegenerateDirectionError: zero-magnitude or non-finite direction
        GraphValidationError: duplicate measurement of one node pair
    """
    axis = Unit3.coerce(projection_direction)

    signed = {}
    for key, direction in relative_translations.items():
        signed[key] = Unit3.coerce(direction).dot(axis)

    weights = normalize_edge_weights(signed)

    num_flipped = sum(1 for key in signed if key not in weights)
    logger.debug(
        f"Projected {len(weights)} edges onto {axis} ({num_flipped} flipped)"
    )
    return weights
