"""
1DSfM outlier rejection for relative translation directions

Runs one MFAS instance per sampled projection direction:
- Project every relative translation direction onto the direction
- Order cameras along the 1D axis and score each edge's inconsistency
- Average outlier weights over all directions

Edges whose average outlier weight exceeds the threshold are rejected before
translation averaging.

Reference: Wilson & Snavely, "Robust Global Translations with 1DSfM", ECCV 2014
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Sequence, Set, Tuple

import numpy as np
from tqdm import tqdm

from ..geometry.unit3 import Unit3
from .mfas.config import TranslationFilterConfig
from .mfas.edge_weights import TranslationEdges
from .mfas.outliers import classify_edges
from .mfas.solver import MFAS

logger = logging.getLogger(__name__)

KeyPair = Tuple[Hashable, Hashable]


@dataclass
class TranslationFilterResult:
    """Outcome of 1DSfM filtering, keyed by the measured (i, j) pairs"""

    outlier_weights: Dict[KeyPair, float] = field(default_factory=dict)
    inliers: Set[KeyPair] = field(default_factory=set)
    outliers: Set[KeyPair] = field(default_factory=set)
    projection_directions: List[Unit3] = field(default_factory=list)

    def inlier_translations(self, relative_translations: TranslationEdges) -> Dict[KeyPair, Unit3]:
        """Subset of the measurements that passed the filter"""
        return {
            key: Unit3.coerce(direction)
            for key, direction in relative_translations.items()
            if key in self.inliers
        }

    def inlier_ratio(self) -> float:
        total = len(self.inliers) + len(self.outliers)
        return len(self.inliers) / total if total > 0 else 0.0


def sample_projection_directions(
    relative_translations: TranslationEdges,
    num_directions: int,
    rng: np.random.Generator,
    method: str = "measurements",
) -> List[Unit3]:
    """
    Sample projection directions for the 1D problems

    Args:
        relative_translations: {(i, j): direction}
        num_directions: Number of directions to return
        rng: numpy random generator
        method: "measurements" picks measured directions at random, which
            concentrates projections where the data is; "uniform" samples the
            sphere isotropically

    Returns:
        List of num_directions Unit3
    """
    if method == "uniform":
        samples = rng.normal(size=(num_directions, 3))
        return [Unit3(sample) for sample in samples]

    if method != "measurements":
        raise ValueError(f"Invalid projection method: {method}")

    measured = [Unit3.coerce(relative_translations[key]) for key in sorted(relative_translations)]
    if not measured:
        return []

    replace = len(measured) < num_directions
    indices = rng.choice(len(measured), size=num_directions, replace=replace)
    return [measured[index] for index in indices]


class TranslationOutlierFilter:
    """
    1DSfM relative translation outlier filter

    Every projection gets its own MFAS instance. All instances share the same
    borrowed node list and are independent otherwise, so they can run on a
    thread pool.
    """

    def __init__(self, config: Optional[TranslationFilterConfig] = None):
        """
        Args:
            config: TranslationFilterConfig or None (uses defaults)
        """
        self.config = config or TranslationFilterConfig()
        self.logger = logging.getLogger(__name__)

    def run(
        self,
        relative_translations: TranslationEdges,
        nodes: Optional[Sequence[Hashable]] = None,
        projection_directions: Optional[Sequence[Unit3]] = None,
    ) -> TranslationFilterResult:
        """
        Filter relative translation measurements

        Args:
            relative_translations: {(i, j): direction from camera i to camera j}
            nodes: Camera keys; defaults to every key used by a measurement
            projection_directions: Explicit directions; sampled from config if None

        Returns:
            TranslationFilterResult keyed by the measured (i, j) pairs

        Raises:
            ValueError: projection_directions is given but empty
        """
        if not relative_translations:
            self.logger.warning("No relative translations to filter")
            return TranslationFilterResult()

        if nodes is None:
            nodes = sorted({node for key in relative_translations for node in key})

        if projection_directions is None:
            projection = self.config.projection
            rng = np.random.default_rng(projection.seed)
            projection_directions = sample_projection_directions(
                relative_translations, projection.num_directions, rng, projection.method
            )
        elif len(projection_directions) == 0:
            raise ValueError("At least one projection direction is required")
        projection_directions = [Unit3.coerce(d) for d in projection_directions]

        self.logger.info(
            f"Running 1DSfM on {len(nodes)} nodes, {len(relative_translations)} edges, "
            f"{len(projection_directions)} projections"
        )

        per_direction = self._run_projections(nodes, relative_translations, projection_directions)
        outlier_weights = self._average(relative_translations, per_direction)

        inliers, outliers = classify_edges(outlier_weights, self.config.outlier_threshold)
        result = TranslationFilterResult(
            outlier_weights=outlier_weights,
            inliers=inliers,
            outliers=outliers,
            projection_directions=list(projection_directions),
        )

        self.logger.info(
            f"1DSfM kept {len(result.inliers)}/{len(outlier_weights)} edges "
            f"(threshold {self.config.outlier_threshold})"
        )
        return result

    def _run_projections(
        self,
        nodes: Sequence[Hashable],
        relative_translations: TranslationEdges,
        projection_directions: Sequence[Unit3],
    ) -> List[Dict[KeyPair, float]]:
        """Outlier weights keyed by measured pair, one dict per direction (in input order)"""
        results: List[Optional[Dict[KeyPair, float]]] = [None] * len(projection_directions)
        show_progress = self.config.show_progress

        if self.config.max_workers == 1:
            iterator = tqdm(
                enumerate(projection_directions),
                total=len(projection_directions),
                desc="1DSfM projections",
                disable=not show_progress,
            )
            for index, direction in iterator:
                results[index] = self._run_single(nodes, relative_translations, direction)
            return results

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = {
                executor.submit(self._run_single, nodes, relative_translations, direction): index
                for index, direction in enumerate(projection_directions)
            }

            for future in tqdm(as_completed(futures), total=len(futures),
                               desc="1DSfM projections", disable=not show_progress):
                results[futures[future]] = future.result()

        return results

    def _run_single(
        self,
        nodes: Sequence[Hashable],
        relative_translations: TranslationEdges,
        direction: Unit3,
    ) -> Dict[KeyPair, float]:
        """Solve one 1D problem and key its outlier weights by measured pair"""
        mfas = MFAS.from_translations(nodes, relative_translations, direction, self.config.ordering)
        stored = mfas.compute_outlier_weights()

        weights = {}
        for i, j in relative_translations:
            weights[(i, j)] = stored[(i, j)] if (i, j) in stored else stored[(j, i)]

        self.logger.debug(
            f"Projection {direction}: {sum(1 for w in weights.values() if w > 0)} "
            f"edges inconsistent"
        )
        return weights

    @staticmethod
    def _average(
        relative_translations: TranslationEdges,
        per_direction: List[Dict[KeyPair, float]],
    ) -> Dict[KeyPair, float]:
        """Mean outlier weight per measured pair, summed in direction order"""
        averaged = {}
        for key in relative_translations:
            averaged[key] = sum(weights[key] for weights in per_direction) / len(per_direction)
        return averaged

