"""
Unit tests for MFAS outlier weights
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mfas_sfm.core.mfas import MFAS, MFASGraph, classify_edges, compute_outlier_weights
from mfas_sfm.core import compute_outlier_weights as quick_outlier_weights
from mfas_sfm.exceptions import InvalidOrderingError
from mfas_sfm.geometry.unit3 import Unit3


class TestOutlierWeights:
    """Test outlier weight evaluation"""

    def test_three_cycle(self):
        """Only the edge closing the cycle is an outlier"""
        mfas = MFAS(["A", "B", "C"], {("A", "B"): 1.0, ("B", "C"): 1.0, ("C", "A"): 1.0})

        weights = mfas.compute_outlier_weights()

        assert weights == {("A", "B"): 0.0, ("B", "C"): 0.0, ("C", "A"): 1.0}

    def test_single_edge(self):
        """Consistent edge scores zero"""
        mfas = MFAS(["A", "B"], {("A", "B"): 5.0})

        assert mfas.compute_outlier_weights() == {("A", "B"): 0.0}

    def test_empty_graph(self):
        """Empty graph, empty map, no error"""
        mfas = MFAS([], {})

        assert mfas.compute_ordering() == []
        assert mfas.compute_outlier_weights() == {}

    def test_explicit_ordering(self):
        """A given ordering is evaluated as-is"""
        graph = MFASGraph([0, 1, 2], {(0, 1): 2.0, (1, 2): 3.0, (0, 2): 0.5})

        weights = compute_outlier_weights(graph, [2, 1, 0])

        assert weights == {(0, 1): 2.0, (1, 2): 3.0, (0, 2): 0.5}

    def test_keys_follow_stored_direction(self):
        """Flipped edges are reported under their stored key"""
        mfas = MFAS([0, 1], {(0, 1): -3.0})

        weights = mfas.compute_outlier_weights([0, 1])

        assert weights == {(1, 0): 3.0}

    def test_consistency_with_ordering(self):
        """Zero exactly when tail precedes head, full weight otherwise"""
        rng = np.random.default_rng(11)
        nodes = list(range(20))
        edges = {
            (i, j): float(rng.normal())
            for i in nodes for j in nodes if i < j and rng.random() < 0.3
        }
        mfas = MFAS(nodes, edges)
        ordering = mfas.compute_ordering()
        position = {node: index for index, node in enumerate(ordering)}

        weights = mfas.compute_outlier_weights(ordering)

        assert weights.keys() == mfas.edge_weights.keys()
        for (tail, head), stored in mfas.edge_weights.items():
            if position[tail] < position[head]:
                assert weights[(tail, head)] == 0.0
            else:
                assert weights[(tail, head)] == stored

    def test_idempotent(self):
        """Repeated evaluation yields identical maps"""
        mfas = MFAS([0, 1, 2, 3], {(0, 1): 1.0, (1, 2): -0.5, (3, 0): 0.25, (2, 3): 2.0})
        ordering = mfas.compute_ordering()

        assert mfas.compute_outlier_weights(ordering) == mfas.compute_outlier_weights(ordering)

    def test_convenience_function(self):
        """Module level helper runs ordering and evaluation"""
        weights = quick_outlier_weights([0, 1, 2], {(0, 1): 1.0, (1, 2): 1.0, (2, 0): 1.0})

        assert weights == {(0, 1): 0.0, (1, 2): 0.0, (2, 0): 1.0}


class TestInvalidOrdering:
    """Test ordering validation"""

    def setup_method(self):
        self.graph = MFASGraph([0, 1, 2], {(0, 1): 1.0})

    def test_missing_node(self):
        with pytest.raises(InvalidOrderingError):
            compute_outlier_weights(self.graph, [0, 1])

    def test_duplicate_node(self):
        with pytest.raises(InvalidOrderingError):
            compute_outlier_weights(self.graph, [0, 1, 1])

    def test_unknown_node(self):
        with pytest.raises(InvalidOrderingError):
            compute_outlier_weights(self.graph, [0, 1, 5])


class TestClassifyEdges:
    """Test inlier/outlier split"""

    def test_default_threshold(self):
        """Any positive outlier weight marks an outlier"""
        inliers, outliers = classify_edges({(0, 1): 0.0, (1, 2): 0.3, (2, 0): 1e-9})

        assert inliers == {(0, 1)}
        assert outliers == {(1, 2), (2, 0)}

    def test_custom_threshold(self):
        inliers, outliers = classify_edges({(0, 1): 0.05, (1, 2): 0.3}, threshold=0.1)

        assert inliers == {(0, 1)}
        assert outliers == {(1, 2)}


class TestFromTranslations:
    """Test the translation averaging constructor"""

    def test_projected_problem(self):
        """Directions are projected, flipped and ordered along the axis"""
        centers = {0: [0.0, 0.0, 0.0], 1: [1.0, 0.5, 0.0], 2: [3.0, -1.0, 0.0]}
        translations = {
            (0, 1): Unit3.from_points(centers[0], centers[1]),
            (2, 1): Unit3.from_points(centers[2], centers[1]),
            (0, 2): Unit3.from_points(centers[0], centers[2]),
        }
        nodes = [0, 1, 2]

        mfas = MFAS.from_translations(nodes, translations, Unit3([1.0, 0.0, 0.0]))

        assert mfas.graph.nodes is nodes
        assert set(mfas.edge_weights) == {(0, 1), (1, 2), (0, 2)}
        assert all(w >= 0 for w in mfas.edge_weights.values())
        assert mfas.compute_ordering() == [0, 1, 2]
        assert all(w == 0.0 for w in mfas.compute_outlier_weights().values())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
