"""
Unit direction on the 2-sphere

Minimal direction primitive used to turn relative camera translation
directions into scalar MFAS edge weights.
"""

import numpy as np
from typing import Optional, Sequence, Union

from ..exceptions import DegenerateDirectionError

ArrayLike = Union[Sequence[float], np.ndarray]


class Unit3:
    """
    Unit-norm 3D direction

    Stored as a normalized float64 numpy vector. Instances are treated as
    immutable; `point3()` hands out copies.
    """

    __slots__ = ("_p",)

    def __init__(self, vector: ArrayLike):
        """
        Args:
            vector: Any non-zero 3-vector, normalized on construction

        Raises:
            DegenerateDirectionError: zero-norm or non-finite input
        """
        p = np.asarray(vector, dtype=np.float64).reshape(-1)
        if p.shape != (3,):
            raise ValueError(f"Unit3 expects a 3-vector, got shape {p.shape}")
        if not np.all(np.isfinite(p)):
            raise DegenerateDirectionError(f"Direction has non-finite components: {p}")

        norm = np.linalg.norm(p)
        if norm == 0.0:
            raise DegenerateDirectionError("Cannot build a direction from a zero-magnitude vector")

        self._p = p / norm
        self._p.flags.writeable = False

    @classmethod
    def from_points(cls, a: ArrayLike, b: ArrayLike) -> "Unit3":
        """Direction pointing from point a to point b"""
        return cls(np.asarray(b, dtype=np.float64) - np.asarray(a, dtype=np.float64))

    @classmethod
    def coerce(cls, value: Union["Unit3", ArrayLike]) -> "Unit3":
        """Return value unchanged if already a Unit3, otherwise normalize it"""
        if isinstance(value, Unit3):
            return value
        return cls(value)

    def point3(self) -> np.ndarray:
        """Unit vector as a (3,) array"""
        return self._p.copy()

    def basis(self) -> np.ndarray:
        """
        Orthonormal basis of the tangent plane at this direction

        The first basis vector is the cross product with the coordinate axis
        of smallest absolute component, which keeps the choice well
        conditioned and deterministic.

        Returns:
            (3, 2) matrix whose columns span the tangent plane
        """
        axis = np.zeros(3)
        axis[int(np.argmin(np.abs(self._p)))] = 1.0

        b1 = np.cross(self._p, axis)
        b1 /= np.linalg.norm(b1)
        b2 = np.cross(self._p, b1)
        return np.column_stack([b1, b2])

    def dot(
        self,
        other: "Unit3",
        H1: Optional[np.ndarray] = None,
        H2: Optional[np.ndarray] = None,
    ) -> float:
        """
        Scalar projection of this direction onto another one

        Args:
            other: Direction to project onto
            H1: Optional (1, 2) output slot, filled in place with the
                derivative w.r.t. the tangent space of self
            H2: Optional (1, 2) output slot, filled in place with the
                derivative w.r.t. the tangent space of other

        Returns:
            Cosine of the angle between the two directions
        """
        q = other._p
        if H1 is not None:
            H1[...] = (q @ self.basis()).reshape(H1.shape)
        if H2 is not None:
            H2[...] = (self._p @ other.basis()).reshape(H2.shape)
        return float(self._p @ q)

    def equals(self, other: "Unit3", tol: float = 1e-9) -> bool:
        """Component-wise comparison within tolerance"""
        return bool(np.allclose(self._p, other._p, rtol=0.0, atol=tol))

    def __neg__(self) -> "Unit3":
        return Unit3(-self._p)

    def __repr__(self) -> str:
        x, y, z = self._p
        return f"Unit3({x:.6f}, {y:.6f}, {z:.6f})"
