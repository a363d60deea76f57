"""
Geometry primitives
"""

from .unit3 import Unit3

__all__ = ["Unit3"]
