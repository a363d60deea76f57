"""
Configuration management for MFAS ordering and 1DSfM outlier filtering

Uses dataclasses for type safety and validation.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any


ORDERING_METHODS = ("heap", "scan")
PROJECTION_METHODS = ("measurements", "uniform")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class OrderingConfig:
    """Configuration for the greedy ordering engine"""

    # Node selection strategy: "heap" (O((N+E) log N)) or "scan" (O(N^2 + E)).
    # Both produce the same ordering.
    method: str = "heap"

    def __post_init__(self):
        if self.method not in ORDERING_METHODS:
            raise ValueError(f"Invalid ordering method: {self.method}")


@dataclass
class ProjectionConfig:
    """Configuration for sampling 1D projection directions"""

    # Number of MFAS instances (one per projection direction)
    num_directions: int = 48

    # "measurements": sample measured translation directions
    # "uniform": isotropic random directions on the sphere
    method: str = "measurements"

    # Seed for reproducible sampling (None = fresh entropy)
    seed: Optional[int] = None

    def __post_init__(self):
        if self.num_directions < 1:
            raise ValueError(f"num_directions must be >= 1, got {self.num_directions}")
        if self.method not in PROJECTION_METHODS:
            raise ValueError(f"Invalid projection method: {self.method}")


@dataclass
class TranslationFilterConfig:
    """Main configuration for 1DSfM translation outlier rejection"""

    # Sub-configurations
    ordering: OrderingConfig = field(default_factory=OrderingConfig)
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)

    # Edges with average outlier weight >= threshold are rejected
    outlier_threshold: float = 0.1

    # Worker threads for running projections (1 = sequential)
    max_workers: int = 1

    # tqdm progress bar over projection directions
    show_progress: bool = False

    # Logging level for scripts driving the filter: "DEBUG", "INFO", "WARNING", "ERROR"
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration"""
        if self.outlier_threshold < 0.0:
            raise ValueError(f"outlier_threshold must be non-negative, got {self.outlier_threshold}")

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "TranslationFilterConfig":
        """Create config from dictionary (for CLI/JSON loading)"""
        config_dict = dict(config_dict)

        # Nested configs
        ordering = OrderingConfig(**config_dict.pop("ordering", {}))
        projection = ProjectionConfig(**config_dict.pop("projection", {}))

        return cls(
            ordering=ordering,
            projection=projection,
            **config_dict
        )

    def to_dict(self) -> Dict[str, Any]:
        """Export config to dictionary"""
        return {
            "ordering": dict(self.ordering.__dict__),
            "projection": dict(self.projection.__dict__),
            "outlier_threshold": self.outlier_threshold,
            "max_workers": self.max_workers,
            "show_progress": self.show_progress,
            "log_level": self.log_level,
        }
