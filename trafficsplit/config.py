"""Configuration classes for trafficsplit components."""

from dataclasses import dataclass


@dataclass
class AllocationConfig:
    """Defaults for demand allocation across alternative routes."""

    # Decay exponent per unit of path weight (road length in feet)
    scale: float = 0.0003

    # Number of candidate routes requested per origin/destination pair
    k: int = 6

    def __post_init__(self) -> None:
        if not self.scale > 0:
            raise ValueError(f"scale must be positive, got {self.scale!r}")
        if isinstance(self.k, bool) or not isinstance(self.k, int) or self.k < 1:
            raise ValueError(f"k must be a positive integer, got {self.k!r}")


# Global configuration instance
ALLOCATION_CONFIG = AllocationConfig()
