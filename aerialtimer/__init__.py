"""AerialTimer: interval workout timer for aerial-arts training."""

__version__ = "0.1.0"
