"""Box-constraint layout engine with incremental relayout, flex, stack and single-child layouts."""

__version__ = "0.1.0"
__all__ = ["basic", "flex", "geometry", "layouter", "stack"]