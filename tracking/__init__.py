"""Runtime function-usage tracking."""

from .runtime import counts, flush, reset, t

__all__ = ["t", "counts", "flush", "reset"]
