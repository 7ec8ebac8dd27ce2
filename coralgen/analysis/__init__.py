"""Skeleton analysis."""

from .skeleton_metrics import skeleton_metrics, count_loops

__all__ = ["skeleton_metrics", "count_loops"]
