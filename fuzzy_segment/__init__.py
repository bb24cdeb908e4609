"""Top-level package interface for fuzzy_segment.

Expose the recognizer, the contour segmentations and the image pipeline.
"""
from .recognizer import FuzzySegmentRecognizer, RecognizerStateError
from .scalar import INT64, INTEGER, RATIONAL, ScalarDomain, get_domain
from .segmentation import greedy_segmentation, maximal_segments
from .types import ParallelStrip, Segment, WidthBudget
from .core import extract_segments  # re-export

__all__ = [
    "FuzzySegmentRecognizer",
    "RecognizerStateError",
    "ScalarDomain",
    "INTEGER",
    "INT64",
    "RATIONAL",
    "get_domain",
    "greedy_segmentation",
    "maximal_segments",
    "ParallelStrip",
    "Segment",
    "WidthBudget",
    "extract_segments",
]
