from typing import Any, Dict, Tuple

# capacity of one recognizer (distinct points)
MAX_POINTS = 1_000_000

# CLI / HTTP defaults; the recognizer itself has no default budget
SEGMENT_DEFAULTS: Dict[str, Any] = {
    "width_numerator": 3,
    "width_denominator": 2,
    "metric": "euclidean",            # "euclidean" | "axis"
    "mode": "greedy",                 # "greedy" | "maximal"
    "domain": "int",                  # "int" | "int64" | "fraction"
}

CONTOUR_THRESH: Dict[str, Any] = {
    "binary_threshold": None,         # None -> Otsu
    "invert": True,                   # dark shapes on light background
    "morph_kernel": 3,
    "min_blob_area": 20,
    "min_contour_length": 8,
    "max_side": 2200,
}

DRAW_STYLE: Dict[str, Tuple[int, int, int]] = {
    "contour": (160, 160, 160),
    "segment": (0, 200, 0),
    "strip": (0, 140, 255),
    "endpoint": (0, 0, 255),
}
