from typing import List, Tuple
import numpy as np
import cv2


def find_contours(mask: np.ndarray) -> List[np.ndarray]:
    # every boundary pixel is kept: the recognizer needs the digital contour, not its corners
    contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_NONE)
    return list(contours)


def contour_points(cnt: np.ndarray) -> List[Tuple[int, int]]:
    """(N,1,2) or (N,2) OpenCV contour -> list of integer (x, y) tuples."""
    pts = np.asarray(cnt).reshape(-1, 2)
    return [(int(x), int(y)) for x, y in pts]


def filter_by_length(contours: List[np.ndarray], min_length: int) -> List[np.ndarray]:
    return [c for c in contours if len(c) >= min_length]


def scale_points(points: List[Tuple[float, float]], scale: float) -> List[Tuple[float, float]]:
    if scale == 1.0:
        return list(points)
    return [(x / scale, y / scale) for x, y in points]
