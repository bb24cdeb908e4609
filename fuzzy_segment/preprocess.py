from typing import Optional, Tuple
import cv2
import numpy as np


def maybe_resize(img: np.ndarray, max_side: int = 2200) -> Tuple[np.ndarray, float]:
    h, w = img.shape[:2]
    scale = 1.0
    m = max(h, w)
    if m > max_side:
        scale = max_side / float(m)
        # nearest keeps a binary mask binary
        img = cv2.resize(img, (int(w * scale), int(h * scale)), interpolation=cv2.INTER_NEAREST)
    return img, scale


def to_gray(img: np.ndarray) -> np.ndarray:
    if img.ndim == 2:
        return img
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)


def binarize(img: np.ndarray, threshold: Optional[int] = None, invert: bool = True) -> np.ndarray:
    """Foreground mask (255) of an image; Otsu picks the threshold when none is given."""
    gray = to_gray(img)
    mode = cv2.THRESH_BINARY_INV if invert else cv2.THRESH_BINARY
    if threshold is None:
        _, mask = cv2.threshold(gray, 0, 255, mode | cv2.THRESH_OTSU)
    else:
        _, mask = cv2.threshold(gray, int(threshold), 255, mode)
    return mask


def morph_close_open(mask: np.ndarray, k: int = 3) -> np.ndarray:
    if k <= 1:
        return mask
    kernel = cv2.getStructuringElement(cv2.MORPH_ELLIPSE, (k, k))
    mask = cv2.morphologyEx(mask, cv2.MORPH_CLOSE, kernel, iterations=1)
    mask = cv2.morphologyEx(mask, cv2.MORPH_OPEN, kernel, iterations=1)
    return mask


def remove_small_blobs(mask: np.ndarray, min_area: int) -> np.ndarray:
    num, labels, stats, _ = cv2.connectedComponentsWithStats(mask, connectivity=8)
    out = np.zeros_like(mask)
    for i in range(1, num):
        area = int(stats[i, cv2.CC_STAT_AREA])
        if area >= min_area:
            out[labels == i] = 255
    return out
