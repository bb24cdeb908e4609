from typing import Dict, List, Sequence, Tuple
import matplotlib.pyplot as plt
import numpy as np
import cv2

from .config import DRAW_STYLE
from .types import ParallelStrip, Segment


def visualize_masks(
    masks: Dict[str, np.ndarray],
    cols: int = 3,
    figsize: tuple = (12, 8),
    title: str = "Masks"
):
    names = list(masks.keys())
    n = len(names)
    rows = (n + cols - 1) // cols

    fig, axes = plt.subplots(rows, cols, figsize=figsize)
    axes = np.array(axes).reshape(-1)

    for ax in axes[n:]:
        ax.axis("off")

    for i, name in enumerate(names):
        ax = axes[i]
        ax.imshow(masks[name], cmap="gray")
        ax.set_title(name)
        ax.axis("off")

    fig.suptitle(title, fontsize=14)
    plt.tight_layout()
    plt.show()


def strip_corners(
    strip: ParallelStrip,
    p_start: Tuple[float, float],
    p_end: Tuple[float, float],
) -> np.ndarray:
    """Four corners of the strip clipped to the extent of [p_start, p_end], as float (x, y)."""
    a, b = float(strip.normal[0]), float(strip.normal[1])
    nn = a * a + b * b
    lo, hi = float(strip.mu), float(strip.upper)

    def project(q, c):
        t = (c - (a * q[0] + b * q[1])) / nn
        return (q[0] + t * a, q[1] + t * b)

    return np.array([
        project(p_start, lo), project(p_end, lo),
        project(p_end, hi), project(p_start, hi),
    ], dtype=np.float64)


def draw_segments_on_image(
    image: np.ndarray,
    detections: Sequence[Tuple[Sequence[Tuple[int, int]], List[Segment]]],
    scale: float = 1.0,
    draw_strips: bool = True,
) -> np.ndarray:
    """Overlay contours and their segments; points are in the (resized) frame given by `scale`."""
    vis = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR) if image.ndim == 2 else image.copy()

    def px(q):
        return (int(round(q[0] / scale)), int(round(q[1] / scale)))

    for pts, segs in detections:
        if not pts:
            continue
        poly = np.array([px(p) for p in pts], dtype=np.int32).reshape(-1, 1, 2)
        cv2.polylines(vis, [poly], True, DRAW_STYLE["contour"], 1)
        n = len(pts)
        for s in segs:
            p0, p1 = pts[s.first % n], pts[s.last % n]
            if draw_strips:
                corners = strip_corners(s.strip, p0, p1)
                quad = np.array([px(c) for c in corners], dtype=np.int32).reshape(-1, 1, 2)
                cv2.polylines(vis, [quad], True, DRAW_STYLE["strip"], 1, cv2.LINE_AA)
            cv2.line(vis, px(p0), px(p1), DRAW_STYLE["segment"], 2, cv2.LINE_AA)
            cv2.circle(vis, px(p0), 2, DRAW_STYLE["endpoint"], -1)
            cv2.circle(vis, px(p1), 2, DRAW_STYLE["endpoint"], -1)

    return vis


def show_image(img_bgr: np.ndarray, title: str) -> None:
    vis_rgb = cv2.cvtColor(img_bgr, cv2.COLOR_BGR2RGB)
    plt.figure(figsize=(14, 10))
    plt.imshow(vis_rgb)
    plt.title(title)
    plt.axis("off")
    plt.show()
