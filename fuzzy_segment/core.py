import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple
import numpy as np

from .config import CONTOUR_THRESH, SEGMENT_DEFAULTS
from .geometry import contour_points, filter_by_length, find_contours, scale_points
from .preprocess import binarize, maybe_resize, morph_close_open, remove_small_blobs
from .scalar import get_domain
from .segmentation import greedy_segmentation, maximal_segments
from .types import Segment, WidthBudget
from .visualize import draw_segments_on_image, show_image, visualize_masks

logger = logging.getLogger(__name__)

MODES = ("greedy", "maximal")


def segment_contour(
        points: Sequence[Tuple[int, int]],
        width_numerator: int,
        width_denominator: int,
        mode: str = "greedy",
        metric: str = "euclidean",
        domain: str = "int",
        closed: bool = True,
    ) -> List[Segment]:
    """Decompose one contour; maximal segments always treat it as open."""
    if mode == "greedy":
        return greedy_segmentation(points, width_numerator, width_denominator,
                                   closed=closed, domain=get_domain(domain), metric=metric)
    if mode == "maximal":
        return maximal_segments(points, width_numerator, width_denominator,
                                domain=get_domain(domain), metric=metric)
    raise ValueError(f"Unknown segmentation mode '{mode}', expected one of {MODES}")


def segment_record(seg: Segment, points: Sequence[Tuple[int, int]], scale: float) -> Dict[str, Any]:
    n = len(points)
    ends = scale_points([points[seg.first % n], points[seg.last % n]], scale)
    rec = seg.to_dict()
    rec["start_point"] = [float(v) for v in ends[0]]
    rec["end_point"] = [float(v) for v in ends[1]]
    return rec


def extract_mask(
        image: np.ndarray,
        thresh: Optional[Dict[str, Any]] = None,
        stages: Optional[Dict[str, np.ndarray]] = None,
    ) -> Tuple[np.ndarray, float]:
    t = dict(CONTOUR_THRESH, **(thresh or {}))
    img, scale = maybe_resize(image, max_side=t["max_side"])
    raw = binarize(img, threshold=t["binary_threshold"], invert=t["invert"])
    closed = morph_close_open(raw, k=t["morph_kernel"])
    mask = remove_small_blobs(closed, min_area=t["min_blob_area"])
    if stages is not None:
        stages.update({"binary": raw, "close_open": closed, "mask": mask})
    return mask, scale


def extract_segments(
        image: np.ndarray,
        width_numerator: int = SEGMENT_DEFAULTS["width_numerator"],
        width_denominator: int = SEGMENT_DEFAULTS["width_denominator"],
        mode: str = SEGMENT_DEFAULTS["mode"],
        metric: str = SEGMENT_DEFAULTS["metric"],
        domain: str = SEGMENT_DEFAULTS["domain"],
        thresh: Optional[Dict[str, Any]] = None,
        debug: bool = False,
        return_segments: bool = False,
    ):
    budget = WidthBudget(width_numerator, width_denominator)
    if mode not in MODES:
        raise ValueError(f"Unknown segmentation mode '{mode}', expected one of {MODES}")
    t = dict(CONTOUR_THRESH, **(thresh or {}))

    H0, W0 = image.shape[:2]
    stages: Optional[Dict[str, np.ndarray]] = {} if debug else None
    mask, scale = extract_mask(image, t, stages)
    if debug:
        visualize_masks(stages, title="Binarization stages")
    contours = filter_by_length(find_contours(mask), t["min_contour_length"])
    logger.info("found %d contours (min length %d)", len(contours), t["min_contour_length"])

    results: List[Dict[str, Any]] = []
    detections: List[Tuple[List[Tuple[int, int]], List[Segment]]] = []
    for cid, cnt in enumerate(contours):
        pts = contour_points(cnt)
        segs = segment_contour(pts, width_numerator, width_denominator,
                               mode=mode, metric=metric, domain=domain, closed=(mode == "greedy"))
        logger.debug("contour %d: %d points -> %d segments", cid, len(pts), len(segs))
        detections.append((pts, segs))
        results.append({
            "id": cid,
            "length": len(pts),
            "closed": mode == "greedy",
            "segments": [segment_record(s, pts, scale) for s in segs],
        })

    if debug:
        vis = draw_segments_on_image(mask, detections)
        show_image(vis, title=f"{mode} fuzzy segments, width < {budget}")

    out_json = {
        "image_size": [W0, H0],
        "scale": scale,
        "budget": str(budget),
        "metric": metric,
        "mode": mode,
        "contours": results,
    }
    logger.info("extracted %d segments", sum(len(r["segments"]) for r in results))
    if return_segments:
        return out_json, detections
    return out_json
