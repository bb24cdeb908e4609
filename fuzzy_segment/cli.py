import sys
import os
import json
import cv2

from .config import SEGMENT_DEFAULTS
from .core import extract_segments
from .logging_config import setup_logging
from .types import WidthBudget
from .visualize import draw_segments_on_image

USAGE = 'Usage: fuzzy-segment "inputs/your_image.png" [width e.g. 3/2] [greedy|maximal]'


def main(argv=None):
    argv = sys.argv if argv is None else argv
    if len(argv) < 2:
        print(USAGE)
        sys.exit(2)

    in_path = argv[1]
    default_budget = f'{SEGMENT_DEFAULTS["width_numerator"]}/{SEGMENT_DEFAULTS["width_denominator"]}'
    budget = WidthBudget.parse(argv[2] if len(argv) > 2 else default_budget)
    mode = argv[3] if len(argv) > 3 else SEGMENT_DEFAULTS["mode"]

    setup_logging()

    img = cv2.imread(in_path, cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(f"Cannot read image: {in_path}")

    os.makedirs("outputs", exist_ok=True)
    base = os.path.splitext(os.path.basename(in_path))[0]
    json_path = os.path.join("outputs", f"{base}.json")
    vis_path = os.path.join("outputs", f"{base}.jpg")

    out_json, detections = extract_segments(
        img,
        width_numerator=budget.numerator,
        width_denominator=budget.denominator,
        mode=mode,
        return_segments=True,
    )

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(out_json, f, ensure_ascii=False, indent=2)
    print(f"[OK] Wrote JSON to: {json_path}")

    vis = draw_segments_on_image(img, detections, scale=out_json["scale"])
    ok = cv2.imwrite(vis_path, vis)
    if not ok:
        raise RuntimeError(f"Failed to write image: {vis_path}")
    print(f"[OK] Wrote visualization to: {vis_path}")


if __name__ == "__main__":
    main()
