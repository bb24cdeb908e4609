import logging
import cv2
import numpy as np
from fastapi import FastAPI, File, UploadFile, Query, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .config import CONTOUR_THRESH, SEGMENT_DEFAULTS
from .core import MODES, extract_segments
from .types import WidthBudget
from .width import METRICS

logger = logging.getLogger(__name__)

app = FastAPI(title="Fuzzy Segment API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def decode_upload_to_bgr(upload: UploadFile) -> np.ndarray:
    data = upload.file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty file.")
    arr = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(arr, cv2.IMREAD_COLOR)
    if img is None:
        raise HTTPException(status_code=400, detail="Could not decode image. Provide a valid JPG/PNG.")
    return img


@app.post("/segments")
def segments(
    file: UploadFile = File(...),
    width: str = Query(
        f'{SEGMENT_DEFAULTS["width_numerator"]}/{SEGMENT_DEFAULTS["width_denominator"]}',
        description='Width budget as "p/q", e.g. "3/2"',
    ),
    mode: str = Query(SEGMENT_DEFAULTS["mode"], description=f"One of {MODES}"),
    metric: str = Query(SEGMENT_DEFAULTS["metric"], description=f"One of {METRICS}"),
    min_contour_length: int = Query(CONTOUR_THRESH["min_contour_length"], ge=1),
):
    try:
        budget = WidthBudget.parse(width)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if mode not in MODES:
        raise HTTPException(status_code=400, detail=f"mode must be one of {MODES}")
    if metric not in METRICS:
        raise HTTPException(status_code=400, detail=f"metric must be one of {METRICS}")

    img = decode_upload_to_bgr(file)
    logger.info("segmenting upload with width < %s, mode=%s, metric=%s", budget, mode, metric)

    out_json = extract_segments(
        img,
        width_numerator=budget.numerator,
        width_denominator=budget.denominator,
        mode=mode,
        metric=metric,
        thresh={"min_contour_length": min_contour_length},
    )
    return JSONResponse(out_json)
