# app.py
import logging
import os
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from schemas import ExifSummary, ParseRequest, ReviewResponse
from services.openai_review import (
    ImageTooLargeError,
    ReviewError,
    UnsupportedImageError,
    check_image_size,
    review_photo,
)
from services.review_parser import parse_model_output

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("photo_review.app")

app = FastAPI(title="Photo critique API")


@app.get("/health", response_class=PlainTextResponse)
def health():
    return "ok"


@app.get("/up", response_class=PlainTextResponse)
def up():
    return "ok"


def _parse_exif(raw: Optional[str]) -> Optional[ExifSummary]:
    if not raw:
        return None
    try:
        return ExifSummary.model_validate_json(raw)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"invalid exif: {e}")


# --- Review endpoint -----------------------------------------------------
@app.post("/review", response_model=ReviewResponse)
async def review(file: UploadFile = File(...), exif: Optional[str] = Form(None)):
    """
    Send one uploaded photo (plus optional EXIF JSON) to the vision model
    and return the title, the raw critique body and its parsed sections.
    """
    summary = _parse_exif(exif)
    mime_type = file.content_type or "image/jpeg"

    try:
        # Reject oversize uploads before pulling them into memory.
        if file.size is not None:
            check_image_size(file.size)
        data = await file.read()
        return await run_in_threadpool(review_photo, data, mime_type, summary)
    except UnsupportedImageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ImageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ReviewError as e:
        logger.exception(f"review failed for {file.filename}")
        raise HTTPException(status_code=502, detail=f"review failed: {e}")


# Re-parse stored critique text without another model call.
@app.post("/parse", response_model=ReviewResponse)
def parse(req: ParseRequest):
    return parse_model_output(req.text)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=int(os.getenv("PORT", 8001)), reload=True)
