# services/openai_review.py
import logging
import os
from typing import Optional

from openai import OpenAI, OpenAIError

from prompts import build_review_prompt
from schemas import ExifSummary, ReviewResponse
from services.review_parser import parse_model_output
from services.utils import to_data_url

logger = logging.getLogger("photo_review.openai")

OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4.1-mini")
OPENAI_FALLBACK_MODEL = os.getenv("OPENAI_FALLBACK_MODEL", "gpt-4o-mini")
MAX_IMAGE_MB = float(os.getenv("MAX_IMAGE_MB", "8"))
TEMPERATURE = 0.4

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")


class ReviewError(Exception):
    pass


class UnsupportedImageError(ReviewError):
    pass


class ImageTooLargeError(ReviewError):
    pass


def _client() -> OpenAI:
    key = os.getenv("OPENAI_API_KEY", "")
    if not key:
        raise ReviewError("Missing OPENAI_API_KEY in environment")
    return OpenAI(api_key=key)


def _call_openai(model: str, prompt: str, image_url: str) -> str:
    resp = _client().chat.completions.create(
        model=model,
        temperature=TEMPERATURE,
        messages=[
            {"role": "user", "content": [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image_url}}
            ]}
        ],
    )
    return (resp.choices[0].message.content or "").strip()


def _models():
    models = [OPENAI_MODEL]
    if OPENAI_FALLBACK_MODEL and OPENAI_FALLBACK_MODEL != OPENAI_MODEL:
        models.append(OPENAI_FALLBACK_MODEL)
    return models


def max_image_bytes() -> int:
    return int(MAX_IMAGE_MB * 1024 * 1024)


def check_image_size(size: int) -> None:
    if size > max_image_bytes():
        raise ImageTooLargeError(f"Image exceeds {MAX_IMAGE_MB:g}MB limit")


def check_image(image: bytes, mime_type: str) -> None:
    if mime_type not in ALLOWED_MIME_TYPES:
        raise UnsupportedImageError(f"Unsupported image type: {mime_type}")
    check_image_size(len(image))


def review_photo(image: bytes, mime_type: str, exif: Optional[ExifSummary] = None) -> ReviewResponse:
    """
    Ask the vision model for a critique of `image` and parse the answer.
    Tries OPENAI_MODEL first and OPENAI_FALLBACK_MODEL on API errors.
    """
    check_image(image, mime_type)

    prompt = build_review_prompt(exif)
    image_url = to_data_url(image, mime_type)

    last_err = None
    for model in _models():
        logger.info(f"Calling OpenAI model={model}, prompt_chars={len(prompt)}, image_bytes={len(image)}")
        try:
            txt = _call_openai(model, prompt, image_url)
        except OpenAIError as e:
            logger.warning(f"OpenAI request failed for model={model}: {type(e).__name__}: {e}")
            last_err = e
            continue
        if not txt:
            raise ReviewError("No review text returned from model")
        return parse_model_output(txt)

    raise ReviewError(f"OpenAI review failed: {last_err}")
