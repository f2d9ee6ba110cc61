import json
from typing import Optional

from schemas import ExifSummary

# Headings the parser keys on. Change them together with services/review_parser.py.
TITLE_HEADING = "Title"
GOOD_HEADING = "The Good"
NEEDS_IMPROVEMENT_HEADING = "Needs Improvement"
TECHNICAL_HEADING = "Technical Suggestions"
ARTISTIC_HEADING = "Artistic Suggestions"
SCORE_HEADING = "Overall Score"

PERSONA = (
    "You are a photography coach. The user is providing a photo for learning "
    "the skill of photography"
)

COACHING_RULES = [
    "Be positive but not flattering. Be direct and specific about weaknesses. Avoid simply describing the photo.",
    "Focus on actionable technical adjustments (exposure triangle, focus mode, metering, white balance, stabilization, etc).",
    "Avoid suggestions that require changing the scene or subjects. Assume the photo is reviewed after the fact.",
    "When you mention a problem, pair it with a concrete setting adjustment or technique to address it next time.",
    "Examples of actionable fixes:",
    "- If the subject is blurred from motion, recommend a faster shutter speed (and suggest opening aperture or raising ISO to keep exposure).",
    "- If the image is noisy from high ISO, suggest lowering ISO and compensating with a wider aperture or slower shutter speed (if stability allows).",
    "- If depth of field is too shallow, suggest stopping down the aperture (and adjust shutter/ISO to keep exposure).",
    "- If highlights are blown, suggest using a faster shutter speed or lower ISO, or dialing negative exposure compensation.",
    "- If camera shake is visible, suggest a faster shutter speed, stabilization, or a tripod; consider the 1/focal-length rule as a minimum.",
]

SCORE_CALIBRATION = [
    "Score calibration guide:",
    "- 9–10: exceptional, award‑caliber or portfolio‑grade.",
    "- 7–8: strong image with clear intent and solid execution.",
    "- 5–6: average/casual result with noticeable flaws.",
    "- 3–4: weak execution; multiple technical/compositional issues.",
    "- 1–2: severely flawed or unusable.",
    "Use the calibration to avoid under‑scoring truly excellent work.",
    "Do not default to 6/10. If the photo is strong with only minor issues, score 8–10.",
    "Reserve 5–6 for clearly average snapshots with notable issues.",
    "Weigh the severity of the weaknesses: if fundamentals (composition, lighting, color, subject) are strong, "
    "score higher even with minor issues; if fundamentals are weak, lower the score accordingly.",
]

OUTPUT_FORMAT = [
    "Return a structured critique with these headings exactly:",
    f"{TITLE_HEADING}: (a short descriptive title for the image)",
    f"{GOOD_HEADING}: (bullet points)",
    f"{NEEDS_IMPROVEMENT_HEADING}: (bullet points, be objective)",
    f"{TECHNICAL_HEADING}: (bullet points, camera settings or mechanics)",
    f"{ARTISTIC_HEADING}: (bullet points, more creative/subjective)",
    f"{SCORE_HEADING}: x/10 (single line)",
]


def _exif_json(exif: ExifSummary) -> str:
    # Compact camelCase JSON; 50.0 renders as 50.
    data = {
        k: int(v) if isinstance(v, float) and v.is_integer() else v
        for k, v in exif.model_dump(by_alias=True, exclude_none=True).items()
    }
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def exif_summary_line(exif: Optional[ExifSummary]) -> str:
    if exif is None or exif.is_empty():
        return "EXIF metadata: none provided."
    return f"EXIF metadata: {_exif_json(exif)}"


def build_review_prompt(exif: Optional[ExifSummary] = None) -> str:
    """
    Render the instruction text sent alongside the image.
    Output depends only on `exif`; the trailing heading lines define what
    services.review_parser can read back.
    """
    lines = [PERSONA, exif_summary_line(exif)]
    lines += COACHING_RULES
    lines += SCORE_CALIBRATION
    lines += OUTPUT_FORMAT
    return "\n".join(lines)
