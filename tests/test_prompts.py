import json

from prompts import build_review_prompt
from schemas import ExifSummary

HEADINGS = [
    "Title:",
    "The Good:",
    "Needs Improvement:",
    "Technical Suggestions:",
    "Artistic Suggestions:",
    "Overall Score:",
]


def _exif_line(prompt: str) -> str:
    return next(line for line in prompt.split("\n") if line.startswith("EXIF metadata:"))


def test_prompt_lists_headings_in_order_on_own_lines() -> None:
    lines = build_review_prompt().split("\n")

    positions = []
    for heading in HEADINGS:
        matches = [i for i, line in enumerate(lines) if line.startswith(heading)]
        assert len(matches) == 1, heading
        positions.append(matches[0])

    assert positions == sorted(positions)
    assert positions[-1] == len(lines) - 1


def test_prompt_without_exif() -> None:
    prompt = build_review_prompt()

    assert prompt.split("\n")[0].startswith("You are a photography coach")
    assert _exif_line(prompt) == "EXIF metadata: none provided."


def test_empty_exif_counts_as_missing() -> None:
    prompt = build_review_prompt(ExifSummary(camera_make=""))

    assert _exif_line(prompt) == "EXIF metadata: none provided."


def test_prompt_embeds_set_exif_fields_as_json() -> None:
    exif = ExifSummary(camera_make="FUJIFILM", aperture=2.8, shutter_speed="1/250s", iso=400)

    line = _exif_line(build_review_prompt(exif))
    payload = json.loads(line[len("EXIF metadata: "):])

    assert payload == {"cameraMake": "FUJIFILM", "aperture": 2.8, "shutterSpeed": "1/250s", "iso": 400}


def test_exif_json_is_compact_with_whole_numbers() -> None:
    exif = ExifSummary(focal_length_mm=50.0, focal_length_35mm=75.0, exposure_compensation=-0.33)

    line = _exif_line(build_review_prompt(exif))

    assert line == 'EXIF metadata: {"focalLengthMm":50,"focalLength35mm":75,"exposureCompensation":-0.33}'


def test_exif_accepts_camel_case_keys() -> None:
    exif = ExifSummary.model_validate({"cameraMake": "Canon", "focalLength35mm": 35, "takenAt": "2024-05-01T10:00:00.000Z"})

    assert exif.camera_make == "Canon"
    assert exif.focal_length_35mm == 35
    assert exif.taken_at == "2024-05-01T10:00:00.000Z"


def test_prompt_is_deterministic() -> None:
    exif = ExifSummary(lens_model="XF23mmF2", taken_at="2024-05-01T10:00:00.000Z")

    assert build_review_prompt(exif) == build_review_prompt(exif)
    assert build_review_prompt(exif) != build_review_prompt()


def test_prompt_carries_score_calibration() -> None:
    prompt = build_review_prompt()

    assert "Score calibration guide:" in prompt
    assert "Do not default to 6/10." in prompt
    assert "- 9–10: exceptional, award‑caliber or portfolio‑grade." in prompt
    assert "avoid under‑scoring truly excellent work." in prompt
