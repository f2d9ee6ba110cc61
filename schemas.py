from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional


class ExifSummary(BaseModel):
    """
    Camera metadata passed along with an upload. Every field is optional.
    Clients send camelCase keys (cameraMake, focalLengthMm, ...); snake_case
    field names are accepted too.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    camera_make: Optional[str] = None
    camera_model: Optional[str] = None
    lens_model: Optional[str] = None
    focal_length_mm: Optional[float] = None
    # to_camel would give focalLength35Mm
    focal_length_35mm: Optional[float] = Field(None, alias="focalLength35mm")
    aperture: Optional[float] = None
    shutter_speed: Optional[str] = None
    iso: Optional[int] = None
    exposure_compensation: Optional[float] = None
    white_balance: Optional[str] = None
    flash: Optional[str] = None
    taken_at: Optional[str] = None

    def is_empty(self) -> bool:
        return all(v is None or v == "" for v in self.model_dump().values())


class ParsedReview(BaseModel):
    model_config = ConfigDict(frozen=True)

    good: List[str] = Field(default_factory=list)
    needs_improvement: List[str] = Field(default_factory=list)
    technical: List[str] = Field(default_factory=list)
    artistic: List[str] = Field(default_factory=list)
    score: Optional[str] = None


class ReviewResponse(BaseModel):
    title: Optional[str] = None
    review: str
    parsed: ParsedReview


class ParseRequest(BaseModel):
    text: str = ""
