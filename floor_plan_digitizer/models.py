"""Data models for floor plan digitizing and outline tracing."""

from dataclasses import dataclass, fields
from typing import Any, List, Mapping, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Order matters: classification breaks distance ties by palette order.
PIXEL_LABELS: Tuple[str, ...] = (
    "living",
    "bedroom",
    "balcony",
    "kitchen",
    "utility",
    "loggia",
    "foyer",
    "core",
    "other",
    "ignore",
)
LABEL_CODES = {name: code for code, name in enumerate(PIXEL_LABELS)}
OTHER_CODE = LABEL_CODES["other"]
IGNORE_CODE = LABEL_CODES["ignore"]


def label_name(code: int) -> str:
    """Map a classified pixel code back to its label."""
    return PIXEL_LABELS[int(code)]


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PixelBounds(CamelModel):
    """Inclusive pixel bounding box."""

    model_config = ConfigDict(frozen=True)

    min_x: int
    min_y: int
    max_x: int
    max_y: int


class FootprintBounds(PixelBounds):
    """Bounding box of the drawn floor plan; origin of exported geometry."""

    width: int
    height: int

    @classmethod
    def from_extent(cls, min_x: int, min_y: int, max_x: int, max_y: int) -> "FootprintBounds":
        return cls(
            min_x=min_x,
            min_y=min_y,
            max_x=max_x,
            max_y=max_y,
            width=max_x - min_x + 1,
            height=max_y - min_y + 1,
        )


class Region(CamelModel):
    """A maximal 4-connected group of same-labelled pixels."""

    model_config = ConfigDict(frozen=True)

    id: int
    type: str
    bounds: PixelBounds
    area_pixels: int


class TokenBox(CamelModel):
    x0: int
    x1: int
    y0: int
    y1: int


class OcrToken(CamelModel):
    """A numeric dimension label recognised on the drawing."""

    value: int
    bbox: TokenBox
    center_x: float
    center_y: float


class ScaleCalibration(CamelModel):
    """Millimetre spans read from the drawing and the derived scale factors."""

    width_mm: Optional[float] = None
    height_mm: Optional[float] = None
    mm_per_pixel_x: Optional[float] = None
    mm_per_pixel_y: Optional[float] = None

    @property
    def is_calibrated(self) -> bool:
        return self.mm_per_pixel_x is not None or self.mm_per_pixel_y is not None


class RoomPolygon(CamelModel):
    """A room exported as its bounding rectangle in millimetres."""

    id: int
    type: str
    polygon: List[Tuple[float, float]]
    start_coordinate: Tuple[float, float]
    end_coordinate: Tuple[float, float]
    area_mm2: float
    pixel_bounds: Optional[PixelBounds] = Field(default=None, exclude=True)


class SourceInfo(CamelModel):
    width_pixels: int
    height_pixels: int


class DigitizedMeta(CamelModel):
    source: SourceInfo
    layout_bounds: FootprintBounds
    width_mm: Optional[float] = None
    height_mm: Optional[float] = None
    mm_per_pixel_x: Optional[float] = None
    mm_per_pixel_y: Optional[float] = None
    ocr_values: List[OcrToken] = Field(default_factory=list)


class DigitizedPlan(CamelModel):
    """Complete result of digitizing one floor plan image."""

    meta: DigitizedMeta
    rooms: List[RoomPolygon] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class OverallDimensions(CamelModel):
    width: float
    height: float


class RectSpace(CamelModel):
    """An axis-aligned room rectangle in plan coordinates."""

    # Descriptive only; plans carry free-form or null values here
    type: Any = ""
    comment: Any = None
    start_coordinate: Tuple[float, float]
    end_coordinate: Tuple[float, float]

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """(min_x, max_x, min_y, max_y) regardless of corner order."""
        (sx, sy), (ex, ey) = self.start_coordinate, self.end_coordinate
        return min(sx, ex), max(sx, ex), min(sy, ey), max(sy, ey)


class FloorPlan(CamelModel):
    overall_dimensions: OverallDimensions
    spaces: List[RectSpace] = Field(default_factory=list)


class OutlinePoint(NamedTuple):
    """Plan-centred outline vertex; z is the plan's y axis."""

    x: float
    z: float


_OPTION_ALIASES = {
    "minRegionPixels": "min_region_pixels",
    "ocrWhitelist": "ocr_whitelist",
    "ocrPsm": "ocr_psm",
    "ocrLanguage": "ocr_language",
    "ocrTimeout": "ocr_timeout",
    "marginRatio": "margin_ratio",
    "maxPixels": "max_pixels",
}


@dataclass
class DigitizerParams:
    """Parameters for digitizing a floor plan image."""

    min_region_pixels: int = 1500
    ocr_whitelist: str = "0123456789"
    ocr_psm: int = 6  # single uniform block of text
    ocr_language: str = "eng"
    ocr_timeout: float = 30.0  # seconds, 0 disables
    margin_ratio: float = 0.22  # share of the image treated as dimension margin
    max_pixels: int = 40_000_000

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "DigitizerParams":
        """Build params from a mapping using either camelCase or snake_case keys."""
        if options is None:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise TypeError(f"Unknown digitizer option: {key}")
            values[name] = value
        return cls(**values)
