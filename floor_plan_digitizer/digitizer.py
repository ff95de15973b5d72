"""Main floor plan digitizer."""

import asyncio
import sys
from typing import Any, Callable, List, Mapping, Optional, Union

import numpy as np

from .calibration import calibrate
from .classification import classify_pixels
from .errors import OcrUnavailable
from .footprint import locate_footprint
from .imaging import ImageDecoder, ImageSource, OpenCVImageDecoder, check_image_size, read_source
from .models import DigitizedMeta, DigitizedPlan, DigitizerParams, OcrToken, SourceInfo
from .ocr import OcrEngine, TesseractOcrEngine, recognise_dimensions
from .polygons import region_to_room
from .regions import extract_regions

OcrEngineFactory = Callable[[], OcrEngine]


class FloorPlanDigitizer:
    """Turn colour-coded unit plan images into millimetre room rectangles."""

    def __init__(
        self,
        params: Optional[DigitizerParams] = None,
        decoder: Optional[ImageDecoder] = None,
        ocr_engine_factory: Optional[OcrEngineFactory] = None,
        verbose: bool = False,
    ):
        """Initialize the digitizer.

        Args:
            params: Processing parameters
            decoder: Image decoder, OpenCV by default
            ocr_engine_factory: Creates a fresh OCR engine for every call,
                tesseract by default. Return None from the factory to skip OCR.
            verbose: Print progress while digitizing
        """
        self.params = params or DigitizerParams()
        self.decoder = decoder or OpenCVImageDecoder()
        self.ocr_engine_factory = ocr_engine_factory or self._default_ocr_engine
        self.verbose = verbose

    def _default_ocr_engine(self) -> OcrEngine:
        return TesseractOcrEngine(
            psm=self.params.ocr_psm,
            lang=self.params.ocr_language,
            timeout=self.params.ocr_timeout,
        )

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message)

    def digitize(self, source: ImageSource) -> DigitizedPlan:
        """Digitize a floor plan image.

        Args:
            source: Encoded image bytes or a path to an image file

        Returns:
            DigitizedPlan with calibration metadata and rooms

        Raises:
            UnsupportedImageFormat: If the image is not 3-channel colour
            ImageTooLarge: If the image exceeds the pixel ceiling
            FootprintNotFound: If no room-coloured pixel exists
        """
        data = read_source(source)

        # Step 1: Decode
        image = self.decoder.decode(data)
        check_image_size(image, self.params.max_pixels)
        height, width = image.shape[:2]
        self._log(f"📸 Decoded image: {width}x{height}")

        # Step 2: Classify pixels and find the drawn plan
        self._log("🎨 Classifying pixels...")
        labels = classify_pixels(image)
        footprint = locate_footprint(labels)
        self._log(
            f"   Footprint: ({footprint.min_x}, {footprint.min_y}) - "
            f"({footprint.max_x}, {footprint.max_y})"
        )

        # Step 3: Read dimension labels
        self._log("📏 Reading dimension labels...")
        tokens = self.recognise_dimensions(image)
        calibration = calibrate(tokens, (width, height), footprint, self.params.margin_ratio)
        if calibration.is_calibrated:
            self._log(
                f"   Scale: x={calibration.mm_per_pixel_x} y={calibration.mm_per_pixel_y} mm/pixel"
            )
        else:
            self._log("   No dimension labels found, exporting pixel units")

        # Step 4: Extract rooms
        self._log("🧩 Extracting regions...")
        regions = extract_regions(labels, self.params.min_region_pixels)
        rooms = [region_to_room(region, calibration, footprint) for region in regions]
        self._log(f"   Found {len(rooms)} rooms")

        return DigitizedPlan(
            meta=DigitizedMeta(
                source=SourceInfo(width_pixels=width, height_pixels=height),
                layout_bounds=footprint,
                width_mm=calibration.width_mm,
                height_mm=calibration.height_mm,
                mm_per_pixel_x=calibration.mm_per_pixel_x,
                mm_per_pixel_y=calibration.mm_per_pixel_y,
                ocr_values=tokens,
            ),
            rooms=rooms,
        )

    def recognise_dimensions(self, image: np.ndarray) -> List[OcrToken]:
        """Run OCR with a fresh engine, degrading to no tokens on failure."""
        engine = self.ocr_engine_factory()
        if engine is None:
            return []

        try:
            with engine:
                tokens = recognise_dimensions(image, engine, self.params.ocr_whitelist)
        except OcrUnavailable as e:
            print(f"⚠️  OCR unavailable, continuing without scale: {e}", file=sys.stderr)
            return []

        self._log(f"   Recognised {len(tokens)} numeric labels")
        return tokens


def pic_to_json(
    source: ImageSource,
    options: Union[DigitizerParams, Mapping[str, Any], None] = None,
    *,
    decoder: Optional[ImageDecoder] = None,
    ocr_engine_factory: Optional[OcrEngineFactory] = None,
) -> dict:
    """Digitize a floor plan image into the JSON wire format.

    Args:
        source: Encoded image bytes or a path to an image file
        options: DigitizerParams or a mapping such as
            ``{"minRegionPixels": 1500, "ocrWhitelist": "0123456789"}``
        decoder: Image decoder override
        ocr_engine_factory: OCR engine factory override

    Returns:
        ``{"meta": {...}, "rooms": [...]}`` with camelCase keys
    """
    params = options if isinstance(options, DigitizerParams) else DigitizerParams.from_options(options)
    digitizer = FloorPlanDigitizer(params, decoder=decoder, ocr_engine_factory=ocr_engine_factory)
    return digitizer.digitize(source).to_json_dict()


async def pic_to_json_async(
    source: ImageSource,
    options: Union[DigitizerParams, Mapping[str, Any], None] = None,
    *,
    decoder: Optional[ImageDecoder] = None,
    ocr_engine_factory: Optional[OcrEngineFactory] = None,
) -> dict:
    """Awaitable ``pic_to_json``; the blocking work runs in a worker thread."""
    return await asyncio.to_thread(
        pic_to_json,
        source,
        options,
        decoder=decoder,
        ocr_engine_factory=ocr_engine_factory,
    )
