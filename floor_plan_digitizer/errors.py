"""Exceptions raised by the floor plan digitizer."""


class FloorPlanError(Exception):
    """Base class for digitizer failures."""


class UnsupportedImageFormat(FloorPlanError, ValueError):
    """The image could not be decoded into a 3-channel RGB buffer."""


class ImageTooLarge(FloorPlanError, ValueError):
    """The decoded image exceeds the configured pixel ceiling."""


class FootprintNotFound(FloorPlanError):
    """No meaningfully classified pixel exists in the image."""


class OcrUnavailable(FloorPlanError):
    """The OCR engine failed to load or to recognise the image."""
