"""Image loading and decoding."""

from pathlib import Path
from typing import Union

import cv2
import numpy as np

from .errors import ImageTooLarge, UnsupportedImageFormat

ImageSource = Union[bytes, bytearray, memoryview, str, Path]


class ImageDecoder:
    """Interface for turning encoded image bytes into an RGB array."""

    def decode(self, data: bytes) -> np.ndarray:
        raise NotImplementedError


class OpenCVImageDecoder(ImageDecoder):
    """Decode PNG/JPEG/etc. with OpenCV, dropping any alpha channel."""

    def decode(self, data: bytes) -> np.ndarray:
        """Decode an encoded image.

        Args:
            data: Encoded image bytes

        Returns:
            Image as numpy array in RGB format, dtype uint8

        Raises:
            UnsupportedImageFormat: If the bytes cannot be decoded or the
                image does not have exactly 3 colour channels
        """
        buffer = np.frombuffer(data, dtype=np.uint8)
        img = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED) if buffer.size else None
        if img is None:
            raise UnsupportedImageFormat("Could not decode image data")

        if img.dtype == np.uint16:
            img = (img >> 8).astype(np.uint8)
        elif img.dtype != np.uint8:
            raise UnsupportedImageFormat(f"Unsupported pixel type {img.dtype}")

        channels = 1 if img.ndim == 2 else img.shape[2]
        if channels == 4:
            img = img[:, :, :3]
            channels = 3
        if channels != 3:
            raise UnsupportedImageFormat(f"Expected 3 channels, received {channels}")

        return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def read_source(source: ImageSource) -> bytes:
    """Return raw image bytes from bytes or a file path."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")
    return path.read_bytes()


def check_image_size(image: np.ndarray, max_pixels: int) -> None:
    """Reject images whose pixel count would make per-pixel buffers too large."""
    height, width = image.shape[:2]
    if max_pixels and width * height > max_pixels:
        raise ImageTooLarge(
            f"Image is {width}x{height} ({width * height} pixels), "
            f"limit is {max_pixels} pixels"
        )
