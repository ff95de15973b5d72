"""Shared fixtures: synthetic plan images and fake OCR engines."""

import cv2
import numpy as np
import pytest

from floor_plan_digitizer.errors import OcrUnavailable
from floor_plan_digitizer.ocr import OcrEngine, OcrWord

LIVING_RGB = (206, 143, 82)
BEDROOM_RGB = (234, 211, 170)
KITCHEN_RGB = (186, 206, 150)
OTHER_RGB = (158, 158, 158)


class FakeOcrEngine(OcrEngine):
    """OCR engine returning fixed words and recording its lifecycle."""

    def __init__(self, words=None):
        self.words = list(words or [])
        self.opened = False
        self.closed = False
        self.whitelist = None

    def open(self):
        self.opened = True

    def close(self):
        self.closed = True

    def recognize_words(self, image, whitelist):
        assert self.opened and not self.closed
        self.whitelist = whitelist
        return list(self.words)


class FailingOcrEngine(OcrEngine):
    """OCR engine that fails like a missing tesseract binary."""

    def __init__(self):
        self.closed = False

    def open(self):
        raise OcrUnavailable("tesseract is not installed")

    def close(self):
        self.closed = True

    def recognize_words(self, image, whitelist):
        raise AssertionError("recognize_words called on an unopened engine")


def word(text, cx, cy, w=40, h=12):
    """OCR word box centred on (cx, cy)."""
    return OcrWord(text=text, left=cx - w // 2, top=cy - h // 2, width=w, height=h)


def encode_png(rgb: np.ndarray) -> bytes:
    """Encode an RGB (or grayscale) array as PNG bytes."""
    if rgb.ndim == 3 and rgb.shape[2] == 3:
        data = cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)
    elif rgb.ndim == 3 and rgb.shape[2] == 4:
        data = cv2.cvtColor(rgb, cv2.COLOR_RGBA2BGRA)
    else:
        data = rgb
    ok, buffer = cv2.imencode(".png", data)
    assert ok
    return buffer.tobytes()


@pytest.fixture
def two_room_image() -> np.ndarray:
    """200x150 white canvas with a living and a bedroom block side by side.

    Footprint is x 20..179, y 30..119 (160 x 90 px); each room is 80 x 90 px.
    """
    image = np.full((150, 200, 3), 255, dtype=np.uint8)
    image[30:120, 20:100] = LIVING_RGB
    image[30:120, 100:180] = BEDROOM_RGB
    return image

