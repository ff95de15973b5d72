"""Tests for OCR of dimension labels."""

import numpy as np
import pytest
import pytesseract

from floor_plan_digitizer.errors import OcrUnavailable
from floor_plan_digitizer.ocr import (
    TesseractOcrEngine,
    parse_dimension_value,
    recognise_dimensions,
)

from conftest import FakeOcrEngine, word


@pytest.mark.parametrize(
    "text, expected",
    [("13725", 13725), ("13,725", 13725), (" 900.", 900), ("abc", 0), ("", 0), ("0", 0)],
)
def test_parse_dimension_value(text, expected):
    assert parse_dimension_value(text) == expected


def test_recognise_dimensions_keeps_positive_numbers():
    """Test that only positive integer words become tokens."""
    engine = FakeOcrEngine([word("13725", 100, 20), word("0", 50, 50), word("--", 60, 60), word("3,210", 10, 80)])
    image = np.zeros((100, 200, 3), dtype=np.uint8)

    with engine:
        tokens = recognise_dimensions(image, engine, whitelist="0123456789")

    assert [t.value for t in tokens] == [13725, 3210]
    first = tokens[0]
    assert (first.bbox.x0, first.bbox.x1, first.bbox.y0, first.bbox.y1) == (80, 120, 14, 26)
    assert first.center_x == pytest.approx(100.0)
    assert first.center_y == pytest.approx(20.0)
    assert engine.whitelist == "0123456789"


def test_tesseract_engine_requires_open():
    engine = TesseractOcrEngine()
    with pytest.raises(OcrUnavailable):
        engine.recognize_words(np.zeros((10, 10, 3), dtype=np.uint8), "0123456789")


def test_tesseract_engine_missing_binary(monkeypatch):
    """Test that a missing tesseract binary raises OcrUnavailable on open."""

    def missing():
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(pytesseract, "get_tesseract_version", missing)

    with pytest.raises(OcrUnavailable):
        with TesseractOcrEngine():
            pass


def test_tesseract_engine_reads_word_boxes(monkeypatch):
    """Test that image_to_data output becomes word boxes."""
    calls = {}

    def fake_image_to_data(image, lang, config, output_type, timeout):
        calls.update(lang=lang, config=config, timeout=timeout)
        return {
            "text": ["", "11660", "  ", "2015"],
            "left": [0, 5, 0, 300],
            "top": [0, 400, 0, 10],
            "width": [640, 20, 0, 30],
            "height": [480, 60, 0, 12],
            "conf": ["-1", "91", "-1", "88"],
        }

    monkeypatch.setattr(pytesseract, "get_tesseract_version", lambda: "5.3.0")
    monkeypatch.setattr(pytesseract, "image_to_data", fake_image_to_data)

    with TesseractOcrEngine(psm=6, lang="eng", timeout=5) as engine:
        words = engine.recognize_words(np.zeros((480, 640, 3), dtype=np.uint8), "0123456789")

    assert [w.text for w in words] == ["11660", "2015"]
    assert (words[0].left, words[0].top, words[0].width, words[0].height) == (5, 400, 20, 60)
    assert calls["config"] == "--psm 6 -c tessedit_char_whitelist=0123456789"
    assert calls["lang"] == "eng"
    assert calls["timeout"] == 5


def test_tesseract_engine_timeout(monkeypatch):
    """Test that a tesseract timeout is reported as OcrUnavailable."""

    def timeout(*args, **kwargs):
        raise RuntimeError("Tesseract process timeout")

    monkeypatch.setattr(pytesseract, "get_tesseract_version", lambda: "5.3.0")
    monkeypatch.setattr(pytesseract, "image_to_data", timeout)

    with TesseractOcrEngine() as engine:
        with pytest.raises(OcrUnavailable, match="timeout"):
            engine.recognize_words(np.zeros((10, 10, 3), dtype=np.uint8), "0123456789")
