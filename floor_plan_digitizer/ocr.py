"""OCR of dimension annotations on floor plan drawings."""

import re
from dataclasses import dataclass
from typing import List

import numpy as np

from .errors import OcrUnavailable
from .models import OcrToken, TokenBox


@dataclass
class OcrWord:
    """A word box as reported by the OCR engine."""

    text: str
    left: int
    top: int
    width: int
    height: int


class OcrEngine:
    """Interface for OCR back ends.

    Engines are opened before recognition and closed afterwards; use them
    as context managers so a failed recognition still releases the engine.
    """

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def recognize_words(self, image: np.ndarray, whitelist: str) -> List[OcrWord]:
        raise NotImplementedError

    def __enter__(self) -> "OcrEngine":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TesseractOcrEngine(OcrEngine):
    """OCR engine backed by the tesseract binary through pytesseract.

    Every recognition call runs its own tesseract process, so one engine
    per digitizing call is cheap and needs no locking.
    """

    def __init__(self, psm: int = 6, lang: str = "eng", timeout: float = 30.0):
        """Initialize the engine.

        Args:
            psm: Tesseract page segmentation mode (6 = single block of text)
            lang: Tesseract language
            timeout: Seconds before a recognition is aborted, 0 disables
        """
        self.psm = psm
        self.lang = lang
        self.timeout = timeout
        self._opened = False

    def open(self) -> None:
        try:
            import pytesseract
        except ImportError as e:
            raise OcrUnavailable("pytesseract is not installed") from e

        try:
            pytesseract.get_tesseract_version()
        except (pytesseract.TesseractError, OSError) as e:
            raise OcrUnavailable(f"tesseract could not be started: {e}") from e
        self._opened = True

    def close(self) -> None:
        self._opened = False

    def recognize_words(self, image: np.ndarray, whitelist: str) -> List[OcrWord]:
        if not self._opened:
            raise OcrUnavailable("OCR engine used before open()")

        import pytesseract

        config = f"--psm {self.psm}"
        if whitelist:
            config += f" -c tessedit_char_whitelist={whitelist}"

        try:
            data = pytesseract.image_to_data(
                image,
                lang=self.lang,
                config=config,
                output_type=pytesseract.Output.DICT,
                timeout=self.timeout,
            )
        except (pytesseract.TesseractError, RuntimeError, OSError) as e:
            raise OcrUnavailable(f"OCR failed: {e}") from e

        return [
            OcrWord(
                text=str(text),
                left=int(data["left"][i]),
                top=int(data["top"][i]),
                width=int(data["width"][i]),
                height=int(data["height"][i]),
            )
            for i, text in enumerate(data["text"])
            if str(text).strip()
        ]


def parse_dimension_value(text: str) -> int:
    """Reduce OCR text to a positive integer, or 0 if it has no digits."""
    digits = re.sub(r"\D", "", text)
    if not digits:
        return 0
    return int(digits)


def recognise_dimensions(
    image: np.ndarray,
    engine: OcrEngine,
    whitelist: str = "0123456789",
) -> List[OcrToken]:
    """Run OCR once over the drawing and keep the numeric labels.

    Args:
        image: Image in RGB format
        engine: An opened OCR engine
        whitelist: Characters the OCR engine may emit

    Returns:
        Positive numeric tokens with their boxes and centres
    """
    tokens = []
    for word in engine.recognize_words(image, whitelist):
        value = parse_dimension_value(word.text)
        if value <= 0:
            continue

        x0, x1 = word.left, word.left + word.width
        y0, y1 = word.top, word.top + word.height
        tokens.append(
            OcrToken(
                value=value,
                bbox=TokenBox(x0=x0, x1=x1, y0=y0, y1=y1),
                center_x=(x0 + x1) / 2,
                center_y=(y0 + y1) / 2,
            )
        )

    return tokens
