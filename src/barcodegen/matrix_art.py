"""
RU: Источники двумерных битовых матриц для псевдографики: QR-коды и изображения.
EN: 2D bit-matrix sources for the box renderer: QR codes (qrcode) and
1-bit images (Pillow).

Requirements: Pillow, qrcode
"""

from __future__ import annotations

import logging
from typing import Dict, Final, List

import qrcode
from PIL import Image
from qrcode.constants import (
    ERROR_CORRECT_H,
    ERROR_CORRECT_L,
    ERROR_CORRECT_M,
    ERROR_CORRECT_Q,
)
from qrcode.exceptions import DataOverflowError

from src.barcodegen.bitstream import Bitstream
from src.barcodegen.boxify import render_box_art
from src.barcodegen.errors import BarcodeGenError, InvalidConfiguration

logger = logging.getLogger(__name__)

__all__ = ["qr_rows", "image_rows", "printable_qr"]

_ERROR_CORRECTION: Final[Dict[str, int]] = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}


def qr_rows(data: str, border: int = 4, error_correction: str = "M") -> List[Bitstream]:
    """
    Build a QR code and return its modules as rows (1 = dark), quiet zone included.

    Raises:
        InvalidConfiguration: Negative border or unknown error correction level.
        BarcodeGenError: Empty data or data too long for any QR version.
    """
    if not isinstance(data, str) or not data:
        raise BarcodeGenError("QR data must be non-empty string")
    if border < 0:
        raise InvalidConfiguration(f"QR border must be >= 0, got {border}")
    level = _ERROR_CORRECTION.get(error_correction.upper())
    if level is None:
        raise InvalidConfiguration(
            f"Invalid error correction {error_correction!r}, expected one of L, M, Q, H"
        )

    qr = qrcode.QRCode(error_correction=level, border=border)
    qr.add_data(data)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as e:
        # qrcode 8 reports overflow as ValueError from the version check
        logger.error("QR data too long: %d chars", len(data))
        raise BarcodeGenError(f"QR data too long: {len(data)} chars") from e
    matrix = qr.get_matrix()
    logger.debug("QR version %s, %dx%d modules", qr.version, len(matrix), len(matrix))
    return [Bitstream.from_bits(row) for row in matrix]


def image_rows(image: Image.Image, threshold: int = 128) -> List[Bitstream]:
    """
    Convert a Pillow image to rows of bits: pixels darker than ``threshold`` are 1.

    Transparent pixels count as light.
    """
    if not 0 <= threshold <= 256:
        raise InvalidConfiguration(f"Threshold must be within 0..256, got {threshold}")
    if image.mode in ("RGBA", "LA", "P"):
        background = Image.new("RGBA", image.size, "white")
        image = Image.alpha_composite(background, image.convert("RGBA"))
    gray = image.convert("L")
    width, height = gray.size
    pixels = gray.tobytes()
    return [
        Bitstream.from_bits(value < threshold for value in pixels[y * width : (y + 1) * width])
        for y in range(height)
    ]


def printable_qr(
    data: str,
    lines_per_char: int = 2,
    inverse: bool = True,
    border: int = 4,
) -> str:
    """
    Render a QR code as box art with one glyph column per module.

    Example:
        >>> print(printable_qr("https://example.com"))  # doctest: +SKIP
    """
    return render_box_art(
        qr_rows(data, border=border),
        wide=True,
        lines_per_char=lines_per_char,
        inverse=inverse,
    )
