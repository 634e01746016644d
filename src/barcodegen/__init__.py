"""
barcodegen

Модуль для генерации штрихкодов Code 128 в виде псевдографики для терминала.

- Code 128, наборы A и B: кодирование в битовую последовательность с контрольной суммой mod 103.
- Рендеринг любой битовой матрицы блочными символами Unicode (2x2 квадранты или 2x3 секстанты).
- QR-коды и изображения как источники двумерных матриц.

Public API:
    - encode_symbols: текст -> Bitstream (start + data + checksum + stop + terminator)
    - decode_symbols / decode_text: обратное преобразование с проверкой контрольной суммы
    - render_box_art: Bitstream(s) -> текст из блочных символов
    - RenderConfig: опции рендеринга (dataclass)
    - printable_barcode: штрихкод с тихими зонами и заданной высотой
    - printable_qr, qr_rows, image_rows: двумерные источники
    - Bitstream: битовая последовательность
    - BarcodeGenError, InvalidConfiguration, UnsupportedCharacter: исключения

Примеры:
    >>> from src.barcodegen import encode_symbols, printable_barcode
    >>> len(encode_symbols("A"))
    46
    >>> print(printable_barcode("Wikipedia"))  # doctest: +SKIP

Зависимости:
    Pillow, qrcode
"""

from src.barcodegen.bitstream import Bitstream
from src.barcodegen.boxify import RenderConfig, render_box_art
from src.barcodegen.code128 import (
    CodeSetSpec,
    DecodedSymbols,
    decode_symbols,
    decode_text,
    encode_symbols,
    get_code_set,
)
from src.barcodegen.errors import (
    BarcodeGenError,
    InvalidConfiguration,
    UnsupportedCharacter,
)
from src.barcodegen.matrix_art import image_rows, printable_qr, qr_rows
from src.barcodegen.printable import printable_barcode

__all__ = [
    "Bitstream",
    "RenderConfig",
    "render_box_art",
    "CodeSetSpec",
    "DecodedSymbols",
    "decode_symbols",
    "decode_text",
    "encode_symbols",
    "get_code_set",
    "BarcodeGenError",
    "InvalidConfiguration",
    "UnsupportedCharacter",
    "image_rows",
    "printable_qr",
    "qr_rows",
    "printable_barcode",
]
