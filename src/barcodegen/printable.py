"""
RU: Готовый к печати в терминале штрихкод Code 128 с тихими зонами.
EN: Printable Code 128 barcode for terminals: quiet zones on every side,
data band repeated ``height`` times.
"""

from __future__ import annotations

import logging
from typing import Final, Union

from src.barcodegen.bitstream import Bitstream
from src.barcodegen.boxify import render_box_art
from src.barcodegen.code128 import CodeSetSpec, encode_symbols
from src.barcodegen.errors import InvalidConfiguration
from src.model.enums import CodeSet

logger = logging.getLogger(__name__)

__all__ = ["printable_barcode", "QUIET_ZONE_BITS"]

# 4 glyphs of horizontal quiet zone on each side
QUIET_ZONE_BITS: Final[int] = 8


def printable_barcode(
    text: str,
    code_set: Union[CodeSet, CodeSetSpec, str] = CodeSet.B,
    height: int = 4,
    inverse: bool = True,
) -> str:
    """
    Create a printable barcode with appropriate quiet zones.

    With ``inverse=True`` (default) the barcode is drawn white on black,
    which suits dark terminal backgrounds: quiet zones and spaces are lit
    glyphs, bars are blank.

    Args:
        text: Data to encode.
        code_set: Code 128 code set A or B.
        height: Number of repeated data lines.
        inverse: Draw white on black.

    Returns:
        Lines: quiet line, ``height`` data lines, quiet line; each ends with "\\n".

    Raises:
        InvalidConfiguration: ``height`` is not a positive integer.
        UnsupportedCharacter: ``text`` has characters outside of the code set.

    Example:
        >>> print(printable_barcode("Wikipedia"), end="")  # doctest: +SKIP
        ███████████████████████████████████████████████████████████████████████████
        ████ ▌█▐█▌ ▌█▌▐▐█▌▐▐▌▐█▌█▐▐█▌▐▐▌▌█  █▐ █▐█▌██▐▌▐▐█▌▐▐▌█▐ ██  █▐▌▌▐█ ▐▐ ████
        ...
    """
    if isinstance(height, bool) or not isinstance(height, int) or height < 1:
        raise InvalidConfiguration(f"Invalid value {height!r} for height, expected positive int")
    if not isinstance(inverse, bool):
        raise InvalidConfiguration(f"Invalid value {inverse!r} for inverse.")

    data = encode_symbols(text, code_set)
    quiet = 1 if inverse else 0
    hpad = render_box_art(Bitstream.filled(quiet, QUIET_ZONE_BITS), newline=None)
    blank = render_box_art(Bitstream.filled(quiet, len(data)), newline=None)
    bars = render_box_art(data, inverse=inverse, newline=None)

    quiet_line = hpad + blank + hpad + "\n"
    data_line = hpad + bars + hpad + "\n"
    logger.debug(
        "Printable barcode for %r: %d columns, height %d", text, len(data_line) - 1, height
    )
    return quiet_line + data_line * height + quiet_line
