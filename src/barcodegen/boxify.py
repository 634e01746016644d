"""
RU: Преобразование битовых строк в псевдографику из блочных символов Unicode.
EN: Box-art renderer: packs a bit matrix into Unicode block-element glyphs
(2x2 quadrants or 2x3 sextants) for terminal display.

Every glyph covers two pixel columns. A row contributes one value per glyph:
0 = light, 1 = right half dark, 2 = left half dark, 3 = both dark.
Values of the 2 (or 3) rows of a band are packed into a small integer key
and looked up in a literal glyph table.
"""

from __future__ import annotations

import collections.abc
import itertools
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Final, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from src.barcodegen.bitstream import Bitstream
from src.barcodegen.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

__all__ = [
    "RenderConfig",
    "QUADRANT_GLYPHS",
    "SEXTANT_GLYPHS",
    "END_OF_LINE",
    "glyph_for",
    "render_box_art",
]

RowLike = Union[Bitstream, str, bytes, bytearray, Sequence[int]]

FULL: Final[int] = 3


class _EndOfLine:
    def __repr__(self) -> str:
        return "END_OF_LINE"


# Row exhausted; never a pixel value
END_OF_LINE: Final[Any] = _EndOfLine()

# Key: top << 2 | bottom
QUADRANT_GLYPHS: Final[Tuple[str, ...]] = (
    " ", "▗", "▖", "▄",
    "▝", "▐", "▞", "▟",
    "▘", "▚", "▌", "▙",
    "▀", "▜", "▛", "█",
)

# Key: top << 4 | middle << 2 | bottom (Symbols for Legacy Computing, U+1FB00)
SEXTANT_GLYPHS: Final[Tuple[str, ...]] = (
    " ",  # (0, 0, 0)
    "\U0001fb1e",  # (0, 0, 1)
    "\U0001fb0f",  # (0, 0, 2)
    "\U0001fb2d",  # (0, 0, 3)
    "\U0001fb07",  # (0, 1, 0)
    "\U0001fb26",  # (0, 1, 1)
    "\U0001fb16",  # (0, 1, 2)
    "\U0001fb35",  # (0, 1, 3)
    "\U0001fb03",  # (0, 2, 0)
    "\U0001fb22",  # (0, 2, 1)
    "\U0001fb13",  # (0, 2, 2)
    "\U0001fb31",  # (0, 2, 3)
    "\U0001fb0b",  # (0, 3, 0)
    "\U0001fb29",  # (0, 3, 1)
    "\U0001fb1a",  # (0, 3, 2)
    "\U0001fb39",  # (0, 3, 3)
    "\U0001fb01",  # (1, 0, 0)
    "\U0001fb20",  # (1, 0, 1)
    "\U0001fb11",  # (1, 0, 2)
    "\U0001fb2f",  # (1, 0, 3)
    "\U0001fb09",  # (1, 1, 0)
    "▐",  # (1, 1, 1)
    "\U0001fb18",  # (1, 1, 2)
    "\U0001fb37",  # (1, 1, 3)
    "\U0001fb05",  # (1, 2, 0)
    "\U0001fb24",  # (1, 2, 1)
    "\U0001fb14",  # (1, 2, 2)
    "\U0001fb33",  # (1, 2, 3)
    "\U0001fb0d",  # (1, 3, 0)
    "\U0001fb2b",  # (1, 3, 1)
    "\U0001fb1c",  # (1, 3, 2)
    "\U0001fb3b",  # (1, 3, 3)
    "\U0001fb00",  # (2, 0, 0)
    "\U0001fb1f",  # (2, 0, 1)
    "\U0001fb10",  # (2, 0, 2)
    "\U0001fb2e",  # (2, 0, 3)
    "\U0001fb08",  # (2, 1, 0)
    "\U0001fb27",  # (2, 1, 1)
    "\U0001fb17",  # (2, 1, 2)
    "\U0001fb36",  # (2, 1, 3)
    "\U0001fb04",  # (2, 2, 0)
    "\U0001fb23",  # (2, 2, 1)
    "▌",  # (2, 2, 2)
    "\U0001fb32",  # (2, 2, 3)
    "\U0001fb0c",  # (2, 3, 0)
    "\U0001fb2a",  # (2, 3, 1)
    "\U0001fb1b",  # (2, 3, 2)
    "\U0001fb3a",  # (2, 3, 3)
    "\U0001fb02",  # (3, 0, 0)
    "\U0001fb21",  # (3, 0, 1)
    "\U0001fb12",  # (3, 0, 2)
    "\U0001fb30",  # (3, 0, 3)
    "\U0001fb0a",  # (3, 1, 0)
    "\U0001fb28",  # (3, 1, 1)
    "\U0001fb19",  # (3, 1, 2)
    "\U0001fb38",  # (3, 1, 3)
    "\U0001fb06",  # (3, 2, 0)
    "\U0001fb25",  # (3, 2, 1)
    "\U0001fb15",  # (3, 2, 2)
    "\U0001fb34",  # (3, 2, 3)
    "\U0001fb0e",  # (3, 3, 0)
    "\U0001fb2c",  # (3, 3, 1)
    "\U0001fb1d",  # (3, 3, 2)
    "█",  # (3, 3, 3)
)


@dataclass(frozen=True)
class RenderConfig:
    """
    Box-art rendering options, validated on construction.

    Args:
        wide: One bit per glyph (full-width pixels) instead of two (half blocks).
        lines_per_char: 2 for quadrant glyphs, 3 for sextant glyphs.
        newline: Row terminator. None/False -> "", True -> "\\n", or any string.
        inverse: Swap dark and light, e.g. ``▘`` <-> ``▟``.

    Raises:
        InvalidConfiguration: For any value outside of the recognised variants.
    """

    wide: bool = False
    lines_per_char: int = 3
    newline: Optional[Union[str, bool]] = "\n"
    inverse: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.wide, bool):
            raise InvalidConfiguration(f"Invalid value {self.wide!r} for option wide.")
        if (
            isinstance(self.lines_per_char, bool)
            or not isinstance(self.lines_per_char, int)
            or self.lines_per_char not in (2, 3)
        ):
            raise InvalidConfiguration(
                f"Invalid value {self.lines_per_char!r} for option lines_per_char."
            )
        if not isinstance(self.inverse, bool):
            raise InvalidConfiguration(f"Invalid value {self.inverse!r} for option inverse.")

        newline = self.newline
        if newline is None or newline is False:
            newline = ""
        elif newline is True:
            newline = "\n"
        elif not isinstance(newline, str):
            raise InvalidConfiguration(f"Invalid value {newline!r} for option newline.")
        object.__setattr__(self, "newline", newline)

    @classmethod
    def option_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


def glyph_for(values: Sequence[int], inverse: bool = False) -> str:
    """
    Look up the glyph for one column of 2 or 3 row values (each 0..3).

    Example:
        >>> glyph_for((2, 0))
        '▘'
        >>> glyph_for((2, 0), inverse=True)
        '▟'

    Raises:
        InvalidConfiguration: Not 2 or 3 values, or a value outside 0..3.
    """
    if len(values) not in (2, 3):
        raise InvalidConfiguration(f"Expected 2 or 3 row values, got {len(values)}")
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= FULL:
            raise InvalidConfiguration(f"Row value must be an int within 0..3, got {value!r}")
    if inverse:
        values = [FULL - v for v in values]
    key = 0
    for value in values:
        key = key << 2 | value
    return QUADRANT_GLYPHS[key] if len(values) == 2 else SEXTANT_GLYPHS[key]


def _row_values(row: Bitstream, wide: bool) -> Iterator[Any]:
    if wide:
        for bit in row:
            yield bit * FULL
    else:
        for chunk in row.chunks(2):
            # Одиночный последний бит -> левая половина
            yield chunk.value if len(chunk) == 2 else chunk.value * 2
    while True:
        yield END_OF_LINE


def _pixel_stream(row: Optional[Bitstream], config: RenderConfig) -> Iterator[Any]:
    if row is None:
        return itertools.repeat(0)
    return _row_values(row, config.wide)


def _to_bitstream(row: Any) -> Bitstream:
    if isinstance(row, Bitstream):
        return row
    if isinstance(row, str):
        return Bitstream.from_string(row)
    if isinstance(row, (bytes, bytearray)):
        return Bitstream.from_bytes(bytes(row))
    if isinstance(row, collections.abc.Iterable):
        try:
            return Bitstream.from_bits(row)
        except ValueError as e:
            raise InvalidConfiguration(f"Row contains non-bit values: {e}") from e
    raise TypeError(f"Row must be Bitstream, str, bytes or sequence of bits, got {type(row)!r}")


def _render_line(row: Bitstream, config: RenderConfig) -> str:
    out: List[str] = []
    for value in _row_values(row, config.wide):
        if value is END_OF_LINE:
            out.append(config.newline)
            break
        out.append(glyph_for((value, value), config.inverse))
    return "".join(out)


def _render_band(band: Sequence[Optional[Bitstream]], config: RenderConfig) -> str:
    streams = [_pixel_stream(row, config) for row in band]
    real_rows = sum(row is not None for row in band)
    out: List[str] = []
    for values in zip(*streams):
        ended = sum(value is END_OF_LINE for value in values)
        if ended == real_rows:
            out.append(config.newline)
            break
        # Exhausted rows of a ragged band continue as light pixels
        pixels = [0 if value is END_OF_LINE else value for value in values]
        out.append(glyph_for(pixels, config.inverse))
    return "".join(out)


def render_box_art(
    rows: Union[RowLike, Iterable[RowLike]],
    config: Optional[RenderConfig] = None,
    **options: Any,
) -> str:
    """
    Convert bitstrings to box art.

    Args:
        rows: A single row (Bitstream, "0101" string or bytes) for one
            dimensional data, rendered with each value doubled vertically; or
            an iterable of rows for two dimensional data, grouped into bands
            of ``lines_per_char`` rows.
        config: Rendering options; keyword ``options`` override its fields.

    Returns:
        Glyphs of every band, each band followed by the newline string.

    Raises:
        InvalidConfiguration: Bad option values (raised before rendering).
        TypeError: Rows of an unsupported type.

    Examples:
        >>> render_box_art("0000")
        '  \\n'
        >>> render_box_art(["1111", "0011"], lines_per_char=2, newline=None)
        '▀█'
    """
    unknown = set(options) - set(RenderConfig.option_names())
    if unknown:
        raise InvalidConfiguration(f"Unknown options: {', '.join(sorted(unknown))}")
    if config is None:
        config = RenderConfig(**options)
    elif options:
        config = replace(config, **options)

    if isinstance(rows, (Bitstream, str, bytes, bytearray)):
        return _render_line(_to_bitstream(rows), config)

    lines = [_to_bitstream(row) for row in rows]
    lpc = config.lines_per_char
    bands: List[str] = []
    for start in range(0, len(lines), lpc):
        band: List[Optional[Bitstream]] = list(lines[start : start + lpc])
        band.extend([None] * (lpc - len(band)))
        bands.append(_render_band(band, config))
    logger.debug(
        "Rendered %d rows into %d bands (lines_per_char=%d, wide=%s)",
        len(lines),
        len(bands),
        lpc,
        config.wide,
    )
    return "".join(bands)
