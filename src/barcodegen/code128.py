"""
RU: Кодировщик Code 128 (наборы A и B) в битовую последовательность.
EN: Code 128 symbol encoder (code sets A and B) producing a Bitstream.

Provides:
- Fixed table of the 107 Code 128 symbol patterns (11 bits each)
- Code set capabilities (character lookup + special symbol values)
- encode_symbols(): start + data + mod-103 checksum + stop + terminator
- decode_symbols()/decode_text(): inverse operation with checksum verification

Code set C and shift/code-switch sequences are not supported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Callable,
    Dict,
    Final,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)

from src.barcodegen.bitstream import Bitstream
from src.barcodegen.errors import (
    BarcodeGenError,
    InvalidConfiguration,
    UnsupportedCharacter,
)
from src.model.enums import CodeSet

logger = logging.getLogger(__name__)

__all__ = [
    "SYMBOL_PATTERNS",
    "CodeSetSpec",
    "DecodedSymbols",
    "get_code_set",
    "checksum",
    "encode_symbols",
    "decode_symbols",
    "decode_text",
]

SYMBOL_WIDTH: Final[int] = 11
CHECKSUM_MODULUS: Final[int] = 103
START_A: Final[int] = 103
START_B: Final[int] = 104
START_C: Final[int] = 105
STOP: Final[int] = 106
# Замыкающая полоса стоп-символа (2 модуля)
TERMINATOR: Final[int] = 0b11
TERMINATOR_WIDTH: Final[int] = 2

# Symbol values 0-106 as 11-bit patterns, 1 = bar (dark), 0 = space (light)
SYMBOL_PATTERNS: Final[Tuple[int, ...]] = (
    1740, 1644, 1638, 1176, 1164, 1100, 1224, 1220, 1124, 1608,  # 0-9
    1604, 1572, 1436, 1244, 1230, 1484, 1260, 1254, 1650, 1628,  # 10-19
    1614, 1764, 1652, 1902, 1868, 1836, 1830, 1892, 1844, 1842,  # 20-29
    1752, 1734, 1590, 1304, 1112, 1094, 1416, 1128, 1122, 1672,  # 30-39
    1576, 1570, 1464, 1422, 1134, 1496, 1478, 1142, 1910, 1678,  # 40-49
    1582, 1768, 1762, 1774, 1880, 1862, 1814, 1896, 1890, 1818,  # 50-59
    1914, 1602, 1930, 1328, 1292, 1200, 1158, 1068, 1062, 1424,  # 60-69
    1412, 1232, 1218, 1076, 1074, 1554, 1616, 1978, 1556, 1146,  # 70-79
    1340, 1212, 1182, 1508, 1268, 1266, 1956, 1940, 1938, 1758,  # 80-89
    1782, 1974, 1400, 1310, 1118, 1512, 1506, 1960, 1954, 1502,  # 90-99
    1518, 1886, 1966, 1668, 1680, 1692, 1594,  # 100-106
)

_PATTERN_VALUES: Final[Dict[int, int]] = {
    pattern: value for value, pattern in enumerate(SYMBOL_PATTERNS)
}

_ERROR_POLICIES: Final[Tuple[str, ...]] = ("strict", "replace")


@dataclass(frozen=True)
class CodeSetSpec:
    """
    Capability object for one Code 128 code set.

    Args:
        name: Human-readable code set name ("A"/"B").
        start: Start symbol value.
        specials: Special symbol values (stop, function codes, shifts, switches).
        to_value: Maps a character code point to a symbol value (None if unsupported).
        to_code: Maps a data symbol value back to a code point (None for specials).
    """

    name: str
    start: int
    specials: Mapping[str, int]
    to_value: Callable[[int], Optional[int]]
    to_code: Callable[[int], Optional[int]]

    @property
    def stop(self) -> int:
        return self.specials["stop"]

    def value(self, char: str) -> Optional[int]:
        if len(char) != 1:
            return None
        return self.to_value(ord(char))

    def char(self, value: int) -> Optional[str]:
        code = self.to_code(value)
        return None if code is None else chr(code)


def _code_a_value(code: int) -> Optional[int]:
    # ASCII 00-1F -> 64..95, ASCII 20-5F -> 0..63
    if 0 <= code <= 31:
        return code + 64
    if 32 <= code <= 95:
        return code - 32
    return None


def _code_a_code(value: int) -> Optional[int]:
    if 0 <= value <= 63:
        return value + 32
    if 64 <= value <= 95:
        return value - 64
    return None


def _code_b_value(code: int) -> Optional[int]:
    # ASCII 20-7F -> 0..95
    if 32 <= code <= 127:
        return code - 32
    return None


def _code_b_code(value: int) -> Optional[int]:
    if 0 <= value <= 95:
        return value + 32
    return None


CODE_SET_A: Final[CodeSetSpec] = CodeSetSpec(
    name="A",
    start=START_A,
    specials={
        "start": START_A,
        "stop": STOP,
        "function_1": 102,
        "function_2": 97,
        "function_3": 96,
        "function_4": 101,
        "shift_b": 98,
        "code_b": 100,
        "code_c": 99,
    },
    to_value=_code_a_value,
    to_code=_code_a_code,
)

CODE_SET_B: Final[CodeSetSpec] = CodeSetSpec(
    name="B",
    start=START_B,
    specials={
        "start": START_B,
        "stop": STOP,
        "function_1": 102,
        "function_2": 97,
        "function_3": 96,
        "function_4": 100,
        "shift_a": 98,
        "code_a": 101,
        "code_c": 99,
    },
    to_value=_code_b_value,
    to_code=_code_b_code,
)

_CODE_SETS: Final[Dict[CodeSet, CodeSetSpec]] = {
    CodeSet.A: CODE_SET_A,
    CodeSet.B: CODE_SET_B,
}
_BY_START: Final[Dict[int, CodeSetSpec]] = {
    spec.start: spec for spec in _CODE_SETS.values()
}


def get_code_set(code_set: Union[CodeSet, CodeSetSpec, str]) -> CodeSetSpec:
    """Resolve a CodeSet member, its name or a ready CodeSetSpec to a capability."""
    if isinstance(code_set, CodeSetSpec):
        return code_set
    try:
        return _CODE_SETS[CodeSet.parse(code_set)]
    except ValueError as e:
        raise InvalidConfiguration(f"Unsupported code set: {code_set!r}") from e


def checksum(values: Iterable[int], start: int) -> int:
    """Weighted mod-103 checksum: start value plus each data value times its 1-based position."""
    total = start % CHECKSUM_MODULUS
    for position, value in enumerate(values, 1):
        total = (total + position * value) % CHECKSUM_MODULUS
    return total


def encode_symbols(
    text: str,
    code_set: Union[CodeSet, CodeSetSpec, str] = CodeSet.B,
    errors: str = "strict",
) -> Bitstream:
    """
    Encode text into a Code 128 bitstream (1 = dark module).

    Layout: start, one symbol per character, checksum, stop (11 bits each),
    then the 2-bit terminator bar.

    Args:
        text: Characters to encode.
        code_set: Code set A or B.
        errors: "strict" raises on unsupported characters, "replace"
            encodes them as a space (value 0).

    Returns:
        Bitstream of ``11 * (len(text) + 3) + 2`` bits.

    Raises:
        UnsupportedCharacter: Character outside of the code set (strict mode).
        InvalidConfiguration: Unknown code set or error policy.

    Example:
        >>> len(encode_symbols("A", CodeSet.B))
        46
    """
    spec = get_code_set(code_set)
    if errors not in _ERROR_POLICIES:
        raise InvalidConfiguration(
            f"Invalid value {errors!r} for errors, expected one of {_ERROR_POLICIES}"
        )

    bits = Bitstream().append(SYMBOL_PATTERNS[spec.start], SYMBOL_WIDTH)
    total = spec.start % CHECKSUM_MODULUS
    for position, char in enumerate(text, 1):
        value = spec.value(char)
        if value is None:
            if errors == "strict":
                logger.error(
                    "Character %r at position %d not in code set %s",
                    char,
                    position,
                    spec.name,
                )
                raise UnsupportedCharacter(char, position, spec.name)
            logger.warning(
                "Replacing unsupported character %r at position %d with space",
                char,
                position,
            )
            value = 0
        bits = bits.append(SYMBOL_PATTERNS[value], SYMBOL_WIDTH)
        total = (total + position * value) % CHECKSUM_MODULUS

    bits = (
        bits.append(SYMBOL_PATTERNS[total], SYMBOL_WIDTH)
        .append(SYMBOL_PATTERNS[spec.stop], SYMBOL_WIDTH)
        .append(TERMINATOR, TERMINATOR_WIDTH)
    )
    logger.debug(
        "Encoded %d chars in code set %s: checksum=%d, %d bits",
        len(text),
        spec.name,
        total,
        len(bits),
    )
    return bits


class DecodedSymbols(NamedTuple):
    start: int
    data: List[int]
    checksum: int


def decode_symbols(bits: Bitstream) -> DecodedSymbols:
    """
    Split a Code 128 bitstream back into symbol values and verify it.

    Raises:
        BarcodeGenError: Bad framing, unknown pattern or checksum mismatch.
    """
    body_length = len(bits) - TERMINATOR_WIDTH
    if body_length < 3 * SYMBOL_WIDTH or body_length % SYMBOL_WIDTH:
        raise BarcodeGenError(f"Invalid Code 128 bitstream length: {len(bits)}")
    if bits[body_length:].value != TERMINATOR:
        raise BarcodeGenError("Missing terminator bar after stop symbol")

    values: List[int] = []
    for index, chunk in enumerate(bits[:body_length].chunks(SYMBOL_WIDTH)):
        value = _PATTERN_VALUES.get(chunk.value)
        if value is None:
            raise BarcodeGenError(f"Unknown symbol pattern {chunk} at symbol {index}")
        values.append(value)

    start, *data, check, stop = values
    if start not in (START_A, START_B, START_C):
        raise BarcodeGenError(f"Bitstream does not begin with a start symbol: {start}")
    if stop != STOP:
        raise BarcodeGenError(f"Bitstream does not end with a stop symbol: {stop}")
    expected = checksum(data, start)
    if check != expected:
        raise BarcodeGenError(f"Checksum mismatch: embedded {check}, computed {expected}")
    return DecodedSymbols(start, data, check)


def decode_text(bits: Bitstream) -> str:
    """Decode a bitstream produced by encode_symbols() back into text."""
    decoded = decode_symbols(bits)
    spec = _BY_START.get(decoded.start)
    if spec is None:
        raise BarcodeGenError(f"Code set for start symbol {decoded.start} is not supported")
    chars: List[str] = []
    for value in decoded.data:
        char = spec.char(value)
        if char is None:
            raise BarcodeGenError(f"Symbol {value} is not a data character in code set {spec.name}")
        chars.append(char)
    return "".join(chars)
