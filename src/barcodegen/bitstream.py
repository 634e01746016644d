"""
RU: Неизменяемая битовая последовательность произвольной длины (не выровнена по байтам).
EN: Immutable, not byte-aligned bit sequence used as the wire format between
the Code 128 encoder and the box renderer.

Bits are stored most-significant-first in a single Python ``int`` together
with an explicit length, so leading zero bits are preserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Union, overload

__all__ = ["Bitstream"]


@dataclass(frozen=True)
class Bitstream:
    """
    Ordered sequence of bits.

    Args:
        value: Bits packed into an integer, first bit is the most significant.
        length: Number of bits in the stream.

    Examples:
        >>> Bitstream.from_string("1101").append(0b11, 2)
        Bitstream('110111')
        >>> len(Bitstream.from_bytes(b"\\xd2"))
        8
    """

    value: int = 0
    length: int = 0

    def __post_init__(self) -> None:
        if self.length < 0:
            raise ValueError(f"Bitstream length must be >= 0, got {self.length}")
        if self.value < 0 or self.value >> self.length:
            raise ValueError(
                f"Value {self.value} does not fit into {self.length} bits"
            )

    # ---- constructors ----

    @classmethod
    def from_bits(cls, bits: Iterable[Union[int, bool, str]]) -> "Bitstream":
        """Build a stream from an iterable of 0/1 ints, bools or '0'/'1' chars."""
        value = 0
        length = 0
        for bit in bits:
            if bit in (1, True, "1"):
                value = value << 1 | 1
            elif bit in (0, False, "0"):
                value <<= 1
            else:
                raise ValueError(f"Invalid bit value: {bit!r}")
            length += 1
        return cls(value, length)

    @classmethod
    def from_string(cls, text: str) -> "Bitstream":
        """Parse a '0101' string. Whitespace and underscores are ignored."""
        return cls.from_bits(c for c in text if c not in " \t\n_")

    @classmethod
    def from_bytes(cls, data: bytes, length: int = -1) -> "Bitstream":
        """
        Build a stream from big-endian bytes.

        Args:
            data: Source bytes.
            length: Number of leading bits to keep (default: all bits).
        """
        total = len(data) * 8
        if length < 0:
            length = total
        if length > total:
            raise ValueError(f"Cannot take {length} bits from {len(data)} bytes")
        return cls(int.from_bytes(data, "big") >> (total - length), length)

    @classmethod
    def filled(cls, bit: int, length: int) -> "Bitstream":
        """Stream of ``length`` copies of ``bit``."""
        return cls((1 << length) - 1 if bit else 0, length)

    # ---- building ----

    def append(self, value: int, width: int) -> "Bitstream":
        """Return a new stream with ``value`` appended as a ``width``-bit field."""
        return self + Bitstream(value, width)

    def __add__(self, other: object) -> "Bitstream":
        if not isinstance(other, Bitstream):
            return NotImplemented
        return Bitstream(self.value << other.length | other.value, self.length + other.length)

    def invert(self) -> "Bitstream":
        """Flip every bit."""
        return Bitstream(self.value ^ ((1 << self.length) - 1), self.length)

    # ---- access ----

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[int]:
        for shift in range(self.length - 1, -1, -1):
            yield self.value >> shift & 1

    @overload
    def __getitem__(self, key: int) -> int: ...

    @overload
    def __getitem__(self, key: slice) -> "Bitstream": ...

    def __getitem__(self, key: Union[int, slice]) -> Union[int, "Bitstream"]:
        if isinstance(key, slice):
            start, stop, step = key.indices(self.length)
            if step == 1:
                width = max(stop - start, 0)
                return Bitstream(
                    self.value >> (self.length - start - width) & ((1 << width) - 1),
                    width,
                )
            return Bitstream.from_bits(self[i] for i in range(start, stop, step))
        if key < 0:
            key += self.length
        if not 0 <= key < self.length:
            raise IndexError("Bitstream index out of range")
        return self.value >> (self.length - 1 - key) & 1

    def chunks(self, width: int) -> Iterator["Bitstream"]:
        """Split into consecutive ``width``-bit pieces; the last one may be shorter."""
        if width < 1:
            raise ValueError(f"Chunk width must be positive, got {width}")
        for start in range(0, self.length, width):
            yield self[start : start + width]

    # ---- export ----

    def to_bytes(self) -> bytes:
        """Big-endian bytes, zero-padded on the right to a byte boundary."""
        pad = -self.length % 8
        return (self.value << pad).to_bytes((self.length + pad) // 8, "big")

    def to_string(self) -> str:
        return format(self.value, f"0{self.length}b") if self.length else ""

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Bitstream({self.to_string()!r})"
