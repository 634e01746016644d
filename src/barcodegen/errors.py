"""
RU: Иерархия исключений генерации текстовых штрихкодов.
EN: Exception hierarchy for text-mode barcode generation and box-art rendering.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "BarcodeGenError",
    "InvalidConfiguration",
    "UnsupportedCharacter",
]


class BarcodeGenError(Exception):
    """Barcode generation/validation error."""


class InvalidConfiguration(BarcodeGenError, ValueError):
    """Rendering or encoding option outside of the recognised variants."""


class UnsupportedCharacter(BarcodeGenError, ValueError):
    """
    Character has no symbol value in the selected code set.

    Attributes:
        char: Offending character.
        position: 1-based position of the character in the input text.
        code_set: Name of the code set that rejected the character.
    """

    def __init__(self, char: str, position: int, code_set: Optional[str] = None) -> None:
        self.char = char
        self.position = position
        self.code_set = code_set
        where = f" in code set {code_set}" if code_set else ""
        super().__init__(
            f"Unsupported character {char!r} at position {position}{where}"
        )
