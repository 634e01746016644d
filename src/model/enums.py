"""
model/enums.py

(Краткое RU: Перечисления для текстовых штрихкодов: наборы символов Code 128 и 2D-коды.)

EN: Domain enums for text-mode barcodes.
NO encoding logic here!

- Only Code 128 code sets A and B (no code set C, no shift sequences).
- 2D codes are rendered from an external bit matrix (QR only).

See Also:
    - src/barcodegen/code128.py (symbol tables and encoder)
    - src/barcodegen/boxify.py (box-art renderer)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, Literal, Union

_logger: Final[logging.Logger] = logging.getLogger(__name__)


class CodeSet(str, Enum):
    A = "code128a"
    B = "code128b"

    @property
    def letter(self) -> str:
        return self.value[-1].upper()

    @classmethod
    def parse(cls, value: Union["CodeSet", str]) -> "CodeSet":
        """
        Resolve a code set from an enum member or a name.

        Accepts "A", "b", "code128a", "CODE128B", ...

        Raises:
            ValueError: For unknown names.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.letter.lower()):
                    return member
        _logger.error("Unknown code set: %r", value)
        raise ValueError(f"Unknown code set: {value!r}")

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            CodeSet.A: "Code 128, набор A (управляющие и прописные)",
            CodeSet.B: "Code 128, набор B (прописные и строчные)",
        }
        names_en = {
            CodeSet.A: "Code 128 set A (control + uppercase)",
            CodeSet.B: "Code 128 set B (upper + lowercase)",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class Matrix2DCodeType(str, Enum):
    QR = "qr"

    def localized_name(self, lang: str = "ru") -> str:
        names = {
            "qr": {"ru": "QR код", "en": "QR code"},
        }
        return names[self.value][lang] if lang in names[self.value] else self.value
