# RU: Домейн-модель текстового штрихкода с fail-fast валидацией и опциональной записью ошибки.
# EN: Domain model of a text-mode barcode/QR block with fail-fast validation and optional error recording.

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, Mapping, Optional, Union

from src.barcodegen.boxify import RenderConfig, render_box_art
from src.barcodegen.code128 import encode_symbols, get_code_set
from src.barcodegen.errors import BarcodeGenError
from src.barcodegen.matrix_art import printable_qr, qr_rows
from src.barcodegen.printable import printable_barcode

from .enums import CodeSet, Matrix2DCodeType

logger = logging.getLogger(__name__)


@dataclass
class TextBarcode:
    """
    Domain-level dataclass for a barcode printed as box art:
        - Code 128 (sets A/B) or QR payload
        - Fail-fast validation, or recorded error for GUI/API callers
        - dict round trip for storage in documents

    Examples (integration):
        bc = TextBarcode(type=CodeSet.B, data="Wikipedia")
        ok = bc.validate(record_error=True)
        if ok:
            print(bc.render())
    """

    schema_version: ClassVar[str] = "1.0"

    type: Union[CodeSet, Matrix2DCodeType]
    data: str
    height: int = 4
    inverse: bool = True
    caption: Optional[str] = None
    lines_per_char: int = 2
    border: int = 4
    metadata: Dict[str, Any] = field(default_factory=dict)
    validation_error_message: Optional[str] = None

    def validate(self, record_error: bool = False) -> bool:
        """
        Check type, data and layout options.

        Args:
            record_error: Store the message in ``validation_error_message``
                and return False instead of raising.

        Raises:
            BarcodeGenError: On invalid state when ``record_error`` is False.
        """
        try:
            self._validate()
        except (BarcodeGenError, TypeError, ValueError) as e:
            if not record_error:
                raise
            logger.warning("TextBarcode validation failed: %s", e)
            self.validation_error_message = str(e)
            return False
        self.validation_error_message = None
        return True

    def _validate(self) -> None:
        if not isinstance(self.type, (CodeSet, Matrix2DCodeType)):
            raise TypeError(
                f"type must be CodeSet or Matrix2DCodeType, got {type(self.type)!r}"
            )
        if not isinstance(self.data, str):
            raise BarcodeGenError("Barcode data must be string")
        if isinstance(self.height, bool) or not isinstance(self.height, int) or self.height < 1:
            raise BarcodeGenError(f"Height must be positive int, got {self.height!r}")
        if isinstance(self.type, CodeSet):
            code_set = get_code_set(self.type)
            for position, char in enumerate(self.data, 1):
                if code_set.value(char) is None:
                    raise BarcodeGenError(
                        f"Character {char!r} at position {position} not supported by {self.type.name}"
                    )
        else:
            if not self.data:
                raise BarcodeGenError("QR data must be non-empty string")
            RenderConfig(lines_per_char=self.lines_per_char)
            if isinstance(self.border, bool) or not isinstance(self.border, int) or self.border < 0:
                raise BarcodeGenError(f"QR border must be non-negative int, got {self.border!r}")

    def render(self) -> str:
        """Validate and render the block, caption (if any) on the last line."""
        self.validate()
        if isinstance(self.type, CodeSet):
            art = printable_barcode(self.data, self.type, self.height, self.inverse)
        else:
            art = printable_qr(
                self.data,
                lines_per_char=self.lines_per_char,
                inverse=self.inverse,
                border=self.border,
            )
        if self.caption:
            art += self.caption + "\n"
        return art

    def preview(self) -> str:
        """Single-band rendering without quiet zones (for narrow previews)."""
        self.validate()
        if isinstance(self.type, CodeSet):
            return render_box_art(encode_symbols(self.data, self.type), inverse=self.inverse)
        return render_box_art(
            qr_rows(self.data, border=0), wide=True, lines_per_char=3, inverse=self.inverse
        )

    @classmethod
    def from_config(
        cls,
        data: str,
        config: Mapping[str, Any],
        type: Optional[Union[CodeSet, Matrix2DCodeType]] = None,
    ) -> "TextBarcode":
        """
        Build a record with defaults taken from load_config() output.

        Args:
            data: Payload.
            config: Settings with code_set, height, inverse, lines_per_char, qr_border.
            type: Explicit code type; the configured code set is used when omitted.

        Raises:
            ValueError: Unknown configured code set.
        """
        kind = type if type is not None else CodeSet.parse(config["code_set"])
        return cls(
            type=kind,
            data=data,
            height=config["height"],
            inverse=config["inverse"],
            lines_per_char=config["lines_per_char"],
            border=config["qr_border"],
        )

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["type"] = self.type.value
        d["schema_version"] = self.schema_version
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TextBarcode":
        """
        Restore from to_dict() output.

        Raises:
            ValueError: Unknown ``type`` value.
        """
        d = dict(d)
        d.pop("schema_version", None)
        raw_type = d.pop("type")
        kind: Union[CodeSet, Matrix2DCodeType]
        try:
            kind = Matrix2DCodeType(raw_type)
        except ValueError:
            kind = CodeSet.parse(raw_type)
        return cls(type=kind, **d)
