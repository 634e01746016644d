from typing import List
from unittest.mock import patch

import pytest

from src.barcodegen import code128
from src.barcodegen.bitstream import Bitstream
from src.barcodegen.code128 import (
    CODE_SET_A,
    CODE_SET_B,
    SYMBOL_PATTERNS,
    checksum,
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
from src.model.enums import CodeSet

WIKIPEDIA_BITS = Bitstream.from_bytes(
    bytes([210, 29, 26, 26, 97, 40, 105, 79, 44, 132, 38, 134, 146, 195, 201, 99])
).append(43, 6)


def _symbols(*values: int) -> Bitstream:
    bits = Bitstream()
    for value in values:
        bits = bits.append(SYMBOL_PATTERNS[value], 11)
    return bits


class TestSymbolTable:
    def test_table_covers_all_symbols(self) -> None:
        assert len(SYMBOL_PATTERNS) == 107

    def test_patterns_are_unique_11_bit(self) -> None:
        assert len(set(SYMBOL_PATTERNS)) == 107
        for pattern in SYMBOL_PATTERNS:
            assert pattern >> 10 == 1  # every symbol starts with a bar
            assert pattern < 1 << 11

    @pytest.mark.parametrize(
        "value,pattern",
        [
            (0, "11011001100"),
            (103, "11010000100"),
            (104, "11010010000"),
            (105, "11010011100"),
            (106, "11000111010"),
        ],
    )
    def test_known_patterns(self, value: int, pattern: str) -> None:
        assert format(SYMBOL_PATTERNS[value], "011b") == pattern


class TestCodeSets:
    def test_specials_a(self) -> None:
        assert CODE_SET_A.start == 103
        assert CODE_SET_A.stop == 106
        assert CODE_SET_A.specials["code_b"] == 100
        assert CODE_SET_A.specials["function_4"] == 101
        assert CODE_SET_A.specials["shift_b"] == 98

    def test_specials_b(self) -> None:
        assert CODE_SET_B.start == 104
        assert CODE_SET_B.stop == 106
        assert CODE_SET_B.specials["code_a"] == 101
        assert CODE_SET_B.specials["function_4"] == 100
        assert CODE_SET_B.specials["shift_a"] == 98

    @pytest.mark.parametrize(
        "char,expected",
        [(" ", 0), ("A", 33), ("_", 63), ("\x00", 64), ("\t", 73), ("\x1f", 95), ("a", None)],
    )
    def test_code_a_values(self, char: str, expected: object) -> None:
        assert CODE_SET_A.value(char) == expected

    @pytest.mark.parametrize(
        "char,expected",
        [(" ", 0), ("A", 33), ("a", 65), ("~", 94), ("\x7f", 95), ("\t", None), ("é", None)],
    )
    def test_code_b_values(self, char: str, expected: object) -> None:
        assert CODE_SET_B.value(char) == expected

    def test_multichar_string_has_no_value(self) -> None:
        assert CODE_SET_B.value("ab") is None

    @pytest.mark.parametrize("name", ["A", "a", "code128a", "CODE128A", CodeSet.A])
    def test_get_code_set_by_name(self, name: object) -> None:
        assert get_code_set(name) is CODE_SET_A  # type: ignore[arg-type]

    def test_get_code_set_passthrough(self) -> None:
        assert get_code_set(CODE_SET_B) is CODE_SET_B

    @pytest.mark.parametrize("name", ["C", "code128c", "", 7])
    def test_get_code_set_unknown(self, name: object) -> None:
        with pytest.raises(InvalidConfiguration):
            get_code_set(name)  # type: ignore[arg-type]


class TestEncodeSymbols:
    def test_wikipedia_golden(self) -> None:
        bits = encode_symbols("Wikipedia", CodeSet.B)
        assert bits == WIKIPEDIA_BITS
        assert len(bits) == 134

    def test_default_code_set_is_b(self) -> None:
        assert encode_symbols("Wikipedia") == WIKIPEDIA_BITS

    def test_single_char_length(self) -> None:
        assert len(encode_symbols("A", CodeSet.B)) == 46

    @pytest.mark.parametrize(
        "text,code_set",
        [
            ("HELLO", CodeSet.A),
            ("ABC-123", CodeSet.A),
            ("\x01\x02\x1b", CodeSet.A),
            ("Hello, World!", CodeSet.B),
            ("~", CodeSet.B),
            ("a" * 40, CodeSet.B),
        ],
    )
    def test_length_invariant(self, text: str, code_set: CodeSet) -> None:
        bits = encode_symbols(text, code_set)
        assert len(bits) == 11 * (1 + len(text) + 1 + 1) + 2

    def test_framing(self) -> None:
        bits = encode_symbols("Hi", CodeSet.B)
        assert bits[:11].value == SYMBOL_PATTERNS[104]
        assert bits[-13:-2].value == SYMBOL_PATTERNS[106]
        assert bits[-2:].to_string() == "11"

    def test_empty_code_b(self) -> None:
        bits = encode_symbols("", CodeSet.B)
        assert bits == _symbols(104, 1, 106).append(0b11, 2)
        assert decode_symbols(bits).checksum == 1

    def test_empty_code_a(self) -> None:
        bits = encode_symbols("", CodeSet.A)
        assert bits == _symbols(103, 0, 106).append(0b11, 2)
        assert decode_symbols(bits).checksum == 0

    def test_control_characters_in_code_a(self) -> None:
        bits = encode_symbols("\t", CodeSet.A)
        assert decode_symbols(bits).data == [73]

    def test_code_set_by_name(self) -> None:
        assert encode_symbols("XYZ", "a") == encode_symbols("XYZ", CodeSet.A)
        assert encode_symbols("xyz", "code128b") == encode_symbols("xyz", CodeSet.B)

    def test_unsupported_character_strict(self) -> None:
        with pytest.raises(UnsupportedCharacter) as exc_info:
            encode_symbols("héllo", CodeSet.B)
        assert exc_info.value.char == "é"
        assert exc_info.value.position == 2
        assert exc_info.value.code_set == "B"

    def test_lowercase_not_in_code_a(self) -> None:
        with pytest.raises(UnsupportedCharacter, match="position 1"):
            encode_symbols("abc", CodeSet.A)

    def test_unsupported_character_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            encode_symbols("\n", CodeSet.B)

    def test_replace_policy_substitutes_space(self) -> None:
        with patch.object(code128.logger, "warning") as mock_warning:
            bits = encode_symbols("hé", CodeSet.B, errors="replace")
        assert bits == encode_symbols("h ", CodeSet.B)
        mock_warning.assert_called_once()

    def test_invalid_error_policy(self) -> None:
        with pytest.raises(InvalidConfiguration, match="errors"):
            encode_symbols("abc", errors="ignore")


class TestChecksum:
    def test_empty(self) -> None:
        assert checksum([], 104) == 1
        assert checksum([], 103) == 0

    def test_weighted_sum(self) -> None:
        # 104 + 1*33 + 2*34 = 205 -> 205 % 103 = 102
        assert checksum([33, 34], 104) == 102

    def test_wikipedia(self) -> None:
        assert decode_symbols(WIKIPEDIA_BITS).checksum == 88


class TestDecodeSymbols:
    @pytest.mark.parametrize(
        "text,code_set",
        [
            ("Wikipedia", CodeSet.B),
            ("Hello, World! ~{}|", CodeSet.B),
            ("CODE 128", CodeSet.A),
            ("TAB\tEND\x1f", CodeSet.A),
            ("", CodeSet.B),
        ],
    )
    def test_round_trip(self, text: str, code_set: CodeSet) -> None:
        bits = encode_symbols(text, code_set)
        assert decode_text(bits) == text

    def test_checksum_recomputed_from_data(self) -> None:
        decoded = decode_symbols(encode_symbols("Checksum 103", CodeSet.B))
        assert decoded.start == 104
        assert decoded.checksum == checksum(decoded.data, decoded.start)

    def test_checksum_mismatch(self) -> None:
        bits = _symbols(104, 33, 0, 106).append(0b11, 2)
        with pytest.raises(BarcodeGenError, match="Checksum mismatch"):
            decode_symbols(bits)

    def test_missing_terminator(self) -> None:
        bits = _symbols(104, 1, 106).append(0b00, 2)
        with pytest.raises(BarcodeGenError, match="terminator"):
            decode_symbols(bits)

    def test_bad_length(self) -> None:
        with pytest.raises(BarcodeGenError, match="length"):
            decode_symbols(WIKIPEDIA_BITS[:-3])

    def test_unknown_pattern(self) -> None:
        bits = Bitstream.from_string("11010010000" + "0" * 11 + "11000111010" + "11")
        with pytest.raises(BarcodeGenError, match="Unknown symbol pattern"):
            decode_symbols(bits)

    def test_missing_start(self) -> None:
        bits = _symbols(0, 0, 106).append(0b11, 2)
        with pytest.raises(BarcodeGenError, match="start symbol"):
            decode_symbols(bits)

    def test_corrupted_bit_detected(self) -> None:
        flipped: List[int] = list(WIKIPEDIA_BITS)
        flipped[20] ^= 1
        with pytest.raises(BarcodeGenError):
            decode_symbols(Bitstream.from_bits(flipped))

    def test_code_c_start_not_decodable_as_text(self) -> None:
        bits = _symbols(105, 105 % 103, 106).append(0b11, 2)
        assert decode_symbols(bits).start == 105
        with pytest.raises(BarcodeGenError, match="not supported"):
            decode_text(bits)
