import pytest

from src.barcodegen.bitstream import Bitstream


class TestBitstream:
    """Bit-level append, slicing, chunking and conversions."""

    def test_empty(self) -> None:
        bits = Bitstream()
        assert len(bits) == 0
        assert list(bits) == []
        assert bits.to_string() == ""
        assert bits.to_bytes() == b""

    def test_from_string_round_trip(self) -> None:
        bits = Bitstream.from_string("0010_1101 1")
        assert bits.to_string() == "001011011"
        assert len(bits) == 9
        assert str(bits) == "001011011"

    def test_leading_zeros_are_significant(self) -> None:
        assert Bitstream.from_string("001") != Bitstream.from_string("01")

    @pytest.mark.parametrize(
        "source",
        [[1, 0, 1], [True, False, True], "101"],
    )
    def test_from_bits(self, source: object) -> None:
        assert Bitstream.from_bits(source) == Bitstream(0b101, 3)  # type: ignore[arg-type]

    def test_from_bits_rejects_non_bits(self) -> None:
        with pytest.raises(ValueError, match="Invalid bit"):
            Bitstream.from_bits([0, 2])

    def test_value_must_fit_length(self) -> None:
        with pytest.raises(ValueError):
            Bitstream(4, 2)
        with pytest.raises(ValueError):
            Bitstream(0, -1)

    def test_append(self) -> None:
        bits = Bitstream.from_string("1101").append(0b11, 2)
        assert bits.to_string() == "110111"
        assert Bitstream().append(1, 4).to_string() == "0001"

    def test_append_returns_new_stream(self) -> None:
        base = Bitstream.from_string("1")
        longer = base.append(0, 1)
        assert len(base) == 1
        assert len(longer) == 2

    def test_concatenation(self) -> None:
        assert Bitstream.from_string("10") + Bitstream.from_string("01") == Bitstream.from_string("1001")

    def test_indexing(self) -> None:
        bits = Bitstream.from_string("1000")
        assert bits[0] == 1
        assert bits[1] == 0
        assert bits[-4] == 1
        with pytest.raises(IndexError):
            bits[4]

    def test_slicing(self) -> None:
        bits = Bitstream.from_string("110100")
        assert bits[1:4].to_string() == "101"
        assert bits[-2:].to_string() == "00"
        assert bits[4:2].to_string() == ""
        assert Bitstream.from_string("1010")[::2].to_string() == "11"

    def test_chunks(self) -> None:
        chunks = list(Bitstream.from_string("11011").chunks(2))
        assert [c.to_string() for c in chunks] == ["11", "01", "1"]

    def test_chunks_of_symbols(self) -> None:
        bits = Bitstream.from_string("1" * 22 + "11")
        assert [len(c) for c in bits.chunks(11)] == [11, 11, 2]

    def test_chunks_width_validation(self) -> None:
        with pytest.raises(ValueError):
            list(Bitstream.from_string("1").chunks(0))

    def test_bytes(self) -> None:
        assert Bitstream.from_bytes(b"\xd2").to_string() == "11010010"
        assert Bitstream.from_bytes(b"\xd2", 3).to_string() == "110"
        assert Bitstream.from_string("1101").to_bytes() == b"\xd0"
        assert Bitstream.from_bytes(b"\xd2\x1d").to_bytes() == b"\xd2\x1d"

    def test_from_bytes_too_many_bits(self) -> None:
        with pytest.raises(ValueError):
            Bitstream.from_bytes(b"\x00", 9)

    def test_invert(self) -> None:
        assert Bitstream.from_string("1100").invert().to_string() == "0011"
        assert Bitstream().invert() == Bitstream()

    def test_filled(self) -> None:
        assert Bitstream.filled(1, 3).to_string() == "111"
        assert Bitstream.filled(0, 3).to_string() == "000"
        assert Bitstream.filled(1, 0) == Bitstream()

    def test_repr(self) -> None:
        assert repr(Bitstream.from_string("10")) == "Bitstream('10')"

    def test_hashable(self) -> None:
        assert len({Bitstream.from_string("1"), Bitstream(1, 1)}) == 1
