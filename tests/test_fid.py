"""Tests for the file id codec."""

import pytest

from weedclient.errors import MalformedHandle
from weedclient.fid import FileId, format_fid, parse_fid


class TestParseFid:
    def test_without_generation(self):
        fid = parse_fid("3,01637037d6")

        assert fid == FileId(volume_id=3, key="01637037d6", generation=None)
        assert format_fid(fid) == "3,01637037d6"

    def test_with_generation(self):
        fid = parse_fid("3,5442434343_2")

        assert fid.volume_id == 3
        assert fid.key == "5442434343"
        assert fid.generation == 2
        assert format_fid(fid) == "3,5442434343_2"

    def test_generation_zero_is_kept(self):
        assert str(parse_fid("7,abc_0")) == "7,abc_0"

    def test_key_keeps_later_commas(self):
        fid = parse_fid("1,ab,cd")

        assert fid.key == "ab,cd"

    def test_largest_values(self):
        fid = parse_fid(f"{2**32 - 1},k_{2**64 - 1}")

        assert fid.volume_id == 2**32 - 1
        assert fid.generation == 2**64 - 1

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "abc,x",
            "3",
            "3,",
            "3,_5",
            ",abc",
            "-3,abc",
            "+3,abc",
            "1_0,abc",
            "3,abc_",
            "3,abc_x",
            "3,abc_1_2",
            f"{2**32},abc",
            f"3,abc_{2**64}",
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(MalformedHandle):
            parse_fid(text)

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError, match="MalformedHandle"):
            parse_fid("abc,x")


class TestFileId:
    def test_str_is_canonical_form(self):
        assert str(FileId(12, "a1b2")) == "12,a1b2"
        assert str(FileId(12, "a1b2", 9)) == "12,a1b2_9"

    def test_parse_classmethod(self):
        assert FileId.parse("12,a1b2_9") == FileId(12, "a1b2", 9)

    def test_frozen(self):
        fid = FileId(1, "a")

        with pytest.raises(AttributeError):
            fid.key = "b"
