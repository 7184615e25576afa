import base64
import struct

import pytest

from tmxheader.errors import TileDataDecodeError
from tmxheader.tile_data import TileEncoding, decode, decode_base64, decode_csv


def b64(*values):
    return base64.b64encode(struct.pack(f'<{len(values)}I', *values)).decode('ascii')


class TestTileEncoding:

    @pytest.mark.parametrize("value, expected", [
        ("csv", TileEncoding.CSV),
        ("base64", TileEncoding.BASE64),
        (None, TileEncoding.NONE),
        ("", TileEncoding.NONE),
    ])
    def test_from_attribute(self, value, expected):
        assert TileEncoding.from_attribute(value) is expected

    def test_unknown_encoding_reports_layer(self):
        with pytest.raises(TileDataDecodeError) as excinfo:
            TileEncoding.from_attribute("xml-ish", layer_index=3)
        assert excinfo.value.layer_index == 3
        assert "xml-ish" in str(excinfo.value)


class TestCsv:

    def test_simple(self):
        assert decode(TileEncoding.CSV, "1,2,3,4") == [1, 2, 3, 4]

    def test_tiled_row_layout(self):
        payload = "\n1,2,3,\n4,5,6\n"
        assert decode(TileEncoding.CSV, payload) == [1, 2, 3, 4, 5, 6]

    def test_spaces_around_tokens(self):
        assert decode_csv(" 7 , 8,9 ") == [7, 8, 9]

    @pytest.mark.parametrize("payload", ["", "   ", "\n"])
    def test_empty_payload_has_no_tiles(self, payload):
        assert decode(TileEncoding.CSV, payload) == []

    def test_rejoin_reproduces_payload(self):
        payload = "0,15,4294967295,1"
        assert ",".join(str(t) for t in decode_csv(payload)) == payload

    @pytest.mark.parametrize("payload", ["1,x,3", "1,,3", "1.5"])
    def test_invalid_token(self, payload):
        with pytest.raises(TileDataDecodeError):
            decode_csv(payload, layer_index=0)

    @pytest.mark.parametrize("payload", ["-1", "4294967296"])
    def test_out_of_range(self, payload):
        with pytest.raises(TileDataDecodeError) as excinfo:
            decode_csv(payload, layer_index=2)
        assert excinfo.value.layer_index == 2

    def test_json_array_with_csv_encoding(self):
        assert decode(TileEncoding.CSV, [3, 2, 1]) == [3, 2, 1]


class TestBase64:

    def test_little_endian_chunks(self):
        assert decode(TileEncoding.BASE64, b64(1, 2, 3, 4)) == [1, 2, 3, 4]

    def test_full_range_values(self):
        assert decode_base64(b64(0, 0xFFFFFFFF, 0x80000001)) == [0, 0xFFFFFFFF, 0x80000001]

    def test_length_is_bytes_over_four(self):
        values = list(range(100, 137))
        assert len(decode_base64(b64(*values))) == len(values)

    def test_multi_digit_last_value_is_kept(self):
        assert decode_base64(b64(1, 123456)) == [1, 123456]

    def test_whitespace_inside_payload(self):
        encoded = b64(5, 6, 7)
        payload = "\n   " + encoded[:8] + "\n   " + encoded[8:] + "\n"
        assert decode_base64(payload) == [5, 6, 7]

    def test_incomplete_trailing_chunk_is_dropped(self):
        payload = base64.b64encode(struct.pack('<2I', 9, 10) + b'\x01\x02').decode('ascii')
        assert decode_base64(payload) == [9, 10]

    def test_empty(self):
        assert decode_base64("") == []

    def test_invalid_base64(self):
        with pytest.raises(TileDataDecodeError) as excinfo:
            decode(TileEncoding.BASE64, "not*base64!", layer_index=1)
        assert excinfo.value.layer_index == 1

    def test_array_payload_rejected(self):
        with pytest.raises(TileDataDecodeError):
            decode(TileEncoding.BASE64, [1, 2])


class TestUnencoded:

    def test_array_used_directly(self):
        assert decode(TileEncoding.NONE, [0, 0, 1, 1]) == [0, 0, 1, 1]

    def test_none_payload(self):
        assert decode(TileEncoding.NONE, None) == []

    def test_string_payload_decoded_as_csv(self):
        assert decode(TileEncoding.NONE, "4,5") == [4, 5]

    @pytest.mark.parametrize("value", [True, 1.5, "3", None])
    def test_non_integer_values(self, value):
        with pytest.raises(TileDataDecodeError):
            decode(TileEncoding.NONE, [1, value])
