"""
encodeData Test Suite

Tests: 1) Word encoding of every atomic kind 2) Array and nested struct
encoding 3) Value validation with field paths in error messages
"""

import pytest
from eth_utils import keccak

from eip712_hasher.engine.exceptions import TypedDataError, TypedValueError
from eip712_hasher.hashing.encode_data import encode_data, encode_field, to_address, to_bytes, to_int
from eip712_hasher.hashing.types import build_struct_types, parse_type

EMPTY_KECCAK = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
ADDRESS = "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"


def _no_structs(name, value, path):
    raise AssertionError(f"unexpected struct {name} at {path}")


def encode(type_string, value, path="value"):
    return encode_field(parse_type(type_string), value, path, _no_structs)


class TestCoercion:

    @pytest.mark.parametrize(
        "value, expected",
        [(17, 17), ("17", 17), ("-17", -17), ("0x11", 17), ("0X11", 17), ("-0x7F", -127), (True, 1)],
    )
    def test_to_int(self, value, expected):
        assert to_int(value) == expected

    @pytest.mark.parametrize("value", ["", "0x", "1.5", "12abc", "-", 1.0, None, "9" * 5000])
    def test_to_int_rejects(self, value):
        with pytest.raises(TypedValueError):
            to_int(value)

    def test_oversized_decimal_is_typed_data_error(self):
        with pytest.raises(TypedDataError, match="invalid integer") as exc_info:
            to_int("9" * 5000, "message.amount")
        assert exc_info.value.path == "message.amount"

    @pytest.mark.parametrize(
        "value, expected",
        [("0x0102", b"\x01\x02"), ("0102", b"\x01\x02"), ("0x", b""), ("", b""), (b"\x01", b"\x01"),
         (bytearray(b"\x02"), b"\x02")],
    )
    def test_to_bytes(self, value, expected):
        assert to_bytes(value) == expected

    @pytest.mark.parametrize("value", ["0x123", "0xzz", 12, ["0x01"]])
    def test_to_bytes_rejects(self, value):
        with pytest.raises(TypedValueError):
            to_bytes(value)

    def test_to_address_forms(self):
        raw = bytes.fromhex("bb" * 20)
        assert to_address(ADDRESS) == raw
        assert to_address(ADDRESS.lower()) == raw
        assert to_address(raw) == raw
        assert to_address(int.from_bytes(raw, "big")) == raw

    @pytest.mark.parametrize("value", ["0x1234", ADDRESS[2:], ADDRESS + "00", b"\x01" * 19, 2 ** 160, -1, True])
    def test_to_address_rejects(self, value):
        with pytest.raises(TypedValueError):
            to_address(value)


class TestAtomicWords:

    def test_bool(self):
        assert encode("bool", True) == b"\x00" * 31 + b"\x01"
        assert encode("bool", False) == b"\x00" * 32
        assert encode("bool", 1) == b"\x00" * 31 + b"\x01"

    @pytest.mark.parametrize("value", ["true", 2, "0x1"])
    def test_bool_rejects(self, value):
        with pytest.raises(TypedValueError):
            encode("bool", value)

    def test_address_left_padded(self):
        assert encode("address", ADDRESS) == b"\x00" * 12 + b"\xbb" * 20

    def test_unsigned(self):
        assert encode("uint8", 1) == b"\x00" * 31 + b"\x01"
        assert encode("uint256", "0x0100") == b"\x00" * 30 + b"\x01\x00"
        assert encode("uint8", 255) == b"\x00" * 31 + b"\xff"

    def test_signed_is_twos_complement(self):
        assert encode("int8", -1) == b"\xff" * 32
        assert encode("int8", -128) == b"\xff" * 31 + b"\x80"
        assert encode("int256", "-0x01") == b"\xff" * 32
        assert encode("int16", 127) == b"\x00" * 31 + b"\x7f"

    @pytest.mark.parametrize(
        "type_string, value",
        [("uint8", 256), ("uint8", -1), ("int8", 128), ("int8", -129), ("uint256", 2 ** 256),
         ("int256", -(2 ** 255) - 1)],
    )
    def test_integer_out_of_range(self, type_string, value):
        with pytest.raises(TypedValueError, match="out of range"):
            encode(type_string, value)

    def test_integer_bounds_accepted(self):
        assert encode("uint256", 2 ** 256 - 1) == b"\xff" * 32
        assert encode("int256", -(2 ** 255)) == b"\x80" + b"\x00" * 31

    def test_fixed_bytes_right_padded(self):
        assert encode("bytes2", "0x0102") == b"\x01\x02" + b"\x00" * 30
        assert encode("bytes32", "0x" + "ab" * 32) == b"\xab" * 32

    @pytest.mark.parametrize("value", ["0x01", "0x010203", ""])
    def test_fixed_bytes_wrong_length(self, value):
        with pytest.raises(TypedValueError, match="expected 2 bytes"):
            encode("bytes2", value)

    def test_dynamic_values_are_hashed(self):
        assert encode("string", "").hex() == EMPTY_KECCAK
        assert encode("bytes", "0x").hex() == EMPTY_KECCAK
        assert encode("bytes", "").hex() == EMPTY_KECCAK
        assert encode("string", "Hello World!") == keccak(text="Hello World!")
        assert encode("bytes", "0x01020304") == keccak(b"\x01\x02\x03\x04")

    def test_string_rejects_non_string(self):
        with pytest.raises(TypedValueError, match="expected string"):
            encode("string", 42)

    def test_lone_surrogate_rejected(self):
        with pytest.raises(TypedValueError, match="UTF-8"):
            encode("string", "\ud800")

    def test_none_is_missing(self):
        with pytest.raises(TypedValueError, match="missing value"):
            encode("uint8", None)


class TestArrays:

    @pytest.mark.parametrize(
        "values, expected",
        [
            ([1, 2], "e90b7bceb6e7df5418fb78d8ee546e97c83a08bbccc01a0644d599ccd2a7c2e0"),
            ([17], "31ecc21a745e3968a04e9570e4425bc18fa8019c68028196b546d1669c200c68"),
            ([9, 8, 7], "accf129a6a79fef4f7ce83aec82a72903fc576d12e3ce46716c41ce860282a9e"),
        ],
    )
    def test_uint8_arrays(self, values, expected):
        assert encode("uint8[]", values).hex() == expected

    def test_empty_dynamic_array(self):
        assert encode("uint8[]", []).hex() == EMPTY_KECCAK

    def test_nested_array(self):
        inner = [encode("uint8[]", [1, 2]), encode("uint8[]", [17])]
        assert encode("uint8[][]", [[1, 2], [17]]) == keccak(b"".join(inner))

    def test_tuple_accepted(self):
        assert encode("uint8[]", (1, 2)) == encode("uint8[]", [1, 2])

    def test_fixed_length_mismatch(self):
        with pytest.raises(TypedValueError, match="expected 3 elements"):
            encode("uint8[3]", [1, 2])

    @pytest.mark.parametrize("value", ["0x0102", b"\x01\x02", {"0": 1}, 12])
    def test_non_sequence_rejected(self, value):
        with pytest.raises(TypedValueError, match="expected array"):
            encode("uint8[]", value)

    def test_element_error_carries_index(self):
        with pytest.raises(TypedValueError) as exc_info:
            encode("uint8[]", [1, 300], path="message.values")
        assert exc_info.value.path == "message.values[1]"


class TestEncodeData:

    @pytest.fixture
    def structs(self, mail_document):
        return build_struct_types(mail_document["types"])

    def test_concatenates_member_words(self, structs):
        recorded = []

        def hash_struct(name, value, path):
            recorded.append((name, path))
            return keccak(text=name + value["name"])

        message = {
            "from": {"name": "Cow", "wallet": ADDRESS},
            "to": {"name": "Bob", "wallet": ADDRESS},
            "contents": "Hello, Bob!",
        }
        encoded = encode_data(structs["Mail"], message, "message", hash_struct)

        assert len(encoded) == 96
        assert encoded[:32] == keccak(text="PersonCow")
        assert encoded[32:64] == keccak(text="PersonBob")
        assert encoded[64:] == keccak(text="Hello, Bob!")
        assert recorded == [("Person", "message.from"), ("Person", "message.to")]

    def test_extra_keys_ignored(self, structs):
        value = {"name": "Cow", "wallet": ADDRESS, "nickname": "moo"}
        base = {"name": "Cow", "wallet": ADDRESS}
        assert encode_data(structs["Person"], value, "", _no_structs) == encode_data(
            structs["Person"], base, "", _no_structs
        )

    @pytest.mark.parametrize("value", [{"name": "Cow"}, {"name": "Cow", "wallet": None}])
    def test_missing_member(self, structs, value):
        with pytest.raises(TypedValueError, match="missing field 'wallet'") as exc_info:
            encode_data(structs["Person"], value, "message.from", _no_structs)
        assert exc_info.value.path == "message.from.wallet"

    def test_invalid_member_path(self, structs):
        with pytest.raises(TypedValueError) as exc_info:
            encode_data(structs["Person"], {"name": "Cow", "wallet": "0x12"}, "message.to", _no_structs)
        assert exc_info.value.path == "message.to.wallet"
        assert str(exc_info.value).startswith("message.to.wallet: ")

    def test_struct_value_must_be_mapping(self, structs):
        with pytest.raises(TypedValueError, match="expected struct Person"):
            encode_field(parse_type("Person"), "Cow", "message.from", _no_structs)

    def test_typed_value_error_is_value_error(self, structs):
        with pytest.raises(ValueError):
            encode_data(structs["Person"], {"name": 1, "wallet": ADDRESS}, "", _no_structs)
