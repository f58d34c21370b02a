# Copyright 2018 ICON Foundation
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Converters between logical values, hex strings and portable text (base64)"""

import base64
from decimal import Decimal
from typing import Mapping

HEX_PREFIX = "0x"


def string_to_hex(value: str) -> str:
    return HEX_PREFIX + value.encode('utf-8').hex()


def hex_to_string(value: str) -> str:
    return hex_to_bytes(value).decode('utf-8')


def number_to_hex(value: int) -> str:
    """Minimal big endian hex. Zero is the empty hex string '0x'."""
    if value < 0:
        raise ValueError(f"number_to_hex requires a non negative integer. ({value})")
    if value == 0:
        return HEX_PREFIX
    return HEX_PREFIX + value.to_bytes((value.bit_length() + 7) // 8, 'big').hex()


def hex_to_number(value: str) -> int:
    data = hex_to_bytes(value)
    return int.from_bytes(data, 'big') if data else 0


def bytes_to_hex(value: bytes) -> str:
    return HEX_PREFIX + bytes(value).hex()


def hex_to_bytes(value: str) -> bytes:
    if value.startswith(HEX_PREFIX) or value.startswith("0X"):
        value = value[2:]
    return bytes.fromhex(value)


def bytes_to_base64(value: bytes) -> str:
    return base64.b64encode(bytes(value)).decode('utf-8')


def base64_to_bytes(value: str) -> bytes:
    return base64.b64decode(value.encode('utf-8'))


def hexlify(value):
    """Convert a json like value into the same shape with hex string leaves.

    str -> utf-8 bytes, bool -> 0x01/0x00, non negative int -> minimal big endian,
    None -> empty, a set -> its items sorted by their hex form. Numbers that have no unsigned integer form (negative, fractional)
    are written as the utf-8 bytes of their text. Never raises for json like input.
    """
    if isinstance(value, str):
        return string_to_hex(value)

    # bool is a subclass of int
    if isinstance(value, bool):
        return "0x01" if value else "0x00"

    if isinstance(value, int):
        return number_to_hex(value) if value >= 0 else string_to_hex(str(value))

    if isinstance(value, float):
        if value.is_integer():
            return hexlify(int(value))
        return string_to_hex(repr(value))

    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return hexlify(int(value))
        return string_to_hex(str(value))

    if isinstance(value, (bytes, bytearray)):
        return bytes_to_hex(value)

    if value is None:
        return HEX_PREFIX

    if isinstance(value, Mapping):
        return {key: hexlify(item) for key, item in value.items()}

    if isinstance(value, (list, tuple)):
        return [hexlify(item) for item in value]

    # Sets have no order of their own, sort them by their hexlified form.
    if isinstance(value, (set, frozenset)):
        return sorted((hexlify(item) for item in value), key=repr)

    to_entries = getattr(value, "to_entries", None)
    if callable(to_entries):
        return hexlify(to_entries())

    return string_to_hex(str(value))
