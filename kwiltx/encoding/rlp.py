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
"""Canonical length prefixed encoding of byte strings and lists.

A byte string is its length prefix plus its raw bytes, a list is a length prefix
over the concatenation of its encoded items. Leaves may be bytes or hex strings
(see `kwiltx.encoding.serial.hexlify`). Mappings are encoded as the list of
their values, in insertion order.
"""

from typing import Mapping, Sequence, Union

from kwiltx.encoding.serial import hex_to_bytes

SHORT_STRING = 0x80
LONG_STRING = 0xb7
SHORT_LIST = 0xc0
LONG_LIST = 0xf7
SHORT_LIMIT = 55

Encodable = Union[bytes, bytearray, str, Sequence, Mapping]


def encode(structure: Encodable) -> bytes:
    if isinstance(structure, (bytes, bytearray)):
        return _encode_bytes(bytes(structure))

    if isinstance(structure, str):
        return _encode_bytes(hex_to_bytes(structure))

    if isinstance(structure, Mapping):
        structure = list(structure.values())

    if isinstance(structure, (list, tuple)):
        payload = b''.join(encode(item) for item in structure)
        return _encode_length(len(payload), SHORT_LIST) + payload

    raise TypeError(f"Cannot encode {type(structure).__name__}. Hexlify the value first.")


def _encode_bytes(data: bytes) -> bytes:
    if len(data) == 1 and data[0] < SHORT_STRING:
        return data
    return _encode_length(len(data), SHORT_STRING) + data


def _encode_length(length: int, offset: int) -> bytes:
    if length <= SHORT_LIMIT:
        return bytes([offset + length])

    length_bytes = length.to_bytes((length.bit_length() + 7) // 8, 'big')
    return bytes([offset + SHORT_LIMIT + len(length_bytes)]) + length_bytes


def decode(data: bytes):
    """Decode to nested lists of bytes. The whole input must be consumed."""
    data = bytes(data)
    item, end = _decode_item(data, 0)
    if end != len(data):
        raise ValueError(f"Trailing bytes after encoded item. ({len(data) - end} bytes)")
    return item


def _decode_item(data: bytes, pos: int):
    if pos >= len(data):
        raise ValueError("Unexpected end of input.")

    prefix = data[pos]
    if prefix < SHORT_STRING:
        return data[pos:pos + 1], pos + 1

    if prefix < SHORT_LIST:
        length, start = _decode_length(data, pos, prefix, SHORT_STRING, LONG_STRING)
        return data[start:start + length], start + length

    length, start = _decode_length(data, pos, prefix, SHORT_LIST, LONG_LIST)
    end = start + length
    items = []
    cursor = start
    while cursor < end:
        item, cursor = _decode_item(data, cursor)
        items.append(item)
    if cursor != end:
        raise ValueError("List payload overruns its declared length.")
    return items, end


def _decode_length(data: bytes, pos: int, prefix: int, short_offset: int, long_offset: int):
    if prefix <= long_offset:
        length, start = prefix - short_offset, pos + 1
    else:
        length_size = prefix - long_offset
        length_bytes = data[pos + 1:pos + 1 + length_size]
        if len(length_bytes) != length_size:
            raise ValueError("Unexpected end of input in length prefix.")
        length, start = int.from_bytes(length_bytes, 'big'), pos + 1 + length_size

    if start + length > len(data):
        raise ValueError("Unexpected end of input.")
    return length, start
