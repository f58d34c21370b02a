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
"""Digest functions used by signing and recovery"""

from Crypto.Hash import keccak

PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n"


class Keccak256:
    """hashlib style constructor, so it can be passed as `digest=` to secp256k1."""

    def __init__(self, data: bytes = b''):
        self._hash = keccak.new(digest_bits=256)
        if data:
            self._hash.update(data)

    def update(self, data: bytes):
        self._hash.update(data)

    def digest(self) -> bytes:
        return self._hash.digest()

    def hexdigest(self) -> str:
        return self._hash.hexdigest()


def keccak256(data: bytes) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"keccak256 expects bytes-like input, not {type(data).__name__}")
    return Keccak256(bytes(data)).digest()


def personal_message_hash(message: bytes) -> bytes:
    """Digest of an EIP-191 personal message ('\\x19Ethereum Signed Message:\\n' + len + message)."""
    message = bytes(message)
    return keccak256(PERSONAL_MESSAGE_PREFIX + str(len(message)).encode() + message)
