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
""" Signing capabilities a transaction builder can be given"""

import inspect
from abc import ABCMeta, abstractmethod
from typing import Callable, Union

from asn1crypto import keys
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from secp256k1 import PrivateKey

from kwiltx import utils
from kwiltx.blockchain.types import Signature
from kwiltx.crypto.hashing import personal_message_hash


class Signer(metaclass=ABCMeta):
    """What the builder needs from a wallet: who signs, and a signature over raw bytes.

    Implementations may wait for an external approval in both calls.
    """

    @abstractmethod
    async def address(self) -> str:
        raise NotImplementedError

    @abstractmethod
    async def sign(self, message: bytes) -> bytes:
        """Sign `message` as a personal message. Returns 65 bytes r || s || v."""
        raise NotImplementedError


class PrivateKeySigner(Signer):
    def __init__(self, private_key: PrivateKey):
        self.private_key = private_key
        self._address = utils.address_from_pubkey(private_key.pubkey.serialize(compressed=False))

    async def address(self) -> str:
        return self._address

    async def sign(self, message: bytes) -> Signature:
        return self.sign_message(message)

    def sign_message(self, message: bytes) -> Signature:
        if not isinstance(message, (bytes, bytearray)):
            raise TypeError(f"message must be bytes, not {type(message).__name__}")

        raw_sig = self.private_key.ecdsa_sign_recoverable(msg=personal_message_hash(message), raw=True)
        serialized_sig, recover_id = self.private_key.ecdsa_recoverable_serialize(raw_sig)
        return Signature(serialized_sig + bytes([27 + recover_id]))

    @classmethod
    def new(cls):
        return cls.from_prikey(PrivateKey().private_key)

    @classmethod
    def from_prikey(cls, prikey: bytes):
        from kwiltx.crypto.signature.verifier import SignVerifier

        signer = cls(PrivateKey(prikey))

        signature = signer.sign_message(b'TEST')
        verifier = SignVerifier.from_address(signer._address)
        if verifier.verify_message(b'TEST', signature).result is False:
            raise ValueError("Invalid Signature.")
        return signer

    @classmethod
    def from_prikey_file(cls, prikey_file: str, password: Union[str, bytes]):
        if isinstance(password, str):
            password = password.encode()

        if not (prikey_file.endswith('.der') or prikey_file.endswith('.pem')):
            raise ValueError(f"Unsupported key file({prikey_file}). Use .der or .pem")

        with open(prikey_file, "rb") as file:
            private_bytes = file.read()
        try:
            if prikey_file.endswith('.der'):
                temp_private = serialization.load_der_private_key(private_bytes, password, default_backend())
            else:
                temp_private = serialization.load_pem_private_key(private_bytes, password, default_backend())
        except (ValueError, TypeError) as e:
            raise ValueError(f"Invalid Password: {e}")

        no_pass_private = temp_private.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption()
        )
        key_info = keys.PrivateKeyInfo.load(no_pass_private)
        prikey = utils.long_to_bytes(key_info['private_key'].native['private_key'])
        return cls.from_prikey(prikey.rjust(32, b'\x00'))


class CallbackSigner(Signer):
    """Adapter over an externally managed wallet (browser injected, hardware, remote).

    Both callables may be plain functions or coroutine functions. A hex string
    signature ('0x...') is accepted as well as raw bytes.
    """

    def __init__(self, address_fn: Callable, sign_fn: Callable):
        self._address_fn = address_fn
        self._sign_fn = sign_fn

    async def address(self) -> str:
        return await self._resolve(self._address_fn())

    async def sign(self, message: bytes) -> bytes:
        signature = await self._resolve(self._sign_fn(bytes(message)))
        if isinstance(signature, str):
            signature = bytes.fromhex(signature[2:] if signature.startswith("0x") else signature)
        return signature

    @staticmethod
    async def _resolve(value):
        if inspect.isawaitable(value):
            return await value
        return value
