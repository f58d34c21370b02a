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
""" Public key recovery and signature verification of personal messages"""

import logging
from collections import namedtuple
from typing import Union

from secp256k1 import PrivateKey, PublicKey as Secp256k1PublicKey

from kwiltx import utils
from kwiltx.blockchain.types import Signature, PublicKey, ExternalAddress
from kwiltx.crypto.hashing import personal_message_hash

_recovery_key = PrivateKey()


def recover_public_key(message: bytes, signature: Union[bytes, Signature]) -> PublicKey:
    """Recover the uncompressed public key which signed `message` as a personal message.

    :param message: the exact signed bytes, before the personal message digest
    :param signature: 65 bytes r || s || v, v in (0, 1, 27, 28)
    :return: 65 bytes 0x04 || X || Y
    """
    if not isinstance(signature, Signature):
        signature = Signature(signature)

    recoverable_sig = _recovery_key.ecdsa_recoverable_deserialize(signature.signature(), signature.recover_id())
    pub = _recovery_key.ecdsa_recover(personal_message_hash(message),
                                      recover_sig=recoverable_sig,
                                      raw=True)
    return PublicKey(Secp256k1PublicKey(pub).serialize(compressed=False))


class SignVerifier:
    VerifiedAddress = namedtuple("VerifiedAddress", "result expected_address")

    def __init__(self):
        self.address: ExternalAddress = None

    def verify_message(self, message: bytes, signature: Union[bytes, Signature]) -> 'VerifiedAddress':
        try:
            pubkey = recover_public_key(message, signature)
        except Exception as e:
            logging.debug(f"Fail to recover the signer : ({message})/({signature})\n{e}")
            return self.VerifiedAddress(False, None)

        expected_address = ExternalAddress.fromhex_address(utils.address_from_pubkey(pubkey))
        return self.VerifiedAddress(expected_address == self.address, expected_address)

    @classmethod
    def from_address(cls, address: str):
        verifier = cls()
        verifier.address = ExternalAddress.fromhex_address(address.lower())
        return verifier

    @classmethod
    def from_pubkey(cls, pubkey: bytes):
        return cls.from_address(utils.address_from_pubkey(pubkey))
