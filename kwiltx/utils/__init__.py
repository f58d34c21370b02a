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
""" A module for utility"""

from binascii import unhexlify
from urllib.parse import urlparse

import verboselogs

from kwiltx import configure as conf

logger = verboselogs.VerboseLogger("kwiltx")


def long_to_bytes(val, endianness='big'):
    """Use :ref:`string formatting` and :func:`~binascii.unhexlify` to
    convert ``val``, a :func:`long`, to a byte :func:`str`.

    :param long val: The value to pack

    :param str endianness: The endianness of the result. ``'big'`` for
      big-endian, ``'little'`` for little-endian.
    """

    # one (1) hex digit per four (4) bits
    width = val.bit_length()

    # unhexlify wants an even multiple of eight (8) bits, but we don't
    # want more digits than we need (hence the ternary-ish 'or')
    width += 8 - ((width % 8) or 8)

    # format width specifier: four (4) bits per hex digit
    fmt = '%%0%dx' % (width // 4)

    # prepend zero (0) to the width, to zero-pad the output
    s = unhexlify(fmt % val)

    if endianness == 'little':
        s = s[::-1]

    return s


def address_from_pubkey(pubkey: bytes) -> str:
    """Ethereum style address of an uncompressed (65 bytes) public key."""
    from kwiltx.crypto.hashing import keccak256

    return "0x" + keccak256(pubkey[1:])[-20:].hex()


def normalize_request_url(url_input, version=None):
    """Turn a provider given by the user into '{scheme}://{netloc}{api path}'.

    ex) localhost:8484 => http://localhost:8484/api/v1
        https://kwil.example.org => https://kwil.example.org/api/v1
    """
    if version is None:
        version = conf.KWIL_API_VERSION

    if not url_input:
        url_input = conf.KWIL_PROVIDER
    if '://' not in url_input:
        url_input = f"http://{url_input}"

    parsed = urlparse(url_input)
    if version == conf.ApiVersion.rpc:
        return f"{parsed.scheme}://{parsed.netloc}/rpc/v1"
    return f"{parsed.scheme}://{parsed.netloc}/api/{version.name}"
