from .serial import (string_to_hex, hex_to_string, number_to_hex, hex_to_number, bytes_to_hex, hex_to_bytes,
                     bytes_to_base64, base64_to_bytes, hexlify)
from .rlp import encode, decode
