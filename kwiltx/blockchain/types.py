import base64
from enum import Enum


class Bytes(bytes):
    size = None
    prefix = None

    def __new__(cls, *args, **kwargs):
        self = super().__new__(cls, *args, **kwargs)
        if cls.size is not None and cls.size != len(self):
            raise ValueError(f"Invalid size. {cls.__qualname__} requires {cls.size} bytes, got {len(self)}")

        return self

    def __repr__(self):
        type_name = type(self).__qualname__
        return type_name + "(" + super().__repr__() + ")"

    def __str__(self):
        type_name = type(self).__qualname__
        return type_name + "(" + self.hex_xx() + ")"

    def hex_xx(self):
        if self.prefix:
            return self.prefix + self.hex()
        return self.hex()

    def to_base64(self):
        return base64.b64encode(self)

    def to_base64str(self):
        return self.to_base64().decode('utf-8')


class VarBytes(Bytes):
    prefix = '0x'

    def hex_0x(self):
        return self.prefix + self.hex()


class Salt(VarBytes):
    size = None


class PublicKey(VarBytes):
    """Uncompressed secp256k1 public key, 0x04 || X || Y."""
    size = 65


class ExternalAddress(VarBytes):
    size = 20

    @classmethod
    def fromhex_address(cls, value: str):
        contents = value[2:] if value.startswith(cls.prefix) else value
        if len(contents) != cls.size * 2:
            raise ValueError(f"Invalid size. {cls.__qualname__}, {value}")

        return cls(bytes.fromhex(contents))


class Recoverable:
    def recover_id(self):
        v = self[-1]
        return v - 27 if v >= 27 else v


class Signature(VarBytes, Recoverable):
    """Recoverable ECDSA signature, r || s || v."""
    size = 65

    def signature(self):
        return self[:-1]

    def __str__(self):
        type_name = type(self).__qualname__
        return type_name + "(" + self.to_base64str() + ")"


class PayloadType(str, Enum):
    RAW_STATEMENT = "raw_statement"
    EXECUTE = "execute"
    TRANSFER = "transfer"
    DEPLOY_SCHEMA = "deploy_schema"
    DROP_SCHEMA = "drop_schema"
    EXECUTE_ACTION = "execute_action"
    CALL_ACTION = "call_action"
    VALIDATOR_JOIN = "validator_join"
    VALIDATOR_APPROVE = "validator_approve"
    VALIDATOR_REMOVE = "validator_remove"
    VALIDATOR_LEAVE = "validator_leave"
    CREATE_RESOLUTION = "create_resolution"
    APPROVE_RESOLUTION = "approve_resolution"
    DELETE_RESOLUTION = "delete_resolution"


class SignatureType(str, Enum):
    SECP256K1_PERSONAL = "secp256k1_ep"
