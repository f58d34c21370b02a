from dataclasses import dataclass, fields, replace
from typing import Optional, Union


@dataclass(frozen=True)
class TxBody:
    payload: Optional[str] = None
    payload_type: Optional[str] = None
    fee: Optional[str] = None
    # int in the logical form, hex string in the scalar form
    nonce: Optional[Union[int, str]] = None
    salt: Optional[str] = None

    def copy(self, **changes) -> 'TxBody':
        return replace(self, **changes)


@dataclass(frozen=True)
class TxSignature:
    signature_bytes: str
    signature_type: str


@dataclass(frozen=True)
class Transaction:
    sender: str
    body: TxBody
    signature: Optional[TxSignature] = None

    def __str__(self):
        fields_str = ', '.join(f"{f.name}={getattr(self, f.name)}" for f in fields(self))
        return f"{self.__class__.__qualname__}({fields_str})"

    def copy(self, **changes) -> 'Transaction':
        return replace(self, **changes)

    def copy_body(self, **changes) -> 'Transaction':
        return replace(self, body=replace(self.body, **changes))

    def is_signed(self):
        return self.signature is not None
