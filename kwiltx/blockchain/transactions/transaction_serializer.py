from typing import TYPE_CHECKING

from kwiltx.encoding import rlp
from kwiltx.encoding.serial import (string_to_hex, hex_to_string, number_to_hex, hex_to_number,
                                    bytes_to_hex, hex_to_bytes, bytes_to_base64, base64_to_bytes)
from kwiltx.blockchain.transactions.transaction import Transaction, TxBody, TxSignature

if TYPE_CHECKING:
    from typing import List


class TransactionSerializer:
    """Moves a transaction between its representations.

    logical: payload and salt are portable text (base64), fee a decimal string, nonce an int.
    hex payload: logical, except the payload is hex text. The builder signs from this form.
    scalar: every body field is a hex string, ready for the canonical encoding.
    """

    # Order of the encoded body. Sender and signature are never encoded.
    signing_fields = ("payload", "payload_type", "fee", "nonce", "salt")

    def to_raw_data(self, tx: 'Transaction') -> dict:
        raw_data = {"sender": tx.sender}

        body = {}
        for name in self.signing_fields:
            value = getattr(tx.body, name)
            if value is not None:
                body[name] = value
        raw_data["body"] = body

        if tx.signature is not None:
            raw_data["signature"] = {
                "signature_bytes": tx.signature.signature_bytes,
                "signature_type": tx.signature.signature_type
            }
        return raw_data

    def from_(self, tx_data: dict) -> 'Transaction':
        body_data = tx_data.get("body") or {}
        nonce = body_data.get("nonce")
        if nonce is not None:
            nonce = int(nonce)

        signature_data = tx_data.get("signature")
        signature = None
        if signature_data:
            signature = TxSignature(signature_bytes=signature_data["signature_bytes"],
                                    signature_type=signature_data["signature_type"])

        return Transaction(
            sender=tx_data["sender"],
            body=TxBody(
                payload=body_data.get("payload"),
                payload_type=body_data.get("payload_type"),
                fee=None if body_data.get("fee") is None else str(body_data["fee"]),
                nonce=nonce,
                salt=body_data.get("salt")
            ),
            signature=signature
        )

    def to_hex_payload(self, body: TxBody) -> TxBody:
        return body.copy(payload=bytes_to_hex(base64_to_bytes(body.payload)))

    def to_portable_payload(self, body: TxBody) -> TxBody:
        return body.copy(payload=bytes_to_base64(hex_to_bytes(body.payload)))

    def to_scalar_body(self, body: TxBody) -> TxBody:
        """hex payload form -> scalar form"""
        return TxBody(
            payload=body.payload,
            payload_type=string_to_hex(body.payload_type),
            fee=string_to_hex(body.fee),
            nonce=number_to_hex(int(body.nonce)),
            salt=bytes_to_hex(base64_to_bytes(body.salt))
        )

    def from_scalar_body(self, body: TxBody) -> TxBody:
        """scalar form -> logical form"""
        return TxBody(
            payload=bytes_to_base64(hex_to_bytes(body.payload)),
            payload_type=hex_to_string(body.payload_type),
            fee=hex_to_string(body.fee),
            nonce=hex_to_number(body.nonce),
            salt=bytes_to_base64(hex_to_bytes(body.salt))
        )

    def to_signing_data(self, scalar_body: TxBody) -> 'List[str]':
        return [getattr(scalar_body, name) for name in self.signing_fields]

    def encode_body(self, scalar_body: TxBody) -> bytes:
        return rlp.encode(self.to_signing_data(scalar_body))
