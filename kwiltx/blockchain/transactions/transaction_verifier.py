import base64
from typing import TYPE_CHECKING

from kwiltx.blockchain.exception import TransactionInvalidSignatureError
from kwiltx.blockchain.transactions.transaction_serializer import TransactionSerializer
from kwiltx.blockchain.types import SignatureType
from kwiltx.crypto.signature import recover_public_key

if TYPE_CHECKING:
    from kwiltx.blockchain.transactions import Transaction


class TransactionVerifier:
    def __init__(self, raise_exceptions=True):
        self.exceptions = []

        self._tx_serializer = TransactionSerializer()
        self._raise_exceptions = raise_exceptions

    def verify(self, tx: 'Transaction'):
        self.verify_signature(tx)

    def verify_signature(self, tx: 'Transaction'):
        if not tx.is_signed():
            exception = TransactionInvalidSignatureError(tx, message="Transaction is not signed.")
            self._handle_exceptions(exception)
            return

        if tx.signature.signature_type != SignatureType.SECP256K1_PERSONAL:
            exception = TransactionInvalidSignatureError(
                tx, message=f"Unsupported signature type({tx.signature.signature_type})."
            )
            self._handle_exceptions(exception)
            return

        try:
            body = self._tx_serializer.to_hex_payload(tx.body)
            message = self._tx_serializer.encode_body(self._tx_serializer.to_scalar_body(body))
            signature = base64.b64decode(tx.signature.signature_bytes)
            pubkey = recover_public_key(message, signature)
            expected_sender = base64.b64decode(tx.sender)
        except Exception as e:
            exception = TransactionInvalidSignatureError(tx, message=str(e))
            self._handle_exceptions(exception)
            return

        if pubkey != expected_sender:
            exception = TransactionInvalidSignatureError(
                tx, message=f"Recovered public key({pubkey.hex_0x()}) does not match the sender."
            )
            self._handle_exceptions(exception)

    def _handle_exceptions(self, exception: Exception):
        if self._raise_exceptions:
            raise exception
        else:
            self.exceptions.append(exception)
