from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from kwiltx import configure as conf
from kwiltx import utils
from kwiltx.blockchain.exception import (MissingPayloadError, MissingPayloadTypeError, MissingSignerError,
                                         AccountLookupError, EstimationError, SigningError)
from kwiltx.blockchain.transactions.transaction import Transaction, TxBody, TxSignature
from kwiltx.blockchain.transactions.transaction_serializer import TransactionSerializer
from kwiltx.blockchain.types import PayloadType, Signature, SignatureType
from kwiltx.crypto.salt import generate_salt
from kwiltx.crypto.signature import Signer, recover_public_key
from kwiltx.encoding import rlp
from kwiltx.encoding.serial import hexlify, bytes_to_base64
from kwiltx.statemachine import statemachine

if TYPE_CHECKING:
    from kwiltx.baseservice import RestClient, RestResponse


class TransactionBuilder:
    """Configuration of a transaction. Every `build()` runs on its own `TransactionBuild`.

    ex)
        builder = TransactionBuilder(RestClient())
        builder.signer = PrivateKeySigner.from_prikey(prikey)
        builder.payload_type = PayloadType.EXECUTE
        builder.payload = ActionBody(namespace, "insert_user", [inputs]).to_payload()
        tx = await builder.build()
    """

    def __init__(self, client: 'RestClient'):
        if client is None:
            raise ValueError("client is required.")

        self.client = client

        # Attributes that must be assigned
        self.signer: Signer = None
        self._payload: Callable[[], Any] = None
        self._payload_type: PayloadType = None

    @property
    def payload(self) -> Optional[Callable[[], Any]]:
        """Always a zero argument supplier, even if a plain value was assigned."""
        return self._payload

    @payload.setter
    def payload(self, payload: Union[Callable[[], Any], Any]):
        if payload is None:
            self._payload = None
        elif callable(payload):
            self._payload = payload
        else:
            self._payload = lambda: payload

    @property
    def payload_type(self) -> Optional[PayloadType]:
        return self._payload_type

    @payload_type.setter
    def payload_type(self, payload_type: Union[PayloadType, str]):
        self._payload_type = None if payload_type is None else PayloadType(payload_type)

    def reset(self):
        self.signer = None
        self._payload = None
        self._payload_type = None

    async def build(self) -> Transaction:
        if self._payload is None:
            raise MissingPayloadError()
        if self._payload_type is None:
            raise MissingPayloadTypeError()
        if self.signer is None:
            raise MissingSignerError()

        tx_build = TransactionBuild(self.client, self.signer, self._payload, self._payload_type)
        return await tx_build.run()


@statemachine.StateMachine("Transaction Build")
class TransactionBuild:
    """One run of build -> estimate -> sign. Not reusable, never shared."""

    states = ['Unbuilt', 'Estimating', 'Estimated', 'Signing', 'Signed']
    init_state = 'Unbuilt'

    def __init__(self, client: 'RestClient', signer: Signer, payload_supplier: Callable[[], Any],
                 payload_type: PayloadType):
        self._client = client
        self._signer = signer
        self._payload = payload_supplier()
        if self._payload is None:
            raise MissingPayloadError("payload supplier returned None.")
        self._payload_type = payload_type
        self._tx_serializer = TransactionSerializer()

        # Attributes to be generated
        self.sender: str = None
        self.account_nonce: int = None
        self.tx: Transaction = None
        self.scalar_body: TxBody = None
        self.encoded_body: bytes = None

    async def run(self) -> Transaction:
        sender = (await self._signer.address()).lower()
        account_response = await self._client.get_account(sender)
        self.begin_estimate(sender, account_response)

        cost_response = await self._client.estimate_cost(self.tx)
        self.complete_estimate(cost_response)

        self.begin_sign(generate_salt())
        signature = await self._sign(self.encoded_body)
        self.complete_sign(signature)

        return self.tx

    @statemachine.transition(source='Unbuilt', dest='Estimating')
    def begin_estimate(self, sender: str, account_response: 'RestResponse'):
        account = account_response.data
        if account_response.status != conf.HTTP_STATUS_OK or not account:
            raise AccountLookupError(sender, account_response.status)

        nonce = account.get("nonce") if isinstance(account, dict) else getattr(account, "nonce", None)
        if nonce is None:
            raise AccountLookupError(sender, account_response.status)

        try:
            self.account_nonce = int(nonce)
        except (TypeError, ValueError) as e:
            raise AccountLookupError(sender, account_response.status) from e
        self.sender = sender

        encoded_payload = rlp.encode(hexlify(self._payload))
        self.tx = Transaction(
            sender=sender,
            body=TxBody(payload=bytes_to_base64(encoded_payload), payload_type=self._payload_type.value)
        )
        utils.logger.spam(f"estimate cost of {self.tx}")

    @statemachine.transition(source='Estimating', dest='Estimated')
    def complete_estimate(self, cost_response: 'RestResponse'):
        if cost_response.status != conf.HTTP_STATUS_OK or cost_response.data is None or cost_response.data == "":
            raise EstimationError(cost_response.status)

        # The account nonce is not checked again before signing.
        self.tx = self.tx.copy(body=self._tx_serializer.to_hex_payload(self.tx.body).copy(
            fee=str(cost_response.data),
            nonce=self.account_nonce + 1
        ))

    @statemachine.transition(source='Estimated', dest='Signing')
    def begin_sign(self, salt: bytes):
        body = self.tx.body.copy(salt=bytes_to_base64(salt))
        self.scalar_body = self._tx_serializer.to_scalar_body(body)
        self.encoded_body = self._tx_serializer.encode_body(self.scalar_body)

    @statemachine.transition(source='Signing', dest='Signed')
    def complete_sign(self, signature: Signature):
        try:
            pubkey = recover_public_key(self.encoded_body, signature)
        except Exception as e:
            raise SigningError(f"no public key recovers from the signature: {e}") from e

        self.tx = Transaction(
            sender=pubkey.to_base64str(),
            body=self._tx_serializer.from_scalar_body(self.scalar_body),
            signature=TxSignature(signature_bytes=signature.to_base64str(),
                                  signature_type=SignatureType.SECP256K1_PERSONAL.value)
        )
        utils.logger.debug(f"signed {self.tx}")

    async def _sign(self, message: bytes) -> Signature:
        try:
            signature = await self._signer.sign(message)
        except Exception as e:
            raise SigningError(f"signer failed to sign the transaction: {e}") from e

        try:
            return Signature(signature)
        except (TypeError, ValueError) as e:
            raise SigningError(f"signer returned a malformed signature: {e}") from e
