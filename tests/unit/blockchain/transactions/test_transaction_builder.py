import base64

import pytest
from transitions import MachineError

from kwiltx.baseservice import RestResponse
from kwiltx.blockchain.exception import (MissingPayloadError, MissingPayloadTypeError, MissingSignerError,
                                         AccountLookupError, EstimationError, SigningError, TransactionBuildError)
from kwiltx.blockchain.transactions import Transaction, TransactionBuilder, TransactionBuild, TransactionVerifier
from kwiltx.blockchain.types import PayloadType
from kwiltx.crypto.signature import CallbackSigner
from kwiltx.encoding import rlp
from kwiltx.encoding.serial import hexlify
from tests.unit import test_util
from tests.unit.blockchain.conftest import FakeClient


class TestTransactionBuilder:
    def test_build(self, built_tx: Transaction, fake_client: FakeClient):
        assert built_tx.body.nonce == 6
        assert built_tx.body.fee == "100"
        assert built_tx.body.payload_type == "execute"
        assert built_tx.signature.signature_type == "secp256k1_ep"
        assert len(base64.b64decode(built_tx.signature.signature_bytes)) == 65
        assert len(base64.b64decode(built_tx.body.salt)) == 16
        assert base64.b64decode(built_tx.body.payload) == rlp.encode(hexlify({"a": 1}))

        TransactionVerifier().verify(built_tx)

    def test_sender_is_public_key_of_signer(self, built_tx: Transaction, signer):
        pubkey = signer.private_key.pubkey.serialize(compressed=False)

        assert base64.b64decode(built_tx.sender) == pubkey

    def test_account_lookup_uses_lowercase_address(self, fake_client: FakeClient, signer):
        address = test_util.run(signer.address())
        tx_builder = TransactionBuilder(fake_client)
        tx_builder.signer = CallbackSigner(lambda: address.upper().replace("0X", "0x"), signer.sign)
        tx_builder.payload = {"a": 1}
        tx_builder.payload_type = PayloadType.EXECUTE

        test_util.run(tx_builder.build())

        assert fake_client.requested_accounts == [address]

    def test_estimate_gets_unsigned_draft(self, built_tx: Transaction, fake_client: FakeClient):
        draft = fake_client.estimated_txs[0]

        assert not draft.is_signed()
        assert draft.body.fee is None
        assert draft.body.nonce is None
        assert draft.body.salt is None
        assert draft.body.payload == built_tx.body.payload

    def test_builds_are_independent(self, tx_builder: TransactionBuilder):
        tx1 = test_util.run(tx_builder.build())
        tx2 = test_util.run(tx_builder.build())

        assert tx1.body.salt != tx2.body.salt
        assert tx1.signature != tx2.signature

    def test_salt_is_fresh_per_build(self, tx_builder: TransactionBuilder):
        salts = {test_util.run(tx_builder.build()).body.salt for _ in range(100)}

        assert len(salts) == 100

    def test_payload_supplier_is_resolved_per_build(self, tx_builder: TransactionBuilder, fake_client: FakeClient):
        calls = []

        def supplier():
            calls.append(1)
            return {"count": len(calls)}

        tx_builder.payload = supplier
        test_util.run(tx_builder.build())
        test_util.run(tx_builder.build())

        assert len(calls) == 2
        assert fake_client.estimated_txs[0].body.payload != fake_client.estimated_txs[1].body.payload

    def test_plain_payload_is_wrapped_in_supplier(self, tx_builder: TransactionBuilder):
        tx_builder.payload = [1, 2]

        assert callable(tx_builder.payload)
        assert tx_builder.payload() == [1, 2]

    def test_unknown_payload_type_raises(self, tx_builder: TransactionBuilder):
        with pytest.raises(ValueError):
            tx_builder.payload_type = "unknown"

    def test_client_is_required(self):
        with pytest.raises(ValueError):
            TransactionBuilder(None)


class TestTransactionBuilderPreconditions:
    @pytest.mark.parametrize("attr_name, exception_type", [
        ("payload", MissingPayloadError),
        ("payload_type", MissingPayloadTypeError),
        ("signer", MissingSignerError),
    ])
    def test_missing_attribute(self, tx_builder: TransactionBuilder, fake_client: FakeClient,
                               attr_name, exception_type):
        setattr(tx_builder, attr_name, None)

        with pytest.raises(exception_type):
            test_util.run(tx_builder.build())

        assert not fake_client.requested_accounts
        assert not fake_client.estimated_txs

    def test_supplier_returns_none_fails_before_network(self, tx_builder: TransactionBuilder,
                                                        fake_client: FakeClient):
        tx_builder.payload = lambda: None

        with pytest.raises(MissingPayloadError):
            test_util.run(tx_builder.build())

        assert not fake_client.requested_accounts
        assert not fake_client.estimated_txs

    def test_errors_share_base(self):
        for exception_type in (MissingPayloadError, MissingPayloadTypeError, MissingSignerError,
                               AccountLookupError, EstimationError, SigningError):
            assert issubclass(exception_type, TransactionBuildError)


class TestTransactionBuilderRemoteFailure:
    @pytest.mark.parametrize("account_response", [
        RestResponse(404, None),
        RestResponse(200, None),
        RestResponse(200, {}),
        RestResponse(200, {"balance": "0"}),
        RestResponse(200, {"nonce": "not-a-number"}),
        RestResponse(200, {"nonce": [5]}),
    ])
    def test_account_lookup_fails(self, tx_builder: TransactionBuilder, fake_client: FakeClient,
                                  account_response):
        fake_client.account_response = account_response

        with pytest.raises(AccountLookupError) as exc_info:
            test_util.run(tx_builder.build())

        assert exc_info.value.status == account_response.status
        assert not fake_client.estimated_txs

    @pytest.mark.parametrize("price_response", [
        RestResponse(500, None),
        RestResponse(200, None),
        RestResponse(200, ""),
    ])
    def test_estimation_fails(self, tx_builder: TransactionBuilder, fake_client: FakeClient, price_response):
        fake_client.price_response = price_response

        with pytest.raises(EstimationError):
            test_util.run(tx_builder.build())

    def test_zero_fee_is_valid(self, tx_builder: TransactionBuilder, fake_client: FakeClient):
        fake_client.price_response = RestResponse(200, "0")

        assert test_util.run(tx_builder.build()).body.fee == "0"


class TestTransactionBuilderSigning:
    def test_signer_raises(self, tx_builder: TransactionBuilder, signer):
        def refuse(message):
            raise RuntimeError("user rejected")

        tx_builder.signer = CallbackSigner(signer.address, refuse)

        with pytest.raises(SigningError):
            test_util.run(tx_builder.build())

    @pytest.mark.parametrize("signature", [
        b"\x00" * 64,
        b"\x00" * 66,
        None,
        b"\x00" * 65,
        b"\x11" * 64 + bytes([99]),
    ])
    def test_malformed_signature(self, tx_builder: TransactionBuilder, signer, signature):
        tx_builder.signer = CallbackSigner(signer.address, lambda message: signature)

        with pytest.raises(SigningError):
            test_util.run(tx_builder.build())

    def test_async_external_signer(self, tx_builder: TransactionBuilder, signer):
        async def sign(message):
            return (await signer.sign(message)).hex()

        tx_builder.signer = CallbackSigner(signer.address, sign)
        tx = test_util.run(tx_builder.build())

        TransactionVerifier().verify(tx)


class TestTransactionBuild:
    @pytest.fixture
    def tx_build(self, fake_client: FakeClient, signer) -> TransactionBuild:
        return TransactionBuild(fake_client, signer, lambda: {"a": 1}, PayloadType.EXECUTE)

    def test_states(self, tx_build: TransactionBuild):
        assert tx_build.state == 'Unbuilt'

        test_util.run(tx_build.run())

        assert tx_build.state == 'Signed'

    def test_failed_step_keeps_state(self, tx_build: TransactionBuild):
        with pytest.raises(AccountLookupError):
            tx_build.begin_estimate("0xaa", RestResponse(404, None))

        assert tx_build.state == 'Unbuilt'

    def test_step_out_of_order_raises(self, tx_build: TransactionBuild):
        with pytest.raises(MachineError):
            tx_build.complete_estimate(RestResponse(200, "100"))

        assert tx_build.state == 'Unbuilt'

    def test_signed_build_can_not_run_again(self, tx_build: TransactionBuild):
        test_util.run(tx_build.run())

        with pytest.raises(MachineError):
            test_util.run(tx_build.run())
