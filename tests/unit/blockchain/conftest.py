from typing import List

import pytest

from kwiltx.baseservice import RestResponse
from kwiltx.blockchain.transactions import Transaction, TransactionBuilder
from tests.unit import test_util


class FakeClient:
    """Stands in for `RestClient`, records every call."""

    def __init__(self):
        self.account_response = RestResponse(200, {"nonce": 5})
        self.price_response = RestResponse(200, "100")

        self.requested_accounts: List[str] = []
        self.estimated_txs: List[Transaction] = []

    async def get_account(self, address: str) -> RestResponse:
        self.requested_accounts.append(address)
        return self.account_response

    async def estimate_cost(self, tx: Transaction) -> RestResponse:
        self.estimated_txs.append(tx)
        return self.price_response


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def signer():
    return test_util.signer_of(0xc0ffee)


@pytest.fixture
def tx_builder(fake_client, signer):
    tx_builder = TransactionBuilder(fake_client)
    tx_builder.signer = signer
    tx_builder.payload = {"a": 1}
    tx_builder.payload_type = "execute"
    return tx_builder


@pytest.fixture
def built_tx(tx_builder) -> Transaction:
    return test_util.run(tx_builder.build())
