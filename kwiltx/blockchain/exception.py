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
"""A module of exceptions for errors on building transactions"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kwiltx.blockchain.transactions import Transaction


class TransactionBuildError(Exception):
    """Base of every error which aborts `TransactionBuilder.build()`.
    """
    pass


class MissingPayloadError(TransactionBuildError):
    """Raise when the builder has no payload, or the payload supplier yields nothing.
    """
    def __init__(self, message="payload is required. Set `payload` before build."):
        super().__init__(message)


class MissingPayloadTypeError(TransactionBuildError):
    """Raise when the builder has no payload type.
    """
    def __init__(self, message="payload type is required. Set `payload_type` before build."):
        super().__init__(message)


class MissingSignerError(TransactionBuildError):
    """Raise when the builder has no signer.
    """
    def __init__(self, message="signer is required. Set `signer` before build."):
        super().__init__(message)


class AccountLookupError(TransactionBuildError):
    """Raise when the account of the sender can not be retrieved.
    """
    def __init__(self, address: str, status=None):
        super().__init__(address, status)
        self.address = address
        self.status = status

    def __str__(self):
        return (f"Could not retrieve account {self.address}(status: {self.status}). "
                f"Please double check that you have the correct account address.")


class EstimationError(TransactionBuildError):
    """Raise when the fee of a transaction can not be estimated.
    """
    def __init__(self, status=None):
        super().__init__(status)
        self.status = status

    def __str__(self):
        return f"Could not retrieve cost for transaction(status: {self.status})."


class SigningError(TransactionBuildError):
    """Raise when the signer refuses to sign or returns a malformed signature.
    """
    pass


class TransactionInvalidError(Exception):
    def __init__(self, tx: 'Transaction', message=''):
        self.tx = tx
        self.message = message

    def __str__(self):
        return (f"{self.__class__.__name__}: {self.message}\n"
                f"{self.tx}")


class TransactionInvalidSignatureError(TransactionInvalidError):
    pass
