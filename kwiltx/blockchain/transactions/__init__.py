from .transaction import Transaction, TxBody, TxSignature
from .transaction_serializer import TransactionSerializer
from .transaction_verifier import TransactionVerifier
from .transaction_builder import TransactionBuilder, TransactionBuild
