from .types import Bytes, VarBytes, Salt, PublicKey, ExternalAddress, Signature, PayloadType, SignatureType
from .exception import (TransactionBuildError, MissingPayloadError, MissingPayloadTypeError, MissingSignerError,
                        AccountLookupError, EstimationError, SigningError, TransactionInvalidError,
                        TransactionInvalidSignatureError)
from .action import ActionInput, ActionBody
