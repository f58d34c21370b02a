from .signer import Signer, PrivateKeySigner, CallbackSigner
from .verifier import SignVerifier, recover_public_key
