"""
DAppChain Errors
Exception types raised by the middleware, gateway builder and interpreter
"""

INVALID_TX_NONCE_ERROR = 'Invalid tx nonce'


class DAppChainError(Exception):
    """Base class for all client-side DAppChain errors"""


class InvalidTxNonceError(DAppChainError):
    """
    Transaction was rejected because its sequence number did not match
    the last committed one. Resubmit with a freshly fetched nonce.
    """

    def __init__(self, message: str = INVALID_TX_NONCE_ERROR):
        super().__init__(message)


class MissingContractAddress(DAppChainError):
    """Contract name could not be resolved on this chain"""


class MalformedParameters(DAppChainError, ValueError):
    """Field combination is not valid for the declared token kind"""


class InvalidSignature(DAppChainError, ValueError):
    """Validator signature bytes could not be split into (r, s, v)"""


class TransportError(DAppChainError):
    """
    Failure raised by a transport implementation.
    Propagated unchanged, never retried by this package.
    """


def is_invalid_tx_nonce_error(err) -> bool:
    """Check whether an exception signals a replayed/stale sequence number"""
    return isinstance(err, InvalidTxNonceError)
