"""
DAppChain Package
Address/BigUInt primitives, wire messages, client interfaces and errors
"""

from .address import Address
from .big_uint import marshal_big_uint, unmarshal_big_uint
from .client import TxResults, TxStageResult
from .contract import Contract
from .errors import (
    DAppChainError,
    InvalidTxNonceError,
    MissingContractAddress,
    MalformedParameters,
    InvalidSignature,
    TransportError,
    is_invalid_tx_nonce_error,
)
from .tx import commit_tx

__all__ = [
    'Address',
    'marshal_big_uint',
    'unmarshal_big_uint',
    'TxResults',
    'TxStageResult',
    'Contract',
    'DAppChainError',
    'InvalidTxNonceError',
    'MissingContractAddress',
    'MalformedParameters',
    'InvalidSignature',
    'TransportError',
    'is_invalid_tx_nonce_error',
    'commit_tx',
]
