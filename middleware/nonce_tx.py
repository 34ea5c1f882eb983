"""
Nonce Tx Middleware
Wraps outgoing tx payloads in a NonceTx carrying the next sequence number
"""

from typing import Optional
from loguru import logger

from dappchain.client import ChainStateReader, TxResults, TxStageResult
from dappchain.errors import InvalidTxNonceError
from dappchain.proto import NonceTx

# Log text the chain emits when a tx sequence does not follow the last committed one
SEQUENCE_MISMATCH_MARKER = 'sequence number does not match'

DEFAULT_NONCE_NAMESPACE = 'eth'


def is_sequence_mismatch(stage: Optional[TxStageResult]) -> bool:
    """
    Check whether a tx stage was rejected for a stale/replayed sequence number

    Args:
        stage: Validation or commit result, may be absent

    Returns:
        True if the stage failed and its log carries the mismatch marker
    """
    if stage is None or not stage.failed:
        return False
    return SEQUENCE_MISMATCH_MARKER in (stage.log or '')


class NonceTxMiddleware:
    """
    Attaches last_committed_nonce + 1 to every tx

    The nonce is read from the chain before each tx and never cached. Calls
    for the same account must not overlap, otherwise both read the same
    nonce and one of them is rejected.
    """

    def __init__(self, from_address: str, client: ChainStateReader,
                 namespace: str = DEFAULT_NONCE_NAMESPACE):
        """
        Initialize Nonce Tx Middleware

        Args:
            from_address: Address of the account sending txs
            client: Reader for the account's committed nonce
            namespace: Account namespace the nonce is kept under
        """
        self.from_address = from_address
        self.client = client
        self.namespace = namespace

    async def wrap(self, payload: bytes) -> bytes:
        """
        Wrap a tx payload with the next sequence number

        Args:
            payload: Serialized inner tx

        Returns:
            Serialized NonceTx
        """
        nonce = await self.client.get_nonce(self.namespace, self.from_address)

        logger.debug(f"Next nonce {nonce + 1}")

        tx = NonceTx()
        tx.inner = bytes(payload)
        tx.sequence = nonce + 1
        return tx.SerializeToString()

    def interpret(self, results: TxResults) -> TxResults:
        """
        Raise InvalidTxNonceError if either stage failed on a nonce mismatch

        Args:
            results: Results returned by the transport

        Returns:
            The same results object, untouched
        """
        for stage in (results.validation, results.commit):
            if is_sequence_mismatch(stage):
                logger.warning(f"Tx from {self.from_address} rejected: {stage.log}")
                raise InvalidTxNonceError()
        return results
