"""
Client Interfaces
Narrow views of the DAppChain client consumed by the middleware and contracts.
Concrete RPC/websocket transports live outside this package.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from .address import Address


@dataclass(frozen=True)
class TxStageResult:
    """Outcome of one stage (CheckTx validation or DeliverTx commit)"""

    code: int
    log: str = ''

    @property
    def failed(self) -> bool:
        return self.code != 0


@dataclass(frozen=True)
class TxResults:
    """Structured result of a submitted transaction"""

    validation: Optional[TxStageResult] = None
    commit: Optional[TxStageResult] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'TxResults':
        """
        Build results from the JSON-RPC shape {"validation": {...}, "commit": {...}}

        Args:
            data: Decoded JSON object

        Returns:
            TxResults
        """
        def stage(key):
            raw = data.get(key)
            if raw is None:
                return None
            return TxStageResult(code=int(raw.get('code', 0)), log=raw.get('log') or '')

        return cls(validation=stage('validation'), commit=stage('commit'))


class ChainStateReader(Protocol):
    async def get_nonce(self, namespace: str, address: str) -> int:
        """Return the sequence number of the last committed tx"""
        ...


class ContractResolver(Protocol):
    async def get_contract_address(self, name: str) -> Optional[Address]:
        ...


class TxTransport(Protocol):
    async def send_tx(self, envelope: bytes) -> TxResults:
        ...


class ContractTransport(Protocol):
    """Sends contract calls on behalf of a caller"""

    async def call(self, contract: Address, caller: Address, method: str, request) -> Optional[bytes]:
        ...

    async def static_call(self, contract: Address, caller: Address, method: str, request, response_type):
        ...


class TxMiddleware(Protocol):
    async def wrap(self, payload: bytes) -> bytes:
        ...

    def interpret(self, results: TxResults) -> TxResults:
        ...
