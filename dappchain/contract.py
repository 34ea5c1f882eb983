"""
Contract
Base binding for a DAppChain contract
"""

from typing import Optional
from loguru import logger

from .address import Address
from .client import ContractTransport


class Contract:
    """
    Binds a contract address and caller to a contract-call transport
    """

    def __init__(self, contract_addr: Address, caller_addr: Address, transport: ContractTransport):
        """
        Initialize Contract

        Args:
            contract_addr: DAppChain address of the contract
            caller_addr: Address the calls are made from
            transport: Transport that submits calls and queries
        """
        self.address = contract_addr
        self.caller = caller_addr
        self.transport = transport

    async def call(self, method: str, request) -> Optional[bytes]:
        """
        Submit a state-changing call and wait for it to be accepted

        Args:
            method: Contract method name
            request: Protobuf request message

        Returns:
            Raw response bytes, if the method returns any
        """
        logger.debug(f"{self.address} call {method} from {self.caller}")
        return await self.transport.call(self.address, self.caller, method, request)

    async def static_call(self, method: str, request, response_type):
        """Run a read-only query and decode it as response_type"""
        logger.debug(f"{self.address} static call {method}")
        return await self.transport.static_call(
            self.address, self.caller, method, request, response_type
        )
