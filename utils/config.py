"""
Configuration
Settings loaded from the environment (.env supported)
"""

import os
from dataclasses import dataclass
from typing import Optional
from eth_account import Account
from dotenv import load_dotenv

from dappchain.address import Address
from dappchain.client import ChainStateReader, ContractResolver, ContractTransport
from gateway.transfer_gateway import TransferGateway
from middleware.nonce_tx import NonceTxMiddleware

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Client settings"""

    chain_id: str = 'default'
    nonce_namespace: str = 'eth'
    gateway_contract_name: str = 'gateway'
    caller_private_key: Optional[str] = None
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'Settings':
        return cls(
            chain_id=os.getenv('DAPPCHAIN_CHAIN_ID', 'default'),
            nonce_namespace=os.getenv('NONCE_NAMESPACE', 'eth'),
            gateway_contract_name=os.getenv('GATEWAY_CONTRACT_NAME', 'gateway'),
            caller_private_key=os.getenv('CALLER_PRIVATE_KEY') or None,
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
            log_file=os.getenv('LOG_FILE') or None,
        )

    def caller_address(self) -> Address:
        """
        DAppChain address of the account owning CALLER_PRIVATE_KEY

        Returns:
            Address on the configured chain
        """
        if not self.caller_private_key:
            raise ValueError("CALLER_PRIVATE_KEY must be set in .env")
        account = Account.from_key(self.caller_private_key)
        return Address.from_string(f"{self.chain_id}:{account.address}")

    def nonce_middleware(self, client: ChainStateReader) -> NonceTxMiddleware:
        """
        Nonce middleware signing as the configured caller

        Args:
            client: Reads the caller's current nonce

        Returns:
            NonceTxMiddleware in the configured nonce namespace
        """
        return NonceTxMiddleware(self.caller_address().checksum, client, self.nonce_namespace)

    async def connect_gateway(self, client: ContractResolver,
                              transport: ContractTransport) -> TransferGateway:
        """Resolve the configured gateway contract, bound to the caller address"""
        return await TransferGateway.create(
            client, self.caller_address(), transport, self.gateway_contract_name
        )
