"""
Transfer Gateway
Client binding for the DAppChain transfer gateway contract
"""

from typing import Optional, Sequence
from loguru import logger

from dappchain.address import Address
from dappchain.client import ContractResolver, ContractTransport
from dappchain.contract import Contract
from dappchain.errors import MissingContractAddress
from dappchain.proto import (
    TransferGatewayWithdrawalReceiptRequest,
    TransferGatewayWithdrawalReceiptResponse,
    TransferGatewayAddContractMappingRequest,
    TransferGatewayReclaimContractTokensRequest,
    TransferGatewayReclaimDepositorTokensRequest,
)
from .events import ContractEvent, GatewayEventStream
from .receipts import WithdrawalReceipt, decode_withdrawal_receipt
from .requests import WithdrawalRequest

GATEWAY_CONTRACT_NAME = 'gateway'


class TransferGateway(Contract):
    """
    Moves tokens between the DAppChain and a foreign chain

    Withdrawals are started here; validators then sign a receipt that the
    caller presents to the foreign-chain gateway.
    """

    def __init__(self, contract_addr: Address, caller_addr: Address, transport: ContractTransport):
        super().__init__(contract_addr, caller_addr, transport)
        self.events = GatewayEventStream()

    @classmethod
    async def create(cls, client: ContractResolver, caller_addr: Address,
                     transport: ContractTransport,
                     contract_name: str = GATEWAY_CONTRACT_NAME) -> 'TransferGateway':
        """
        Resolve the gateway contract and bind it

        Args:
            client: Resolves contract names to addresses
            caller_addr: Address the calls are made from
            transport: Contract-call transport
            contract_name: Registered name of the gateway contract

        Returns:
            TransferGateway instance
        """
        contract_addr = await client.get_contract_address(contract_name)
        if not contract_addr:
            raise MissingContractAddress(
                f"Failed to resolve contract address for TransferGateway ({contract_name})"
            )

        logger.info(f"TransferGateway resolved at {contract_addr}")
        return cls(contract_addr, caller_addr, transport)

    def handle_event(self, event: ContractEvent):
        """Feed a raw contract event from the event source into self.events"""
        return self.events.publish(event)

    async def withdraw(self, request: WithdrawalRequest) -> None:
        """
        Submit a withdrawal request

        Resolves once the DAppChain gateway has accepted the request.
        """
        logger.info(
            f"Withdrawing {request.token_kind.name} from {self.caller} "
            f"(id={request.token_id}, amount={request.amount})"
        )
        await self.call(request.method, request.to_pb())

    async def withdraw_erc721(self, token_id: int, token_contract: Address,
                              recipient: Optional[Address] = None) -> None:
        """
        Begin withdrawal of an ERC721 token to a foreign account

        Args:
            token_id: ERC721 token ID
            token_contract: DAppChain address of the ERC721 contract
            recipient: Foreign account; if omitted the gateway uses the
                account mapped to the caller
        """
        await self.withdraw(WithdrawalRequest.erc721(token_id, token_contract, recipient))

    async def withdraw_erc721x(self, token_id: int, amount: int, token_contract: Address,
                               recipient: Optional[Address] = None) -> None:
        """Begin withdrawal of an amount of one ERC721X token"""
        await self.withdraw(WithdrawalRequest.erc721x(token_id, amount, token_contract, recipient))

    async def withdraw_erc20(self, amount: int, token_contract: Address,
                             recipient: Optional[Address] = None) -> None:
        """Begin withdrawal of ERC20 tokens"""
        await self.withdraw(WithdrawalRequest.erc20(amount, token_contract, recipient))

    async def withdraw_eth(self, amount: int, ethereum_gateway: Address,
                           recipient: Optional[Address] = None) -> None:
        """
        Begin withdrawal of ETH

        Args:
            amount: Amount in wei
            ethereum_gateway: Ethereum address of the Ethereum gateway
            recipient: Foreign account; defaults to the mapped account
        """
        await self.withdraw(WithdrawalRequest.eth(amount, ethereum_gateway, recipient))

    async def withdrawal_receipt(self, owner: Address) -> Optional[WithdrawalReceipt]:
        """
        Fetch the current withdrawal receipt of an account

        Args:
            owner: DAppChain address of the account

        Returns:
            WithdrawalReceipt, or None if no withdrawal is in progress
        """
        req = TransferGatewayWithdrawalReceiptRequest()
        req.owner.CopyFrom(owner.marshal_pb())

        response = await self.static_call(
            'WithdrawalReceipt', req, TransferGatewayWithdrawalReceiptResponse
        )
        receipt = decode_withdrawal_receipt(response)

        if receipt is None:
            logger.debug(f"No withdrawal in progress for {owner}")
        return receipt

    async def add_contract_mapping(self, foreign_contract: Address, local_contract: Address,
                                   foreign_contract_creator_sig: bytes,
                                   foreign_contract_creator_tx_hash: bytes) -> None:
        """
        Map a DAppChain token contract to its counterpart on the foreign chain

        The mapping becomes usable once validators confirm it, see
        ContractMappingConfirmed.
        """
        req = TransferGatewayAddContractMappingRequest()
        req.foreign_contract.CopyFrom(foreign_contract.marshal_pb())
        req.local_contract.CopyFrom(local_contract.marshal_pb())
        req.foreign_contract_creator_sig = bytes(foreign_contract_creator_sig)
        req.foreign_contract_tx_hash = bytes(foreign_contract_creator_tx_hash)

        await self.call('AddContractMapping', req)

    async def reclaim_contract_tokens(self, token_contract: Address) -> None:
        """
        Transfer deposited tokens of a contract that never reached their
        depositors because of a missing identity or contract mapping.
        Only the token contract creator or the gateway owner may call this.
        """
        req = TransferGatewayReclaimContractTokensRequest()
        req.token_contract.CopyFrom(token_contract.marshal_pb())
        await self.call('ReclaimContractTokens', req)

    async def reclaim_depositor_tokens(self, depositors: Optional[Sequence[Address]] = None) -> None:
        """
        Reclaim tokens the caller (or the given depositors) deposited but never received

        Args:
            depositors: Accounts to reclaim for; only the gateway owner may pass these
        """
        req = TransferGatewayReclaimDepositorTokensRequest()
        if depositors:
            req.depositors.extend([address.marshal_pb() for address in depositors])
        await self.call('ReclaimDepositorTokens', req)
