"""
Withdrawal Requests
Builds validated withdrawal requests for the DAppChain transfer gateway
"""

from dataclasses import dataclass
from typing import Optional

from dappchain.address import Address
from dappchain.big_uint import marshal_big_uint
from dappchain.errors import MalformedParameters
from dappchain.proto import TransferGatewayWithdrawTokenRequest, TransferGatewayWithdrawETHRequest
from .tokens import TokenKind, TOKEN_ID, TOKEN_AMOUNT

WITHDRAW_TOKEN_METHOD = 'WithdrawToken'
WITHDRAW_ETH_METHOD = 'WithdrawETH'


def _check_uint(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedParameters(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise MalformedParameters(f"{name} must not be negative")


def _check_address(name: str, value) -> None:
    if not isinstance(value, Address):
        raise MalformedParameters(f"{name} must be an Address, got {type(value).__name__}")


@dataclass(frozen=True)
class WithdrawalRequest:
    """
    Request to begin withdrawing tokens from the DAppChain to a foreign chain

    When recipient is omitted the gateway looks up the foreign account mapped
    to the caller's DAppChain account. That lookup happens on chain, so a
    missing mapping only shows up as a failed withdrawal.
    """

    token_kind: TokenKind
    token_contract: Optional[Address] = None
    token_id: Optional[int] = None
    amount: Optional[int] = None
    recipient: Optional[Address] = None
    mainnet_gateway: Optional[Address] = None

    def __post_init__(self):
        if not isinstance(self.token_kind, TokenKind):
            raise MalformedParameters(f"Unknown token kind: {self.token_kind!r}")

        kind = self.token_kind
        for name, value in ((TOKEN_ID, self.token_id), (TOKEN_AMOUNT, self.amount)):
            if name in kind.fields:
                if value is None:
                    raise MalformedParameters(f"{kind.name} withdrawal requires {name}")
                _check_uint(name, value)
            elif value is not None:
                raise MalformedParameters(f"{kind.name} withdrawal does not take {name}")

        if kind.has_token_contract:
            if self.token_contract is None:
                raise MalformedParameters(f"{kind.name} withdrawal requires token_contract")
            _check_address('token_contract', self.token_contract)
        elif self.token_contract is not None:
            raise MalformedParameters(f"{kind.name} withdrawal does not take token_contract")

        if kind is TokenKind.ETH:
            if self.mainnet_gateway is None:
                raise MalformedParameters("ETH withdrawal requires mainnet_gateway")
            _check_address('mainnet_gateway', self.mainnet_gateway)
        elif self.mainnet_gateway is not None:
            raise MalformedParameters(f"{kind.name} withdrawal does not take mainnet_gateway")

        if self.recipient is not None:
            _check_address('recipient', self.recipient)

    @classmethod
    def erc721(cls, token_id: int, token_contract: Address,
               recipient: Optional[Address] = None) -> 'WithdrawalRequest':
        """
        Withdrawal of an ERC721 token

        Args:
            token_id: ERC721 token ID
            token_contract: DAppChain address of the ERC721 contract
            recipient: Foreign account to withdraw to (defaults to the mapped account)
        """
        return cls(TokenKind.ERC721, token_contract=token_contract,
                   token_id=token_id, recipient=recipient)

    @classmethod
    def erc721x(cls, token_id: int, amount: int, token_contract: Address,
                recipient: Optional[Address] = None) -> 'WithdrawalRequest':
        """
        Withdrawal of an amount of one ERC721X token

        Args:
            token_id: ERC721X token ID
            amount: Amount of token_id to withdraw
            token_contract: DAppChain address of the ERC721X contract
            recipient: Foreign account to withdraw to (defaults to the mapped account)
        """
        return cls(TokenKind.ERC721X, token_contract=token_contract,
                   token_id=token_id, amount=amount, recipient=recipient)

    @classmethod
    def erc20(cls, amount: int, token_contract: Address,
              recipient: Optional[Address] = None) -> 'WithdrawalRequest':
        """Withdrawal of ERC20 tokens"""
        return cls(TokenKind.ERC20, token_contract=token_contract,
                   amount=amount, recipient=recipient)

    @classmethod
    def eth(cls, amount: int, mainnet_gateway: Address,
            recipient: Optional[Address] = None) -> 'WithdrawalRequest':
        """
        Withdrawal of ETH

        Args:
            amount: Amount in wei
            mainnet_gateway: Ethereum address of the Ethereum gateway
            recipient: Foreign account to withdraw to (defaults to the mapped account)
        """
        return cls(TokenKind.ETH, amount=amount,
                   mainnet_gateway=mainnet_gateway, recipient=recipient)

    @property
    def method(self) -> str:
        """Gateway method that accepts this request"""
        if self.token_kind is TokenKind.ETH:
            return WITHDRAW_ETH_METHOD
        return WITHDRAW_TOKEN_METHOD

    def to_pb(self):
        """
        Build the protobuf request message

        Returns:
            TransferGatewayWithdrawETHRequest for ETH,
            TransferGatewayWithdrawTokenRequest otherwise
        """
        if self.token_kind is TokenKind.ETH:
            req = TransferGatewayWithdrawETHRequest()
            req.amount.CopyFrom(marshal_big_uint(self.amount))
            req.mainnet_gateway.CopyFrom(self.mainnet_gateway.marshal_pb())
        else:
            req = TransferGatewayWithdrawTokenRequest()
            req.token_kind = int(self.token_kind)
            req.token_contract.CopyFrom(self.token_contract.marshal_pb())
            if self.token_id is not None:
                req.token_id.CopyFrom(marshal_big_uint(self.token_id))
            if self.amount is not None:
                req.token_amount.CopyFrom(marshal_big_uint(self.amount))

        if self.recipient is not None:
            req.recipient.CopyFrom(self.recipient.marshal_pb())
        return req
