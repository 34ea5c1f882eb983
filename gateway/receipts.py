"""
Withdrawal Receipts & Events
Decodes gateway receipts and signed-withdrawal/mapping events into value objects
"""

import base64
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from dappchain.address import Address
from dappchain.big_uint import unmarshal_big_uint
from dappchain.proto import (
    TransferGatewayWithdrawalReceiptResponse,
    TransferGatewayTokenWithdrawalSigned,
    TransferGatewayContractMappingConfirmed,
)
from .signatures import ValidatorSignature
from .tokens import TokenKind, TOKEN_ID, TOKEN_AMOUNT, token_fields, value_field

RawPayload = Union[bytes, str]


@dataclass(frozen=True)
class WithdrawalReceipt:
    """
    In-progress withdrawal, as stored by the DAppChain gateway

    value is deprecated: it holds the ERC721 token ID, or the
    ERC721X/ERC20/ETH amount. Use token_id and token_amount instead.
    token_kind is the raw wire number for kinds newer than TokenKind.
    """

    token_owner: Address
    # Mainnet address of the token contract, None for ETH
    token_contract: Optional[Address]
    token_kind: Union[TokenKind, int]
    token_id: Optional[int]
    token_amount: Optional[int]
    withdrawal_nonce: int
    value: int
    sigs: Tuple[ValidatorSignature, ...]


@dataclass(frozen=True)
class TokenWithdrawalSigned:
    """Validators have signed a pending withdrawal"""

    token_owner: Address
    token_contract: Optional[Address]
    token_kind: Union[TokenKind, int]
    token_id: Optional[int]
    token_amount: Optional[int]
    value: int
    sigs: Tuple[ValidatorSignature, ...]


@dataclass(frozen=True)
class ContractMappingConfirmed:
    """Validators have confirmed a foreign <-> local contract mapping"""

    # Address of a contract on the foreign chain
    foreign_contract: Address
    # Address of the corresponding contract on the DAppChain
    local_contract: Address


def _parse(message_type, raw):
    if isinstance(raw, message_type):
        return raw
    if isinstance(raw, str):
        raw = base64.b64decode(raw)
    message = message_type()
    message.ParseFromString(bytes(raw))
    return message


def _optional_address(message, field: str) -> Optional[Address]:
    # ETH withdrawals may carry a blank contract: chain_id set, local empty
    if not message.HasField(field) or not getattr(message, field).local:
        return None
    return Address.unmarshal_pb(getattr(message, field))


def _token_fields(message) -> dict:
    """
    Read token kind, ID, amount and legacy value

    Only the fields listed for the kind are read, see token_fields().
    Unknown kinds are read as amount-only, with value = amount.
    """
    kind = TokenKind.from_wire(message.token_kind)
    numbers = {TOKEN_ID: None, TOKEN_AMOUNT: None}
    for name in token_fields(kind):
        numbers[name] = unmarshal_big_uint(getattr(message, name))

    return {
        'token_kind': kind,
        'token_id': numbers[TOKEN_ID],
        'token_amount': numbers[TOKEN_AMOUNT],
        'value': numbers[value_field(kind)],
    }


def _signatures(message) -> Tuple[ValidatorSignature, ...]:
    return tuple(ValidatorSignature.from_bytes(sig) for sig in message.validator_signatures)


def decode_withdrawal_receipt(response: RawPayload) -> Optional[WithdrawalReceipt]:
    """
    Decode a WithdrawalReceipt query response

    Args:
        response: TransferGatewayWithdrawalReceiptResponse message or its bytes

    Returns:
        WithdrawalReceipt, or None if the account has no withdrawal in progress
    """
    response = _parse(TransferGatewayWithdrawalReceiptResponse, response)
    if not response.HasField('receipt'):
        return None

    receipt = response.receipt
    return WithdrawalReceipt(
        token_owner=Address.unmarshal_pb(receipt.token_owner),
        token_contract=_optional_address(receipt, 'token_contract'),
        withdrawal_nonce=receipt.withdrawal_nonce,
        sigs=_signatures(receipt),
        **_token_fields(receipt)
    )


def decode_token_withdrawal_signed(data: RawPayload) -> TokenWithdrawalSigned:
    """
    Decode a TokenWithdrawalSigned event payload

    Args:
        data: Base64 event data, raw bytes, or the message itself

    Returns:
        TokenWithdrawalSigned
    """
    event = _parse(TransferGatewayTokenWithdrawalSigned, data)
    return TokenWithdrawalSigned(
        token_owner=Address.unmarshal_pb(event.token_owner),
        token_contract=_optional_address(event, 'token_contract'),
        sigs=_signatures(event),
        **_token_fields(event)
    )


def decode_contract_mapping_confirmed(data: RawPayload) -> ContractMappingConfirmed:
    """Decode a ContractMappingConfirmed event payload"""
    event = _parse(TransferGatewayContractMappingConfirmed, data)
    return ContractMappingConfirmed(
        foreign_contract=Address.unmarshal_pb(event.foreign_contract),
        local_contract=Address.unmarshal_pb(event.local_contract),
    )
