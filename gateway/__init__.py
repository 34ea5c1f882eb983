"""
Transfer Gateway Package
Withdrawal requests, receipt/event decoding and the gateway contract binding
"""

from .tokens import TokenKind, kind_name
from .requests import WithdrawalRequest
from .signatures import ValidatorSignature
from .receipts import (
    WithdrawalReceipt,
    TokenWithdrawalSigned,
    ContractMappingConfirmed,
    decode_withdrawal_receipt,
    decode_token_withdrawal_signed,
    decode_contract_mapping_confirmed,
)
from .events import ContractEvent, GatewayEventStream, Subscription, decode_gateway_event
from .transfer_gateway import TransferGateway

__all__ = [
    'TokenKind',
    'kind_name',
    'WithdrawalRequest',
    'ValidatorSignature',
    'WithdrawalReceipt',
    'TokenWithdrawalSigned',
    'ContractMappingConfirmed',
    'decode_withdrawal_receipt',
    'decode_token_withdrawal_signed',
    'decode_contract_mapping_confirmed',
    'ContractEvent',
    'GatewayEventStream',
    'Subscription',
    'decode_gateway_event',
    'TransferGateway',
]
