"""
Shared fixtures: addresses, validator signatures and message builders
"""

import pytest
from eth_keys import keys
from web3 import Web3

from dappchain import Address, marshal_big_uint
from dappchain.proto import (
    TransferGatewayWithdrawalReceipt,
    TransferGatewayWithdrawalReceiptResponse,
    TransferGatewayTokenWithdrawalSigned,
)


@pytest.fixture
def owner():
    """DAppChain account"""
    return Address('default', bytes.fromhex('11' * 20))


@pytest.fixture
def token_contract():
    return Address('default', bytes.fromhex('22' * 20))


@pytest.fixture
def foreign_contract():
    return Address('eth', bytes.fromhex('33' * 20))


@pytest.fixture
def mainnet_gateway():
    return Address('eth', bytes.fromhex('44' * 20))


@pytest.fixture
def recipient():
    return Address('eth', bytes.fromhex('55' * 20))


@pytest.fixture
def validator_keys():
    return [keys.PrivateKey(bytes([i]) * 32) for i in (1, 2, 3)]


@pytest.fixture
def withdrawal_hash():
    return Web3.keccak(text='withdrawal')


@pytest.fixture
def validator_sigs(validator_keys, withdrawal_hash):
    """Raw 65-byte signatures, v in {0, 1}"""
    return [key.sign_msg_hash(withdrawal_hash).to_bytes() for key in validator_keys]


def _fill_token_message(message, kind, owner, token_contract=None, token_id=None,
                        token_amount=None, sigs=()):
    message.token_owner.CopyFrom(owner.marshal_pb())
    if isinstance(token_contract, Address):
        token_contract = token_contract.marshal_pb()
    if token_contract is not None:
        message.token_contract.CopyFrom(token_contract)
    message.token_kind = int(kind)
    if token_id is not None:
        message.token_id.CopyFrom(marshal_big_uint(token_id))
    if token_amount is not None:
        message.token_amount.CopyFrom(marshal_big_uint(token_amount))
    message.validator_signatures.extend(sigs)
    return message


@pytest.fixture
def receipt_response():
    """Builds a serialized WithdrawalReceipt query response"""
    def build(kind, owner, withdrawal_nonce=0, **fields):
        response = TransferGatewayWithdrawalReceiptResponse()
        receipt = _fill_token_message(TransferGatewayWithdrawalReceipt(), kind, owner, **fields)
        receipt.withdrawal_nonce = withdrawal_nonce
        response.receipt.CopyFrom(receipt)
        return response.SerializeToString()
    return build


@pytest.fixture
def withdrawal_event_data():
    """Builds serialized TokenWithdrawalSigned event data"""
    def build(kind, owner, **fields):
        event = _fill_token_message(TransferGatewayTokenWithdrawalSigned(), kind, owner, **fields)
        return event.SerializeToString()
    return build
