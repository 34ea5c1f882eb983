"""
Protobuf Messages
Wire formats for the nonce envelope and the transfer gateway contract.

Descriptors are declared here and registered in a private pool, so no
generated *_pb2 modules are needed.
"""

from typing import List, Optional, Tuple
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_Field = descriptor_pb2.FieldDescriptorProto

TYPES_PACKAGE = 'types'
GATEWAY_PACKAGE = 'transfer_gateway'

# (name, number, type, type_name, repeated)
FieldSpec = Tuple[str, int, int, Optional[str], bool]


def _field(name: str, number: int, field_type: int,
           type_name: Optional[str] = None, repeated: bool = False) -> FieldSpec:
    return (name, number, field_type, type_name, repeated)


def _address(name: str, number: int, repeated: bool = False) -> FieldSpec:
    return _field(name, number, _Field.TYPE_MESSAGE, '.types.Address', repeated)


def _big_uint(name: str, number: int) -> FieldSpec:
    return _field(name, number, _Field.TYPE_MESSAGE, '.types.BigUInt')


def _token_kind(name: str, number: int) -> FieldSpec:
    return _field(name, number, _Field.TYPE_ENUM,
                  '.transfer_gateway.TransferGatewayTokenKind')


def _add_message(file_proto, name: str, fields: List[FieldSpec]):
    message = file_proto.message_type.add()
    message.name = name
    for field_name, number, field_type, type_name, repeated in fields:
        field = message.field.add()
        field.name = field_name
        field.number = number
        field.type = field_type
        field.label = _Field.LABEL_REPEATED if repeated else _Field.LABEL_OPTIONAL
        if type_name:
            field.type_name = type_name


def _types_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = 'dappchain/types.proto'
    file_proto.package = TYPES_PACKAGE
    file_proto.syntax = 'proto3'

    _add_message(file_proto, 'Address', [
        _field('chain_id', 1, _Field.TYPE_STRING),
        _field('local', 2, _Field.TYPE_BYTES),
    ])
    # Big-endian unsigned magnitude
    _add_message(file_proto, 'BigUInt', [
        _field('value', 1, _Field.TYPE_BYTES),
    ])
    _add_message(file_proto, 'NonceTx', [
        _field('inner', 1, _Field.TYPE_BYTES),
        _field('sequence', 2, _Field.TYPE_UINT64),
    ])
    return file_proto


def _gateway_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto()
    file_proto.name = 'dappchain/transfer_gateway.proto'
    file_proto.package = GATEWAY_PACKAGE
    file_proto.syntax = 'proto3'
    file_proto.dependency.append('dappchain/types.proto')

    token_kind = file_proto.enum_type.add()
    token_kind.name = 'TransferGatewayTokenKind'
    for name, number in (('ERC721', 0), ('ERC20', 1), ('ETH', 2), ('ERC721X', 3)):
        value = token_kind.value.add()
        value.name = name
        value.number = number

    _add_message(file_proto, 'TransferGatewayWithdrawTokenRequest', [
        _address('token_contract', 1),
        _token_kind('token_kind', 2),
        _big_uint('token_id', 3),
        _big_uint('token_amount', 4),
        _address('recipient', 5),
    ])
    _add_message(file_proto, 'TransferGatewayWithdrawETHRequest', [
        _big_uint('amount', 1),
        _address('mainnet_gateway', 2),
        _address('recipient', 3),
    ])
    _add_message(file_proto, 'TransferGatewayWithdrawalReceipt', [
        _address('token_owner', 1),
        _address('token_contract', 2),
        _token_kind('token_kind', 3),
        _big_uint('token_id', 4),
        _big_uint('token_amount', 5),
        _field('withdrawal_nonce', 6, _Field.TYPE_UINT64),
        _field('validator_signatures', 7, _Field.TYPE_BYTES, repeated=True),
    ])
    _add_message(file_proto, 'TransferGatewayWithdrawalReceiptRequest', [
        _address('owner', 1),
    ])
    _add_message(file_proto, 'TransferGatewayWithdrawalReceiptResponse', [
        _field('receipt', 1, _Field.TYPE_MESSAGE,
               '.transfer_gateway.TransferGatewayWithdrawalReceipt'),
    ])
    _add_message(file_proto, 'TransferGatewayAddContractMappingRequest', [
        _address('foreign_contract', 1),
        _address('local_contract', 2),
        _field('foreign_contract_creator_sig', 3, _Field.TYPE_BYTES),
        _field('foreign_contract_tx_hash', 4, _Field.TYPE_BYTES),
    ])
    _add_message(file_proto, 'TransferGatewayTokenWithdrawalSigned', [
        _address('token_owner', 1),
        _address('token_contract', 2),
        _token_kind('token_kind', 3),
        _big_uint('token_id', 4),
        _big_uint('token_amount', 5),
        _field('validator_signatures', 6, _Field.TYPE_BYTES, repeated=True),
    ])
    _add_message(file_proto, 'TransferGatewayContractMappingConfirmed', [
        _address('foreign_contract', 1),
        _address('local_contract', 2),
    ])
    _add_message(file_proto, 'TransferGatewayReclaimContractTokensRequest', [
        _address('token_contract', 1),
    ])
    _add_message(file_proto, 'TransferGatewayReclaimDepositorTokensRequest', [
        _address('depositors', 1, repeated=True),
    ])
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_types_file().SerializeToString())
_pool.AddSerializedFile(_gateway_file().SerializeToString())


def _message_class(full_name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(full_name))


AddressPB = _message_class('types.Address')
BigUIntPB = _message_class('types.BigUInt')
NonceTx = _message_class('types.NonceTx')

TransferGatewayWithdrawTokenRequest = _message_class(
    'transfer_gateway.TransferGatewayWithdrawTokenRequest')
TransferGatewayWithdrawETHRequest = _message_class(
    'transfer_gateway.TransferGatewayWithdrawETHRequest')
TransferGatewayWithdrawalReceipt = _message_class(
    'transfer_gateway.TransferGatewayWithdrawalReceipt')
TransferGatewayWithdrawalReceiptRequest = _message_class(
    'transfer_gateway.TransferGatewayWithdrawalReceiptRequest')
TransferGatewayWithdrawalReceiptResponse = _message_class(
    'transfer_gateway.TransferGatewayWithdrawalReceiptResponse')
TransferGatewayAddContractMappingRequest = _message_class(
    'transfer_gateway.TransferGatewayAddContractMappingRequest')
TransferGatewayTokenWithdrawalSigned = _message_class(
    'transfer_gateway.TransferGatewayTokenWithdrawalSigned')
TransferGatewayContractMappingConfirmed = _message_class(
    'transfer_gateway.TransferGatewayContractMappingConfirmed')
TransferGatewayReclaimContractTokensRequest = _message_class(
    'transfer_gateway.TransferGatewayReclaimContractTokensRequest')
TransferGatewayReclaimDepositorTokensRequest = _message_class(
    'transfer_gateway.TransferGatewayReclaimDepositorTokensRequest')
