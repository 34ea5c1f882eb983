"""
BigUInt marshaling
Arbitrary precision unsigned integers as big-endian byte strings
"""

from web3 import Web3

from .proto import BigUIntPB


def marshal_big_uint(value: int):
    """
    Encode a non-negative int into a BigUInt message without truncation

    Args:
        value: Unsigned integer of any magnitude

    Returns:
        BigUInt protobuf message
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"BigUInt requires a non-negative int, got {value!r}")

    pb = BigUIntPB()
    pb.value = Web3.to_bytes(value)
    return pb


def unmarshal_big_uint(pb) -> int:
    """Decode a BigUInt message; an empty value decodes as 0"""
    if not pb.value:
        return 0
    return Web3.to_int(pb.value)
