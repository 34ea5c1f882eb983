"""
Validator Signatures
Splits raw validator signatures into (r, s, v) form
"""

from dataclasses import dataclass
from typing import Tuple
from eth_keys import keys
from web3 import Web3

from dappchain.errors import InvalidSignature


@dataclass(frozen=True)
class ValidatorSignature:
    """
    Recoverable secp256k1 signature produced by one gateway validator

    Attributes:
        r: 32-byte r value
        s: 32-byte s value
        v: 27 or 28
    """

    r: bytes
    s: bytes
    v: int

    @classmethod
    def from_bytes(cls, signature: bytes) -> 'ValidatorSignature':
        """
        Split a 65-byte r||s||v or 64-byte compact (EIP-2098) signature

        Args:
            signature: Raw signature bytes

        Returns:
            Normalized signature with v in {27, 28}
        """
        signature = bytes(signature)

        if len(signature) == 65:
            r, s, v = signature[:32], signature[32:64], signature[64]
            if v < 27:
                if v not in (0, 1):
                    raise InvalidSignature(f"Invalid signature v byte: {v}")
                v += 27
            return cls(r, s, v)

        if len(signature) == 64:
            r, vs = signature[:32], signature[32:]
            v = 27 + (vs[0] >> 7)
            s = bytes([vs[0] & 0x7f]) + vs[1:]
            return cls(r, s, v)

        raise InvalidSignature(f"Invalid signature length: {len(signature)}")

    @property
    def recovery_param(self) -> int:
        return 1 - (self.v % 2)

    @property
    def vrs(self) -> Tuple[int, int, int]:
        return (self.v, Web3.to_int(self.r), Web3.to_int(self.s))

    def to_bytes(self) -> bytes:
        return self.r + self.s + bytes([self.v])

    def to_hex(self) -> str:
        return Web3.to_hex(self.to_bytes())

    def recover_signer(self, message_hash: bytes) -> str:
        """
        Recover the checksummed address that produced this signature

        Args:
            message_hash: 32-byte hash the validator signed

        Returns:
            Signer address
        """
        try:
            signature = keys.Signature(vrs=(
                self.recovery_param, Web3.to_int(self.r), Web3.to_int(self.s)
            ))
            public_key = signature.recover_public_key_from_msg_hash(message_hash)
        except Exception as e:
            raise InvalidSignature(f"Cannot recover signer: {e}") from e
        return public_key.to_checksum_address()
