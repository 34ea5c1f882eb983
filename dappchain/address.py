"""
Address
Chain-qualified account/contract address used by all DAppChain messages
"""

from dataclasses import dataclass
from web3 import Web3

from .proto import AddressPB

ADDRESS_LENGTH = 20


@dataclass(frozen=True)
class Address:
    """
    Address of an account or contract on a specific chain

    Attributes:
        chain_id: Chain identifier ("default" for the DAppChain, "eth" for Ethereum)
        local: 20-byte address on that chain
    """

    chain_id: str
    local: bytes

    def __post_init__(self):
        if not isinstance(self.local, (bytes, bytearray)) or len(self.local) != ADDRESS_LENGTH:
            raise ValueError(f"Address must be {ADDRESS_LENGTH} bytes, got {self.local!r}")
        object.__setattr__(self, 'local', bytes(self.local))

    @classmethod
    def from_string(cls, value: str) -> 'Address':
        """
        Parse an address in "chain_id:0x..." form

        Args:
            value: Address string

        Returns:
            Address instance
        """
        chain_id, sep, hex_address = value.partition(':')
        if not sep or not chain_id or not Web3.is_address(hex_address):
            raise ValueError(f"Invalid address string: {value}")
        return cls(chain_id, Web3.to_bytes(hexstr=hex_address))

    @property
    def checksum(self) -> str:
        return Web3.to_checksum_address('0x' + self.local.hex())

    def marshal_pb(self):
        pb = AddressPB()
        pb.chain_id = self.chain_id
        pb.local = self.local
        return pb

    @classmethod
    def unmarshal_pb(cls, pb) -> 'Address':
        return cls(pb.chain_id, pb.local)

    def __str__(self) -> str:
        return f"{self.chain_id}:{self.checksum}"
