"""
Token Kinds
Which numeric fields each kind of transferable asset carries
"""

from enum import IntEnum
from typing import Tuple, Union

TOKEN_ID = 'token_id'
TOKEN_AMOUNT = 'token_amount'


class TokenKind(IntEnum):
    """Token kinds, numbered as on the wire"""

    ERC721 = 0   # non-fungible
    ERC20 = 1    # fungible
    ETH = 2      # native coin
    ERC721X = 3  # semi-fungible

    @classmethod
    def from_wire(cls, value: int) -> Union['TokenKind', int]:
        """
        Map a wire value to a TokenKind

        Kinds added to the gateway after this table (e.g. LOOMCOIN = 4)
        come back as the raw int and are treated as amount-only.
        """
        try:
            return cls(value)
        except ValueError:
            return int(value)

    @property
    def fields(self) -> Tuple[str, ...]:
        """Numeric fields present for this kind"""
        return token_fields(self)

    @property
    def value_field(self) -> str:
        """Field mirrored into the legacy unified "value" """
        return value_field(self)

    @property
    def has_token_contract(self) -> bool:
        return self is not TokenKind.ETH


_TOKEN_FIELDS = {
    TokenKind.ERC721: (TOKEN_ID,),
    TokenKind.ERC721X: (TOKEN_ID, TOKEN_AMOUNT),
    TokenKind.ERC20: (TOKEN_AMOUNT,),
    TokenKind.ETH: (TOKEN_AMOUNT,),
}

# Legacy: ERC721 token ID, otherwise the amount. Do not extend to new kinds.
_VALUE_FIELD = {
    TokenKind.ERC721: TOKEN_ID,
    TokenKind.ERC721X: TOKEN_AMOUNT,
    TokenKind.ERC20: TOKEN_AMOUNT,
    TokenKind.ETH: TOKEN_AMOUNT,
}


def token_fields(kind: Union[TokenKind, int]) -> Tuple[str, ...]:
    """Numeric fields for a kind, amount only when the kind is unknown"""
    return _TOKEN_FIELDS.get(kind, (TOKEN_AMOUNT,))


def value_field(kind: Union[TokenKind, int]) -> str:
    return _VALUE_FIELD.get(kind, TOKEN_AMOUNT)


def kind_name(kind: Union[TokenKind, int]) -> str:
    """Readable name for logging, the raw number for unknown kinds"""
    return kind.name if isinstance(kind, TokenKind) else f"KIND_{kind}"
