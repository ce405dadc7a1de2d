"""
Canonical claim items.

The tool that publishes a root and the party that later verifies a claim
must build each item byte-for-byte the same way. An item is the claimant
address immediately followed by the claimed amount in Cosmos SDK coin
notation, e.g. ``osmo1...100uosmo``, encoded as UTF-8.
"""

import re
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError
from typing_extensions import Annotated

from merkle_drop.core.errors import CanonicalizationError

# Cosmos SDK denom rule
DENOM_PATTERN = r'[a-zA-Z][a-zA-Z0-9/:._-]{2,127}'
UINT128_MAX = 2 ** 128 - 1
UINT128_DIGITS = len(str(UINT128_MAX))

# Leading zeros are dropped before the digit limit applies
_COIN_RE = re.compile(rf'^0*([0-9]{{1,{UINT128_DIGITS}}})({DENOM_PATTERN})$')

Denom = Annotated[str, StringConstraints(pattern=rf'^{DENOM_PATTERN}$')]


class Coin(BaseModel):
    """An amount of a single denomination."""

    model_config = ConfigDict(frozen=True)

    amount: int = Field(
        ...,
        ge=0,
        le=UINT128_MAX,
        description="Amount in the smallest unit of the denomination."
    )
    denom: Denom = Field(
        ...,
        description="Denomination, e.g. 'uosmo'."
    )

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"

    @classmethod
    def parse(cls, text: str) -> 'Coin':
        """
        Parse a coin string such as ``100uosmo``.

        Raises:
            CanonicalizationError: If the string is not a valid coin.
        """
        match = _COIN_RE.match(text.strip()) if isinstance(text, str) else None
        if not match:
            raise CanonicalizationError(f"Invalid coin: {text!r}")
        try:
            return cls(amount=int(match.group(1)), denom=match.group(2))
        except (ValidationError, ValueError) as e:
            raise CanonicalizationError(f"Invalid coin {text!r}: {e}") from e


def _to_coin(amount: Union[Coin, str]) -> Coin:
    if isinstance(amount, Coin):
        return amount
    return Coin.parse(amount)


def canonical_claim_string(address: str, amount: Union[Coin, str]) -> str:
    """
    Build the canonical string for a claim.

    Args:
        address: The claimant's address.
        amount: The claimed amount, as a Coin or a coin string.

    Returns:
        The address immediately followed by the coin string.

    Raises:
        CanonicalizationError: If the address is empty or contains
            whitespace, or the amount is not a valid coin.
    """
    if not isinstance(address, str) or not address:
        raise CanonicalizationError("Address must be a non-empty string")
    if any(c.isspace() for c in address):
        raise CanonicalizationError(f"Address must not contain whitespace: {address!r}")
    return f"{address}{_to_coin(amount)}"


def claim_item(address: str, amount: Union[Coin, str]) -> bytes:
    """Build the canonical tree item (UTF-8 bytes) for a claim."""
    return canonical_claim_string(address, amount).encode("utf-8")


def verify_canonical_equivalence(a: tuple, b: tuple) -> bool:
    """Check if two ``(address, amount)`` claims produce the same item."""
    return claim_item(*a) == claim_item(*b)
