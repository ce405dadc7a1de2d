"""Unit tests for canonical claim items."""

import pytest
from pydantic import ValidationError

from merkle_drop.core.canonicalization import (
    UINT128_MAX,
    Coin,
    canonical_claim_string,
    claim_item,
    verify_canonical_equivalence,
)
from merkle_drop.core.errors import CanonicalizationError

ADDRESS = "osmo1qyqszqgpqyqszqgpqyqszqgpqyqszqgpjnp7du"


def test_coin_parse_and_format() -> None:
    coin = Coin.parse("100uosmo")
    assert coin.amount == 100
    assert coin.denom == "uosmo"
    assert str(coin) == "100uosmo"


def test_coin_parse_ibc_denom() -> None:
    coin = Coin.parse("5ibc/27394FB092D2ECCD56123C74F36E4C1F926001CEADA9CA97EA622B25F41E5EB2")
    assert coin.amount == 5
    assert coin.denom.startswith("ibc/")


def test_leading_zeros_are_normalized() -> None:
    """Amounts are rendered without leading zeros, whatever the input."""
    assert str(Coin.parse("0100uosmo")) == "100uosmo"
    assert verify_canonical_equivalence((ADDRESS, "0100uosmo"), (ADDRESS, "100uosmo"))


@pytest.mark.parametrize("text", ["uosmo", "100", "100u", "-1uosmo", "1.5uosmo", "100 uosmo", "100 1uosmo"])
def test_coin_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(CanonicalizationError):
        Coin.parse(text)


def test_coin_amount_bounds() -> None:
    assert Coin.parse(f"{UINT128_MAX}uosmo").amount == UINT128_MAX
    with pytest.raises(CanonicalizationError):
        Coin.parse(f"{UINT128_MAX + 1}uosmo")
    with pytest.raises(ValidationError):
        Coin(amount=-1, denom="uosmo")


def test_claim_item_concatenates_address_and_coin() -> None:
    assert canonical_claim_string(ADDRESS, "100uosmo") == f"{ADDRESS}100uosmo"
    assert claim_item(ADDRESS, Coin(amount=100, denom="uosmo")) == f"{ADDRESS}100uosmo".encode()
    assert claim_item(ADDRESS, "100uosmo") == claim_item(ADDRESS, Coin.parse("100uosmo"))


@pytest.mark.parametrize("address", ["", " ", "osmo1 abc", "osmo1abc\n"])
def test_claim_item_rejects_bad_address(address: str) -> None:
    with pytest.raises(CanonicalizationError):
        claim_item(address, "100uosmo")


def test_different_amounts_are_different_items() -> None:
    assert not verify_canonical_equivalence((ADDRESS, "100uosmo"), (ADDRESS, "101uosmo"))
    assert not verify_canonical_equivalence((ADDRESS, "100uosmo"), (ADDRESS, "100uion"))


def test_overlong_amounts_are_rejected() -> None:
    """Amounts beyond 128 bits are a canonicalization error, however long."""
    with pytest.raises(CanonicalizationError):
        Coin.parse("9" * 5000 + "uosmo")
    with pytest.raises(CanonicalizationError):
        Coin.parse("1" + "0" * 39 + "uosmo")
    with pytest.raises(CanonicalizationError):
        claim_item(ADDRESS, "9" * 5000 + "uosmo")


def test_zero_padded_amounts_parse() -> None:
    assert str(Coin.parse("0" * 5000 + "1uosmo")) == "1uosmo"
    assert str(Coin.parse("000uosmo")) == "0uosmo"


def test_coin_is_frozen() -> None:
    coin = Coin.parse("100uosmo")
    with pytest.raises(ValidationError):
        coin.amount = -1
    assert claim_item(ADDRESS, coin) == f"{ADDRESS}100uosmo".encode()
