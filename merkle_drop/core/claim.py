"""
Claim verification on top of a published Merkle root.

A claim is an address and an amount. The generation side builds a tree of
canonical claim items and hands each claimant a proof string; the verifying
side holds only the hex root. Tracking which claims were already honoured is
left to the caller.
"""

import logging
from typing import Iterable, Tuple, Union

from merkle_drop.core.canonicalization import Coin, claim_item
from merkle_drop.core.errors import InvalidDigestError, ProofDecodeError, RootDecodeError
from merkle_drop.core.hash import to_digest
from merkle_drop.core.merkle import MerkleTree
from merkle_drop.core.proof import decode_proof
from merkle_drop.core.verify import verify

logger = logging.getLogger(__name__)

Claim = Tuple[str, Union[Coin, str]]


def decode_root(merkle_root: str) -> bytes:
    """Decode a hex-encoded root, raising RootDecodeError on failure."""
    try:
        return to_digest(merkle_root)
    except InvalidDigestError as e:
        raise RootDecodeError(str(merkle_root), str(e)) from e


def build_claim_tree(claims: Iterable[Claim]) -> MerkleTree:
    """Build a tree from ``(address, amount)`` pairs, in the given order."""
    return MerkleTree(claim_item(address, amount) for address, amount in claims)


def verify_claim(
    merkle_root: str,
    address: str,
    amount: Union[Coin, str],
    proof_str: str,
) -> bool:
    """
    Check a claim against a published root.

    Args:
        merkle_root: The published root, hex encoded.
        address: The claimant's address.
        amount: The claimed amount.
        proof_str: The claimant's proof, as produced by ``encode_proof``.

    Returns:
        True if the claim is in the tree committed to by ``merkle_root``.

    Raises:
        RootDecodeError: If ``merkle_root`` is not a valid digest.
        ProofDecodeError: If ``proof_str`` cannot be decoded.
        CanonicalizationError: If the claim fields are malformed.
    """
    root = decode_root(merkle_root)
    item = claim_item(address, amount)

    try:
        proof = decode_proof(proof_str)
    except ProofDecodeError as e:
        logger.debug(f"Rejecting proof for {address}: {e}")
        raise

    verified = verify(proof, item, root)
    if verified:
        logger.info(f"Verified claim of {amount} for {address}")
    else:
        logger.info(f"Failed to verify claim of {amount} for {address}")
    return verified
