"""
Proof verification.

Verification only needs the item's bytes, the proof and the published
root. It never touches a tree.
"""

from typing import Union

from merkle_drop.core.hash import Item, branch_hash, leaf_hash, to_digest
from merkle_drop.core.proof import Proof, decode_proof


def compute_root(proof: Proof, item: Item) -> bytes:
    """Fold ``proof`` over the leaf hash of ``item`` and return the candidate root."""
    current = leaf_hash(item)
    for entry in proof:
        if entry.is_left_sibling:
            current = branch_hash(entry.hash, current)
        else:
            current = branch_hash(current, entry.hash)
    return current


def verify(proof: Proof, item: Item, expected_root: Union[bytes, str]) -> bool:
    """
    Verify an inclusion proof.

    Args:
        proof: The proof for ``item``.
        item: The raw item (bytes, or a str encoded as UTF-8).
        expected_root: The published root, as 32 raw bytes or hex.

    Returns:
        True if the proof leads from ``item`` to ``expected_root``,
        False otherwise.

    Raises:
        InvalidDigestError: If ``expected_root`` is not a valid digest.
    """
    root = to_digest(expected_root)
    return compute_root(proof, item) == root


def verify_encoded(proof_str: str, item: Item, expected_root: Union[bytes, str]) -> bool:
    """
    Verify a proof given as a transport string.

    Raises:
        ProofDecodeError: If ``proof_str`` cannot be decoded.
        InvalidDigestError: If ``expected_root`` is not a valid digest.
    """
    root = to_digest(expected_root)
    return verify(decode_proof(proof_str), item, root)
