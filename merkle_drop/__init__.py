"""
merkle-drop - Merkle tree commitments for token airdrops.

This package builds a Merkle tree over an ordered list of claims, publishes
its root, hands out inclusion proofs, and verifies a claim against the root
using nothing but the claim and its proof.
"""

from importlib.metadata import version

# Set up version
__version__ = "0.1.0"

try:
    __version__ = version("merkle-drop")
except Exception:
    pass

# Core components
from merkle_drop.core.canonicalization import Coin, canonical_claim_string, claim_item
from merkle_drop.core.claim import build_claim_tree, decode_root, verify_claim
from merkle_drop.core.errors import (
    CanonicalizationError,
    InvalidDigestError,
    MerkleDropError,
    ProofDecodeError,
    RootDecodeError,
)
from merkle_drop.core.hash import DIGEST_SIZE, branch_hash, leaf_hash
from merkle_drop.core.merkle import MerkleTree, build, find_proof, get_root
from merkle_drop.core.proof import Entry, Proof, decode_proof, encode_proof
from merkle_drop.core.verify import compute_root, verify, verify_encoded

__all__ = [
    # Tree and proofs
    "DIGEST_SIZE",
    "leaf_hash",
    "branch_hash",
    "MerkleTree",
    "build",
    "get_root",
    "find_proof",
    "Entry",
    "Proof",
    "encode_proof",
    "decode_proof",
    "compute_root",
    "verify",
    "verify_encoded",
    # Claims
    "Coin",
    "canonical_claim_string",
    "claim_item",
    "build_claim_tree",
    "decode_root",
    "verify_claim",
    # Errors
    "MerkleDropError",
    "InvalidDigestError",
    "RootDecodeError",
    "ProofDecodeError",
    "CanonicalizationError",
]
