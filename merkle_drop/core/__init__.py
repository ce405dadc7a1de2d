"""
Core functionality for merkle-drop.

This package contains the Merkle tree implementation, proof generation and
verification, and the canonical form of claim items.
"""

from .errors import (
    CanonicalizationError,
    InvalidDigestError,
    MerkleDropError,
    ProofDecodeError,
    RootDecodeError,
)
from .hash import DIGEST_SIZE, branch_hash, leaf_hash
from .merkle import MerkleTree, build, find_proof, get_root
from .proof import Entry, Proof, decode_proof, encode_proof
from .verify import compute_root, verify, verify_encoded

__all__ = [
    'DIGEST_SIZE',
    'leaf_hash',
    'branch_hash',
    'MerkleTree',
    'build',
    'get_root',
    'find_proof',
    'Entry',
    'Proof',
    'encode_proof',
    'decode_proof',
    'compute_root',
    'verify',
    'verify_encoded',
    'MerkleDropError',
    'InvalidDigestError',
    'RootDecodeError',
    'ProofDecodeError',
    'CanonicalizationError',
]
