"""
Hash primitives for the Merkle tree.

Leaves and internal nodes are hashed with distinct one-byte prefixes
(as in RFC 6962) so a leaf digest can never be presented as a branch
digest or the other way round.
"""

import hashlib
from typing import Union

from merkle_drop.core.errors import InvalidDigestError

# Domain separation tags for Merkle tree hashing
LEAF_NODE_PREFIX = b'\x00'  # Prefix for leaf nodes
INTERNAL_NODE_PREFIX = b'\x01'  # Prefix for internal nodes

DIGEST_SIZE = hashlib.sha256().digest_size

Item = Union[bytes, str]


def as_bytes(item: Item) -> bytes:
    """Return the raw bytes of an item, encoding strings as UTF-8."""
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    raise TypeError(f"Items must be bytes or str, got {type(item).__name__}")


def leaf_hash(data: Item) -> bytes:
    """Hash a leaf node with domain separation."""
    return hashlib.sha256(LEAF_NODE_PREFIX + as_bytes(data)).digest()


def branch_hash(left: bytes, right: bytes) -> bytes:
    """
    Hash an internal node with domain separation.

    Args:
        left: Digest of the left child.
        right: Digest of the right child.

    Returns:
        The 32-byte digest of the parent node.

    Raises:
        InvalidDigestError: If either child is not a 32-byte digest.
    """
    _check_length(left)
    _check_length(right)
    return hashlib.sha256(INTERNAL_NODE_PREFIX + left + right).digest()


def _check_length(digest: bytes) -> None:
    if len(digest) != DIGEST_SIZE:
        raise InvalidDigestError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
        )


def to_digest(value: Union[bytes, str]) -> bytes:
    """
    Coerce a digest given as raw bytes or as a hex string.

    Hex strings may be upper or lower case and may carry a ``0x`` prefix.

    Raises:
        InvalidDigestError: If the value is not a 32-byte digest.
    """
    if isinstance(value, str):
        text = value.strip()
        if text[:2].lower() == "0x":
            text = text[2:]
        if any(c.isspace() for c in text):
            raise InvalidDigestError(f"Hex digest must not contain whitespace: {value!r}")
        try:
            value = bytes.fromhex(text)
        except ValueError as e:
            raise InvalidDigestError(f"Invalid hex digest: {e}") from e
    elif isinstance(value, (bytearray, memoryview)):
        value = bytes(value)
    elif not isinstance(value, bytes):
        raise InvalidDigestError(
            f"Digest must be bytes or a hex string, got {type(value).__name__}"
        )
    _check_length(value)
    return value


def digest_hex(digest: bytes) -> str:
    """Render a digest as lowercase hex."""
    return digest.hex()
