"""
Exception hierarchy for merkle-drop.

Only malformed input is an error here. An empty tree, an item that is not
in the tree and a proof that does not verify are ordinary results
(``None`` / ``False``) and never raise.
"""


class MerkleDropError(Exception):
    """Base exception for all merkle-drop errors."""
    pass


class InvalidDigestError(MerkleDropError, ValueError):
    """
    Raised when a value cannot be used as a digest.

    This indicates:
    - A digest of the wrong length (expected 32 bytes)
    - A hex string that does not decode
    """
    pass


class RootDecodeError(InvalidDigestError):
    """Raised when a persisted or published root cannot be decoded."""

    def __init__(self, root: str, reason: str = ""):
        message = f"Failed to decode root: {root!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.root = root


class ProofDecodeError(MerkleDropError, ValueError):
    """
    Raised when a proof string cannot be decoded.

    This is distinct from a proof that decodes but fails to verify.
    """
    pass


class CanonicalizationError(MerkleDropError, ValueError):
    """Raised when claim fields cannot be turned into a canonical item."""
    pass
