"""
Inclusion proofs.

A proof is a detached value: an ordered list of sibling digests, each
tagged with the side it sits on, from the leaf's level up to (but not
including) the root. It keeps no reference to the tree that produced it.

On the wire a proof is the JSON array::

    [{"is_left_sibling": true, "hash": "<64 hex chars>"}, ...]

and the transport string is that JSON, base64url-encoded without padding.
"""

import base64
import binascii
from typing import Iterator, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    StrictBool,
    ValidationError,
    field_serializer,
    field_validator,
)

from merkle_drop.core.errors import ProofDecodeError
from merkle_drop.core.hash import Item, to_digest


class Entry(BaseModel):
    """One step of an inclusion proof."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_left_sibling: StrictBool = Field(
        ...,
        description="True when the sibling sits to the left of the path node."
    )
    hash: bytes = Field(
        ...,
        description="Digest of the sibling node (hex encoded in JSON)."
    )

    @field_validator('hash', mode='before')
    @classmethod
    def parse_hash(cls, v):
        """Accept raw digests or hex strings, and enforce the digest size."""
        return to_digest(v)

    @field_serializer('hash', when_used='json')
    def serialize_hash(self, v: bytes) -> str:
        return v.hex()


class Proof(RootModel[Tuple[Entry, ...]]):
    """An ordered sequence of proof entries, leaf level first."""

    model_config = ConfigDict(frozen=True)

    root: Tuple[Entry, ...] = ()

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Entry:
        return self.root[index]

    def push(self, is_left_sibling: bool, hash: bytes) -> 'Proof':
        """Return a new proof with one more entry at the top."""
        return Proof(self.root + (Entry(is_left_sibling=is_left_sibling, hash=hash),))

    def verify(self, item: Item, root: Union[bytes, str]) -> bool:
        """Check this proof for ``item`` against ``root``."""
        from merkle_drop.core.verify import verify
        return verify(self, item, root)

    def to_json(self) -> str:
        """Serialize the proof as a JSON array."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> 'Proof':
        """
        Parse a proof from its JSON array form.

        Raises:
            ProofDecodeError: If the JSON is malformed or does not describe
                a proof.
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise ProofDecodeError(f"Invalid proof: {e}") from e


def encode_proof(proof: Proof) -> str:
    """Encode a proof as an unpadded base64url transport string."""
    return base64.urlsafe_b64encode(proof.to_json().encode("utf-8")).decode("ascii").rstrip("=")


def decode_proof(text: str) -> Proof:
    """
    Decode a transport string produced by :func:`encode_proof`.

    Padded input is accepted. Any corruption (bad base64, bad JSON, wrong
    shape, wrong digest length) raises :class:`ProofDecodeError`; it is
    never reported as a proof that simply fails to verify.
    """
    if not isinstance(text, str):
        raise ProofDecodeError(f"Proof must be a string, got {type(text).__name__}")

    s = text.strip().rstrip("=")
    if "+" in s or "/" in s:
        raise ProofDecodeError("Proof must use the base64url alphabet ('-' and '_', not '+' and '/')")
    pad = "=" * ((4 - len(s) % 4) % 4)
    try:
        raw = base64.b64decode(s + pad, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise ProofDecodeError(f"Proof is not valid base64url: {e}") from e

    return Proof.from_json(raw)
