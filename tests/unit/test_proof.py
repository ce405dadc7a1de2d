"""Unit tests for proofs, their transport encoding and verification."""

import base64
import json

import pytest
from pydantic import ValidationError

from merkle_drop.core.errors import InvalidDigestError, ProofDecodeError
from merkle_drop.core.hash import leaf_hash
from merkle_drop.core.merkle import build
from merkle_drop.core.proof import Entry, Proof, decode_proof, encode_proof
from merkle_drop.core.verify import compute_root, verify, verify_encoded

TOKENS = [b"OSMO", b"ION", b"WETH", b"USDC", b"AKT"]


def b64url(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


@pytest.fixture
def tree():
    return build(TOKENS)


def test_entry_validates_digest() -> None:
    digest = leaf_hash(b"x")
    assert Entry(is_left_sibling=True, hash=digest.hex()).hash == digest

    with pytest.raises(ValidationError):
        Entry(is_left_sibling=True, hash=b"short")
    with pytest.raises(ValidationError):
        Entry(is_left_sibling="yes", hash=digest)


def test_entries_and_proofs_are_frozen() -> None:
    entry = Entry(is_left_sibling=True, hash=leaf_hash(b"x"))
    with pytest.raises(ValidationError):
        entry.is_left_sibling = False
    assert hash(Proof((entry,))) == hash(Proof((entry,)))


def test_push_returns_new_proof() -> None:
    empty = Proof()
    digest = leaf_hash(b"x")
    one = empty.push(False, digest)
    assert len(empty) == 0
    assert len(one) == 1
    assert one[0] == Entry(is_left_sibling=False, hash=digest)


def test_json_form_is_array_of_entries(tree) -> None:
    proof = tree.find_proof(b"USDC")
    data = json.loads(proof.to_json())
    assert isinstance(data, list)
    assert data[0] == {"is_left_sibling": True, "hash": leaf_hash(b"WETH").hex()}
    assert Proof.from_json(proof.to_json()) == proof


def test_encode_decode(tree) -> None:
    for token in TOKENS:
        proof = tree.find_proof(token)
        encoded = encode_proof(proof)
        assert "=" not in encoded
        assert decode_proof(encoded) == proof


def test_empty_proof_encoding() -> None:
    assert encode_proof(Proof()) == "W10"
    assert decode_proof("W10") == Proof()
    assert decode_proof("W10=") == Proof()


def test_proof_method_matches_free_function(tree) -> None:
    proof = tree.find_proof(b"USDC")
    assert proof.verify(b"USDC", tree.get_root())
    assert proof.verify(b"USDC", tree.root_hex)
    assert compute_root(proof, b"USDC") == tree.get_root()


@pytest.mark.parametrize("text", [
    "",
    "!!!!",
    "W10x1",
    b64url("hello"),
    b64url("{}"),
    b64url('[{"is_left_sibling": true}]'),
    b64url('[{"is_left_sibling": 1, "hash": "' + "00" * 32 + '"}]'),
    b64url('[{"is_left_sibling": true, "hash": "' + "00" * 31 + '"}]'),
    b64url('[{"is_left_sibling": true, "hash": "' + "zz" * 32 + '"}]'),
    b64url('[{"is_left_sibling": true, "hash": "' + "00" * 32 + '", "extra": 1}]'),
])
def test_decode_rejects_malformed(text: str) -> None:
    with pytest.raises(ProofDecodeError):
        decode_proof(text)


def test_decode_rejects_non_string() -> None:
    with pytest.raises(ProofDecodeError):
        decode_proof(b"W10")


def test_from_json_rejects_malformed() -> None:
    with pytest.raises(ProofDecodeError):
        Proof.from_json("[1, 2]")


def test_tampered_digest_fails(tree) -> None:
    """Flipping any single bit in any sibling digest breaks verification."""
    root = tree.get_root()
    proof = tree.find_proof(b"USDC")
    for i, entry in enumerate(proof):
        for bit in range(len(entry.hash) * 8):
            flipped = bytearray(entry.hash)
            flipped[bit // 8] ^= 1 << (bit % 8)
            entries = list(proof)
            entries[i] = Entry(is_left_sibling=entry.is_left_sibling, hash=bytes(flipped))
            assert not verify(Proof(tuple(entries)), b"USDC", root)


def test_tampered_side_fails(tree) -> None:
    root = tree.get_root()
    proof = tree.find_proof(b"USDC")
    for i, entry in enumerate(proof):
        entries = list(proof)
        entries[i] = Entry(is_left_sibling=not entry.is_left_sibling, hash=entry.hash)
        assert not verify(Proof(tuple(entries)), b"USDC", root)


def test_dropped_or_extra_entries_fail(tree) -> None:
    root = tree.get_root()
    proof = tree.find_proof(b"USDC")
    assert not verify(Proof(proof.root[:-1]), b"USDC", root)
    assert not verify(proof.push(False, leaf_hash(b"x")), b"USDC", root)


def test_verify_rejects_malformed_root(tree) -> None:
    """A wrong-length root is an error, not a failed verification."""
    proof = tree.find_proof(b"USDC")
    with pytest.raises(InvalidDigestError):
        verify(proof, b"USDC", b"\x00" * 31)
    with pytest.raises(InvalidDigestError):
        verify(proof, b"USDC", "not-hex")


def test_verify_encoded(tree) -> None:
    encoded = encode_proof(tree.find_proof(b"USDC"))
    assert verify_encoded(encoded, b"USDC", tree.root_hex)
    assert not verify_encoded(encoded, b"OSMO", tree.root_hex)
    with pytest.raises(ProofDecodeError):
        verify_encoded("!!!!", b"USDC", tree.root_hex)
    with pytest.raises(InvalidDigestError):
        verify_encoded(encoded, b"USDC", "abcd")


@pytest.mark.parametrize("text", ["W10+", "W1/0", "W1+/"])
def test_decode_rejects_standard_base64_alphabet(text: str) -> None:
    with pytest.raises(ProofDecodeError):
        decode_proof(text)


def test_standard_spelling_of_proof_is_rejected(tree) -> None:
    """A proof has exactly one accepted spelling: unpadded or padded base64url."""
    for token in TOKENS:
        encoded = encode_proof(tree.find_proof(token))
        standard = encoded.replace("-", "+").replace("_", "/")
        if standard != encoded:
            with pytest.raises(ProofDecodeError):
                decode_proof(standard)
        assert decode_proof(encoded) == tree.find_proof(token)
