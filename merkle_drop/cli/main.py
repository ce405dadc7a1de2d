"""
merkle-drop Command Line Interface

Provides commands for computing a Merkle root over a list of items or
claims, handing out inclusion proofs, and verifying them.
"""

import json
import logging
import sys
from typing import List, Tuple

import click

from merkle_drop.core.canonicalization import Coin, claim_item
from merkle_drop.core.claim import build_claim_tree, verify_claim
from merkle_drop.core.errors import (
    CanonicalizationError,
    InvalidDigestError,
    ProofDecodeError,
)
from merkle_drop.core.merkle import MerkleTree
from merkle_drop.core.proof import encode_proof
from merkle_drop.core.verify import verify_encoded

logger = logging.getLogger(__name__)

# Configure click
CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']

# Exit codes for verification
EXIT_VERIFIED = 0
EXIT_NOT_VERIFIED = 1
EXIT_MALFORMED = 2


# Helper functions
def parse_claim(text: str) -> Tuple[str, Coin]:
    """Parse an ``ADDRESS=COIN`` argument."""
    try:
        address, amount = text.split('=', 1)
        coin = Coin.parse(amount)
        claim_item(address, coin)
        return address, coin
    except (ValueError, CanonicalizationError) as e:
        click.echo(f"Invalid claim {text!r}: expected ADDRESS=COIN ({e})", err=True)
        sys.exit(1)


def parse_claims(claims: Tuple[str, ...]) -> List[Tuple[str, Coin]]:
    return [parse_claim(claim) for claim in claims]


def require_root(tree: MerkleTree) -> str:
    """Return the tree's hex root, exiting if the tree is empty."""
    root = tree.root_hex
    if root is None:
        click.echo("No items given: an empty tree has no root", err=True)
        sys.exit(1)
    return root


def emit_proof(tree: MerkleTree, item: bytes, label: str, as_json: bool) -> None:
    """Print the proof for ``item``, exiting if it is not in the tree."""
    proof = tree.find_proof(item)
    if proof is None:
        click.echo(f"{label} is not in the tree", err=True)
        sys.exit(1)

    logger.debug(f"Proof for {label} has {len(proof)} entries")
    encoded = encode_proof(proof)
    if as_json:
        click.echo(json.dumps({
            "item": label,
            "root": tree.root_hex,
            "proof": encoded,
            "entries": json.loads(proof.to_json()),
        }, indent=2))
    else:
        click.echo(encoded)


def report_verification(check, label: str) -> None:
    """Run a verification callable and exit with the matching status."""
    try:
        verified = check()
    except (InvalidDigestError, ProofDecodeError, CanonicalizationError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_MALFORMED)

    if verified:
        click.echo(f"✅ {label} is included in the tree")
        sys.exit(EXIT_VERIFIED)
    else:
        click.echo(f"❌ Failed to verify {label}", err=True)
        sys.exit(EXIT_NOT_VERIFIED)


# Command groups
@click.group(context_settings=CONTEXT_SETTINGS)
@click.option('--log-level', default='WARNING', show_default=True, envvar='MERKLE_DROP_LOG_LEVEL',
              type=click.Choice(LOG_LEVELS, case_sensitive=False),
              help='Logging verbosity')
def cli(log_level: str):
    """merkle-drop - Merkle roots and inclusion proofs for airdrops."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


# Plain item commands
@cli.command()
@click.argument('items', nargs=-1)
def root(items: Tuple[str, ...]):
    """Print the Merkle root of ITEMS, in the order given."""
    tree = MerkleTree(items)
    logger.info(f"Built tree over {tree.tree_size} items, depth {tree.depth}")
    click.echo(require_root(tree))


@cli.command()
@click.option('--item', '-i', required=True, help='Item to prove')
@click.option('--json', 'as_json', is_flag=True, help='Print the proof as JSON')
@click.argument('items', nargs=-1)
def proof(item: str, as_json: bool, items: Tuple[str, ...]):
    """Print the inclusion proof of ITEM among ITEMS."""
    tree = MerkleTree(items)
    require_root(tree)
    emit_proof(tree, item.encode('utf-8'), item, as_json)


@cli.command()
@click.option('--root', '-r', 'root_hex', required=True, envvar='MERKLE_DROP_ROOT',
              help='Expected Merkle root (hex)')
@click.option('--proof', '-p', 'proof_str', required=True, help='Encoded proof')
@click.argument('item')
def verify(root_hex: str, proof_str: str, item: str):
    """Verify that ITEM is included in the tree with the given root."""
    report_verification(lambda: verify_encoded(proof_str, item, root_hex), item)


# Claim commands
@cli.group()
def claim():
    """Work with ADDRESS=COIN claims."""
    pass


@claim.command('root')
@click.argument('claims', nargs=-1)
def claim_root(claims: Tuple[str, ...]):
    """Print the Merkle root of CLAIMS (ADDRESS=COIN), in the order given."""
    tree = build_claim_tree(parse_claims(claims))
    logger.info(f"Built claim tree over {tree.tree_size} claims")
    click.echo(require_root(tree))


@claim.command('proof')
@click.option('--address', '-a', required=True, help='Claimant address')
@click.option('--amount', '-m', required=True, help='Claimed amount, e.g. 100uosmo')
@click.option('--json', 'as_json', is_flag=True, help='Print the proof as JSON')
@click.argument('claims', nargs=-1)
def claim_proof(address: str, amount: str, as_json: bool, claims: Tuple[str, ...]):
    """Print the proof for one claim among CLAIMS (ADDRESS=COIN)."""
    tree = build_claim_tree(parse_claims(claims))
    require_root(tree)
    try:
        item = claim_item(address, amount)
    except CanonicalizationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    emit_proof(tree, item, item.decode('utf-8'), as_json)


@claim.command('verify')
@click.option('--root', '-r', 'root_hex', required=True, envvar='MERKLE_DROP_ROOT',
              help='Published Merkle root (hex)')
@click.option('--proof', '-p', 'proof_str', required=True, help='Encoded proof')
@click.option('--address', '-a', required=True, help='Claimant address')
@click.option('--amount', '-m', required=True, help='Claimed amount, e.g. 100uosmo')
def claim_verify(root_hex: str, proof_str: str, address: str, amount: str):
    """Verify a claim against a published root."""
    report_verification(
        lambda: verify_claim(root_hex, address, amount, proof_str),
        f"claim of {amount} for {address}",
    )


# Main entry point
if __name__ == '__main__':
    cli()
