"""
Merkle tree builder.

The tree is built bottom-up from an ordered sequence of items. When a level
has an odd number of nodes the last node is carried up unchanged instead of
being paired with a copy of itself, so trees of different sizes can never
share a root through leaf duplication.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from merkle_drop.core.hash import Item, as_bytes, branch_hash, digest_hex, leaf_hash
from merkle_drop.core.proof import Entry, Proof


class MerkleTree:
    """
    A binary Merkle tree over an ordered list of items.

    Item order is part of the tree's identity: the same items in a
    different order generally give a different root. The tree is built
    once and never mutated; build a new tree to add or remove items.
    """

    def __init__(self, items: Optional[Iterable[Item]] = None):
        """Build the tree from ``items`` (in order)."""
        self.items: Tuple[bytes, ...] = tuple(as_bytes(item) for item in items or ())
        self._levels: Tuple[Tuple[bytes, ...], ...] = self._build_levels(self.items)

    @staticmethod
    def _build_levels(items: Sequence[bytes]) -> Tuple[Tuple[bytes, ...], ...]:
        """Compute every level of the tree, leaves first and root last."""
        if not items:
            return ()

        nodes = [leaf_hash(item) for item in items]
        levels: List[Tuple[bytes, ...]] = [tuple(nodes)]

        while len(nodes) > 1:
            # Pair up nodes and hash them together
            new_level = [
                branch_hash(nodes[i], nodes[i + 1])
                for i in range(0, len(nodes) - 1, 2)
            ]
            # Carry an unpaired last node up unchanged
            if len(nodes) % 2 != 0:
                new_level.append(nodes[-1])

            nodes = new_level
            levels.append(tuple(nodes))

        return tuple(levels)

    @property
    def tree_size(self) -> int:
        """Number of leaves in the tree."""
        return len(self.items)

    def __len__(self) -> int:
        return self.tree_size

    @property
    def depth(self) -> int:
        """Number of levels above the leaves (0 for empty or single-leaf trees)."""
        return max(len(self._levels) - 1, 0)

    @property
    def levels(self) -> Tuple[Tuple[bytes, ...], ...]:
        """All levels of the tree, leaf digests first and the root last."""
        return self._levels

    def get_root(self) -> Optional[bytes]:
        """Get the root hash of the tree, or None if the tree is empty."""
        if not self._levels:
            return None
        return self._levels[-1][0]

    @property
    def root_hex(self) -> Optional[str]:
        """The root hash as lowercase hex, or None if the tree is empty."""
        root = self.get_root()
        return digest_hex(root) if root is not None else None

    def get_leaf_hash(self, index: int) -> Optional[bytes]:
        """Get the hash of a leaf node by its index."""
        if index < 0 or index >= self.tree_size:
            return None
        return self._levels[0][index]

    def index_of(self, item: Item) -> Optional[int]:
        """Position of the first leaf whose item equals ``item`` byte for byte."""
        data = as_bytes(item)
        for i, candidate in enumerate(self.items):
            if candidate == data:
                return i
        return None

    def get_proof(self, index: int) -> Optional[Proof]:
        """
        Generate an inclusion proof for the leaf at ``index``.

        Args:
            index: Position of the leaf in the original item order.

        Returns:
            The proof, ordered from the leaf level up to the root, or None
            if ``index`` is out of range.
        """
        if index < 0 or index >= self.tree_size:
            return None

        entries = []
        for level in self._levels[:-1]:
            sibling = index ^ 1  # XOR with 1 to get sibling
            if sibling < len(level):
                entries.append(Entry(is_left_sibling=sibling < index, hash=level[sibling]))
            # No sibling: the node was carried up and contributes no entry
            index //= 2

        return Proof(tuple(entries))

    def find_proof(self, item: Item) -> Optional[Proof]:
        """Generate an inclusion proof for the first leaf equal to ``item``."""
        index = self.index_of(item)
        if index is None:
            return None
        return self.get_proof(index)


def build(items: Iterable[Item]) -> MerkleTree:
    """Build a Merkle tree from an ordered sequence of items."""
    return MerkleTree(items)


def get_root(tree: MerkleTree) -> Optional[bytes]:
    """Root digest of ``tree``, or None when it has no items."""
    return tree.get_root()


def find_proof(tree: MerkleTree, item: Item) -> Optional[Proof]:
    """Inclusion proof for ``item`` in ``tree``, or None when it is absent."""
    return tree.find_proof(item)
