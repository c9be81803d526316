"""
Sorted-Pair Merkle Tree Builder

Flat binary Merkle tree over voter address leaves, compatible with
OpenZeppelin's MerkleProof.verify:

- leaf = keccak256 of the raw 20-byte address (abi.encodePacked(address))
- parent = keccak256 of the two children concatenated in ascending byte order
- an unpaired last node is carried up to the next layer unchanged

The root therefore depends on leaf order, not only on the leaf set.
"""

from eth_utils import keccak

DIGEST_BYTES = 32


def combine_and_hash(left: bytes, right: bytes) -> bytes:
    """Hash two digests in ascending byte order."""
    combined = left + right if left <= right else right + left
    return keccak(combined)


def hash_leaf(identifier) -> bytes:
    """Leaf digest of a NormalizedIdentifier (its raw bytes, not its text)."""
    return keccak(identifier.raw)


def build_tree_layers(leaves):
    """Build tree layers from leaves: [leaves, level1, ..., [root]]."""
    layers = [list(leaves)]
    current_layer = list(leaves)

    while len(current_layer) > 1:
        next_layer = []
        for i in range(0, len(current_layer) - 1, 2):
            next_layer.append(combine_and_hash(current_layer[i], current_layer[i + 1]))
        if len(current_layer) % 2 != 0:
            next_layer.append(current_layer[-1])

        layers.append(next_layer)
        current_layer = next_layer

    return layers


class SortedPairMerkleTree:
    """Sorted-pair Merkle tree with single proof per leaf."""

    def __init__(self, leaves):
        if not leaves:
            raise ValueError("A Merkle tree needs at least one leaf")
        for leaf in leaves:
            if len(leaf) != DIGEST_BYTES:
                raise ValueError(f"Leaf digests must be {DIGEST_BYTES} bytes, got {len(leaf)}")
        self.ordered_leaves = list(leaves)
        self.layers = build_tree_layers(self.ordered_leaves)
        self.merkle_root = self.layers[-1][0]

    def build(self):
        """Return the root digest; layers are built at construction."""
        return self.merkle_root

    @property
    def height(self):
        return len(self.layers) - 1

    def generate_proof(self, leaf_index):
        """Sibling digests from leaf `leaf_index` up to (not including) the root."""
        if not 0 <= leaf_index < len(self.ordered_leaves):
            raise IndexError(f"Leaf index {leaf_index} out of range")

        proof = []
        current_index = leaf_index
        for layer in self.layers[:-1]:  # Exclude root layer
            if current_index % 2 == 0:
                sibling_index = current_index + 1
            else:
                sibling_index = current_index - 1

            # Carried-forward last node has no partner at this level
            if sibling_index < len(layer):
                proof.append(layer[sibling_index])

            current_index = current_index // 2

        return proof

    def generate_proof_for_leaf(self, leaf):
        if leaf not in self.ordered_leaves:
            raise KeyError(f"Leaf 0x{leaf.hex()} is not in the tree")
        return self.generate_proof(self.ordered_leaves.index(leaf))

    def generate_proofs(self):
        """Proofs for every leaf, in leaf order."""
        return [self.generate_proof(i) for i in range(len(self.ordered_leaves))]
