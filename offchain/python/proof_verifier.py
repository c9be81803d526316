"""
Proof Verifier

Pure fold of a leaf digest with its sibling digests, using the same
sorted-pair rule as the tree builder. This is the check an on-chain
MerkleProof.verify performs.
"""

from merkle_tree_builder import combine_and_hash


def process_proof(leaf, proof):
    """Rebuild the root implied by `leaf` and `proof`."""
    computed = leaf
    for sibling in proof:
        computed = combine_and_hash(computed, sibling)
    return computed


def verify_proof(leaf, proof, root):
    return process_proof(leaf, proof) == root


def hex_to_digest(value):
    """Parse a 0x-prefixed (or bare) 32-byte hex digest."""
    text = value[2:] if value.startswith(("0x", "0X")) else value
    digest = bytes.fromhex(text)
    if len(digest) != 32:
        raise ValueError(f"Expected a 32-byte digest, got {len(digest)} bytes")
    return digest


def digest_to_hex(digest):
    return "0x" + digest.hex()
