"""
Eligibility Checker

Reads a built artifact (either layout) and answers the questions a voting
client asks: does this address have a proof, and does that proof reach the
published root.
"""

import json

from address_normalizer import normalize_address
from build_errors import ArtifactFormatError
from merkle_tree_builder import hash_leaf
from proof_verifier import digest_to_hex, hex_to_digest, verify_proof
from voter_merkle_pipeline import read_input_file


def _parse_digest(value, what):
    if not isinstance(value, str):
        raise ArtifactFormatError(f"{what} must be a hex string, got {type(value).__name__}")
    try:
        return hex_to_digest(value)
    except ValueError as e:
        raise ArtifactFormatError(f"Invalid {what}: {value!r} ({e})") from e


def _parse_proof(address, proof):
    if not isinstance(proof, list):
        raise ArtifactFormatError(f"Proof for {address} must be a list")
    return [_parse_digest(sibling, f"proof entry for {address}") for sibling in proof]


class MerkleArtifact:
    def __init__(self, root, proofs, leaves=None):
        self.root = root
        self.proofs = proofs
        self.leaves = leaves or []

    @classmethod
    def from_dict(cls, data):
        """Accept {root, leaves, proofs} or {merkleRoot, voterProofs}."""
        if not isinstance(data, dict):
            raise ArtifactFormatError("Artifact must be a JSON object")

        if "root" in data and isinstance(data.get("proofs"), dict):
            root = _parse_digest(data["root"], "root")
            raw_proofs = list(data["proofs"].items())
            raw_leaves = data.get("leaves", [])
            if not isinstance(raw_leaves, list):
                raise ArtifactFormatError("Artifact leaves must be a list")
            leaves = [_parse_digest(leaf, "leaf") for leaf in raw_leaves]
        elif "merkleRoot" in data and isinstance(data.get("voterProofs"), list):
            root = _parse_digest(data["merkleRoot"], "root")
            try:
                raw_proofs = [(entry["address"], entry["proof"]) for entry in data["voterProofs"]]
            except (KeyError, TypeError) as e:
                raise ArtifactFormatError(f"Malformed voterProofs entry: {e}") from e
            leaves = []
        else:
            raise ArtifactFormatError("Invalid Merkle data structure: missing root or proofs")

        proofs = {}
        for address, proof in raw_proofs:
            identifier = normalize_address(str(address))
            if identifier is None:
                raise ArtifactFormatError(f"Invalid address in artifact: {address!r}")
            proofs[identifier.checksum] = _parse_proof(address, proof)

        return cls(root=root, proofs=proofs, leaves=leaves)

    @classmethod
    def load(cls, path):
        text = read_input_file(path)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ArtifactFormatError(f"Artifact is not valid JSON: {e}") from e
        return cls.from_dict(data)

    @property
    def root_hex(self):
        return digest_to_hex(self.root)

    def get_proof_for_address(self, address):
        """Proof for `address` in any letter case, or None if not eligible."""
        identifier = normalize_address(address)
        if identifier is None:
            return None
        return self.proofs.get(identifier.checksum)

    def is_eligible_voter(self, address):
        # A single-voter tree has an empty proof, which still means eligible
        return self.get_proof_for_address(address) is not None

    def verify_address(self, address, proof=None):
        """Recompute the leaf for `address` and fold it with its proof."""
        identifier = normalize_address(address)
        if identifier is None:
            return False
        if proof is None:
            proof = self.proofs.get(identifier.checksum)
            if proof is None:
                return False
        return verify_proof(hash_leaf(identifier), proof, self.root)

    def get_eligible_voters(self):
        return list(self.proofs.keys())

    def get_voter_stats(self):
        return {
            "totalEligible": len(self.proofs),
            "merkleRoot": self.root_hex,
            "hasData": True,
        }
