"""
Voter Merkle Pipeline

Runs the whole commitment build in memory:

    raw text -> parser -> normalize + dedup -> leaf hashing
             -> tree -> proofs -> self-verification -> BuildReport

Nothing here prints or writes files. The caller decides what to do with the
returned BuildReport; a failed self-check raises before any report exists.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from build_config import BuildConfig, LeafOrdering, get_build_config
from build_errors import InputFileError, NoValidAddressesError, ProofVerificationError
from deduplicator import deduplicate
from merkle_tree_builder import SortedPairMerkleTree, hash_leaf
from proof_verifier import digest_to_hex, verify_proof
from record_parser import parse_csv_records, select_parser
from voter_data_structure import AcceptedVoter, ParsedInput, RejectionRecord


@dataclass
class BuildReport:
    """Everything a build produced, ready for an artifact writer."""
    voters: List[AcceptedVoter]
    rejections: List[RejectionRecord]
    leaves: List[bytes]
    root: bytes
    proofs: Dict[str, List[bytes]]
    leaf_by_address: Dict[str, bytes]
    height: int
    processed_count: int
    header_skipped: bool = False
    leaf_ordering: LeafOrdering = LeafOrdering.INPUT_ORDER

    @property
    def root_hex(self) -> str:
        return digest_to_hex(self.root)

    @property
    def addresses(self) -> List[str]:
        return [voter.address for voter in self.voters]

    def proof_hex(self, address: str) -> List[str]:
        return [digest_to_hex(sibling) for sibling in self.proofs[address]]


def build_commitment(text: str,
                     config: Optional[BuildConfig] = None,
                     parser: Optional[Callable[[str], ParsedInput]] = None) -> BuildReport:
    """Build the Merkle commitment for the addresses in `text`."""
    config = config or get_build_config()
    parser = parser or parse_csv_records

    parsed = parser(text)
    voters, rejections = deduplicate(parsed.records, strict_checksum=config.strict_checksum)
    if not voters:
        raise NoValidAddressesError(len(rejections))

    leaf_by_address = {voter.address: hash_leaf(voter.identifier) for voter in voters}
    leaves = list(leaf_by_address.values())
    if config.leaf_ordering == LeafOrdering.SORTED:
        leaves.sort()

    tree = SortedPairMerkleTree(leaves)
    root = tree.build()
    all_proofs = tree.generate_proofs()
    leaf_index = {leaf: i for i, leaf in enumerate(tree.ordered_leaves)}

    # Every proof must fold back to the root before anything is handed out
    proofs = {}
    for voter in voters:
        leaf = leaf_by_address[voter.address]
        proof = all_proofs[leaf_index[leaf]]
        if not verify_proof(leaf, proof, root):
            raise ProofVerificationError(voter.address, leaf, proof, root)
        proofs[voter.address] = proof

    return BuildReport(
        voters=voters,
        rejections=rejections,
        leaves=tree.ordered_leaves,
        root=root,
        proofs=proofs,
        leaf_by_address=leaf_by_address,
        height=tree.height,
        processed_count=parsed.processed_count,
        header_skipped=parsed.header_skipped,
        leaf_ordering=config.leaf_ordering,
    )


def read_input_file(path) -> str:
    path = Path(path)
    if not path.is_file():
        raise InputFileError(path, "not found")
    try:
        # utf-8-sig strips a leading BOM
        with open(path, "r", encoding="utf-8-sig") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(path, f"could not be read ({e})") from e


def build_from_file(path, config: Optional[BuildConfig] = None) -> BuildReport:
    """Read `path` (CSV, or JSON by extension) and build its commitment."""
    text = read_input_file(path)
    return build_commitment(text, config=config, parser=select_parser(path))
