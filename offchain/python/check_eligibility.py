#!/usr/bin/env python3
"""
Check voter addresses against a built Merkle artifact.

Usage:
    python check_eligibility.py --artifact tools/out/merkle.json 0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed
"""

import argparse
import sys

from build_errors import MerkleBuildError
from eligibility_checker import MerkleArtifact


def main(argv=None):
    parser = argparse.ArgumentParser(description='Check voter eligibility against a Merkle artifact')
    parser.add_argument('addresses', nargs='+', help='Addresses to check (any letter case)')
    parser.add_argument('--artifact', '-a', default='tools/out/merkle.json',
                        help='merkle.json or voterList.json (default: tools/out/merkle.json)')
    args = parser.parse_args(argv)

    try:
        artifact = MerkleArtifact.load(args.artifact)
    except MerkleBuildError as e:
        print(f"❌ Error loading Merkle data: {e}", file=sys.stderr)
        return 1

    stats = artifact.get_voter_stats()
    print(f"🌳 Merkle root: {stats['merkleRoot']} ({stats['totalEligible']} eligible voters)")

    all_eligible = True
    for address in args.addresses:
        proof = artifact.get_proof_for_address(address)
        if proof is None:
            all_eligible = False
            print(f"❌ {address}: not eligible")
        elif artifact.verify_address(address, proof):
            print(f"✅ {address}: eligible, proof of {len(proof)} nodes verified")
        else:
            all_eligible = False
            print(f"❌ {address}: proof does not match root")

    return 0 if all_eligible else 1


if __name__ == "__main__":
    sys.exit(main())
