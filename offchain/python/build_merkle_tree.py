#!/usr/bin/env python3
"""
Voter Merkle Tree Builder

Reads a voter CSV (or JSON address list), builds the sorted-pair Merkle tree,
self-checks every proof and writes the artifact used by the election contract
setup scripts and the voting front-end.

Usage:
    # Default paths (tools/voters.csv -> tools/out/merkle.json)
    python build_merkle_tree.py

    # Named or positional paths
    python build_merkle_tree.py --input voters.csv --output out/merkle.json
    python build_merkle_tree.py voters.csv out/merkle.json

    # Voter list directory with per-voter proof files
    python build_merkle_tree.py voters.csv ./output --format voter-list
"""

import argparse
import sys

from artifact_writer import write_merkle_artifact, write_voter_list
from build_config import LeafOrdering, OutputFormat, get_build_config
from build_errors import MerkleBuildError
from voter_merkle_pipeline import build_from_file

DEFAULT_VOTER_LIST_DIR = "./output"


def create_parser():
    parser = argparse.ArgumentParser(
        description="Build a Merkle root and per-voter proofs from a list of addresses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input format:
  address,name,email      (header optional, name and email optional)
  0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed,Alice,alice@example.com

Examples:
  python build_merkle_tree.py
  python build_merkle_tree.py --input custom-voters.csv --output custom-merkle.json
  python build_merkle_tree.py voters.csv ./output --format voter-list
        """
    )
    parser.add_argument('input', nargs='?', help='Input CSV or JSON file')
    parser.add_argument('output', nargs='?', help='Output JSON file (or directory for voter-list)')
    parser.add_argument('--input', '-i', dest='input_opt', metavar='PATH',
                        help='Input CSV or JSON file (default: tools/voters.csv)')
    parser.add_argument('--output', '-o', dest='output_opt', metavar='PATH',
                        help='Output path (default: tools/out/merkle.json)')
    parser.add_argument('--format', choices=[f.value for f in OutputFormat],
                        help='Artifact layout (default: merkle)')
    parser.add_argument('--sort-leaves', action='store_true',
                        help='Sort leaf digests so the root depends only on the address set')
    parser.add_argument('--strict-checksum', action='store_true',
                        help='Reject mixed-case addresses whose EIP-55 checksum is wrong')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Do not list individual rejected lines')
    return parser


def resolve_config(args):
    base = get_build_config()
    output_format = OutputFormat(args.format) if args.format else base.output_format

    output_path = args.output_opt or args.output
    if output_path is None and output_format == OutputFormat.VOTER_LIST:
        output_path = DEFAULT_VOTER_LIST_DIR

    return base.with_overrides(
        input_path=args.input_opt or args.input,
        output_path=output_path,
        output_format=output_format,
        leaf_ordering=LeafOrdering.SORTED if args.sort_leaves else None,
        strict_checksum=True if args.strict_checksum else None,
        verbose_logging=False if args.quiet else None,
    )


def print_summary(report, config):
    if report.header_skipped:
        print("📄 Header detected, skipped first line")
    print(f"✅ Processed {report.processed_count} lines")
    print(f"✅ Valid addresses: {len(report.voters)}")

    if report.rejections:
        print(f"⚠️  Rejected lines: {len(report.rejections)}")
        if config.verbose_logging:
            for rejection in report.rejections:
                print(f"   {rejection.describe()}")

    print(f"\n🌳 Merkle root: {report.root_hex}")
    print(f"🍃 Total leaves: {len(report.leaves)} (height {report.height}, {report.leaf_ordering.value} order)")


def run_build(config):
    print("🚀 Starting Merkle tree generation...")
    print(f"📁 Input file: {config.input_path}")
    print(f"📁 Output: {config.output_path}\n")

    report = build_from_file(config.input_path, config)
    print_summary(report, config)

    if config.output_format == OutputFormat.VOTER_LIST:
        saved = write_voter_list(report, config.output_path, include_metadata=config.include_metadata)
    else:
        saved = write_merkle_artifact(report, config.output_path)
    print(f"💾 Merkle tree saved to: {saved}")

    print("\n✅ Merkle tree generation completed successfully!")
    print("📊 Summary:")
    print(f"   - Valid addresses: {len(report.voters)}")
    print(f"   - Rejected lines: {len(report.rejections)}")
    print(f"   - Merkle root: {report.root_hex}")
    print(f"   - Output: {saved}")
    return report


def main(argv=None):
    """Main CLI interface."""
    args = create_parser().parse_args(argv)
    config = resolve_config(args)

    try:
        run_build(config)
    except MerkleBuildError as e:
        print(f"❌ Error building Merkle tree: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
