#!/usr/bin/env python3
"""
Build Configuration for the Voter Merkle Builder

Central place for the switches that change how a build runs:
1. Where input is read from and where the artifact goes
2. Which artifact layout is written (single merkle.json or a voter list directory)
3. Whether leaves keep input order or are sorted before building
4. Whether mixed-case addresses must carry a valid checksum
"""

from enum import Enum
from dataclasses import dataclass, replace


class LeafOrdering(Enum):
    """How leaf digests are ordered before the tree is built."""
    INPUT_ORDER = "input"   # First-accepted order; root depends on input order
    SORTED = "sorted"       # Ascending digest order; root depends only on the set


class OutputFormat(Enum):
    MERKLE_JSON = "merkle"        # {root, leaves, proofs}
    VOTER_LIST = "voter-list"     # voterList.json, merkleRoot.txt, proofs/


@dataclass
class BuildConfig:
    """Configuration for one build run."""
    input_path: str = "tools/voters.csv"
    output_path: str = "tools/out/merkle.json"
    output_format: OutputFormat = OutputFormat.MERKLE_JSON
    leaf_ordering: LeafOrdering = LeafOrdering.INPUT_ORDER

    # Validation
    strict_checksum: bool = False   # Reject mixed-case addresses with a bad EIP-55 checksum

    # Output
    include_metadata: bool = True   # Carry name/email columns into the voter list
    verbose_logging: bool = True    # List every rejected line in the summary

    def with_overrides(self, **kwargs):
        """Copy of this config with the non-None keyword values applied."""
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


# Global configuration
BUILD_CONFIG = BuildConfig()


def get_build_config() -> BuildConfig:
    """Get current build configuration."""
    return BUILD_CONFIG


def set_build_config(**kwargs):
    """Change fields of the global configuration; unknown keys raise."""
    for key, value in kwargs.items():
        if not hasattr(BUILD_CONFIG, key):
            raise AttributeError(f"Unknown build setting: {key}")
        setattr(BUILD_CONFIG, key, value)
    return BUILD_CONFIG


def reset_to_default_config():
    """Reset configuration to default values."""
    global BUILD_CONFIG
    BUILD_CONFIG = BuildConfig()
    return BUILD_CONFIG
