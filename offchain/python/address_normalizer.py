"""
Address Normalizer

Validates raw address tokens and turns them into NormalizedIdentifier values:
the EIP-55 checksummed text plus the raw 20-byte form that gets hashed into
the tree. A NormalizedIdentifier cannot be built from a malformed value, so
later stages never re-validate.
"""

import re
from dataclasses import dataclass
from typing import Optional

from eth_utils import to_canonical_address
from web3 import Web3

from build_errors import InvalidAddressError

ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")
ADDRESS_BYTES = 20


def _is_mixed_case(hex_digits):
    return hex_digits != hex_digits.lower() and hex_digits != hex_digits.upper()


@dataclass(frozen=True)
class NormalizedIdentifier:
    checksum: str
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, bytes) or len(self.raw) != ADDRESS_BYTES:
            raise InvalidAddressError(self.raw, "address must be exactly 20 bytes")
        if self.checksum != Web3.to_checksum_address("0x" + self.raw.hex()):
            raise InvalidAddressError(self.checksum, "checksum does not match raw bytes")

    @classmethod
    def from_text(cls, token, strict_checksum=False):
        """Validate `token` and build the canonical identifier.

        Accepts exactly ``0x`` followed by 40 hex digits in any case. With
        `strict_checksum`, a mixed-case token must already be correctly
        checksummed (all-lower and all-upper tokens carry no checksum and
        are always accepted).
        """
        token = token.strip()
        if not ADDRESS_PATTERN.fullmatch(token):
            raise InvalidAddressError(token)

        if strict_checksum and _is_mixed_case(token[2:]) and not Web3.is_checksum_address(token):
            raise InvalidAddressError(token, "bad address checksum")

        checksum = Web3.to_checksum_address(token)
        return cls(checksum=checksum, raw=to_canonical_address(checksum))

    @property
    def lower(self):
        return self.checksum.lower()

    def __str__(self):
        return self.checksum


def normalize_address(token: str, strict_checksum: bool = False) -> Optional[NormalizedIdentifier]:
    """Return the NormalizedIdentifier for `token`, or None if it is rejected."""
    try:
        return NormalizedIdentifier.from_text(token, strict_checksum=strict_checksum)
    except InvalidAddressError:
        return None
