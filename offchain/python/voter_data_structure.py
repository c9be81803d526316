"""
Plain data records passed between the stages of the voter Merkle builder.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from address_normalizer import NormalizedIdentifier


@dataclass(frozen=True)
class RawRecord:
    """One input line (or JSON item) before any validation."""
    line_number: int
    text: str
    candidate: str
    metadata: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParsedInput:
    records: list[RawRecord]
    start_index: int
    header_skipped: bool

    @property
    def processed_count(self) -> int:
        return len(self.records)


class RejectionReason(Enum):
    EMPTY = "empty address"
    INVALID_FORMAT = "invalid address format"
    DUPLICATE = "duplicate address"


@dataclass(frozen=True)
class RejectionRecord:
    line_number: int
    reason: RejectionReason
    value: str = ""

    def describe(self) -> str:
        if self.value:
            return f"Line {self.line_number}: {self.reason.value} - {self.value}"
        return f"Line {self.line_number}: {self.reason.value}"


@dataclass(frozen=True)
class AcceptedVoter:
    """A deduplicated voter and the metadata of its first occurrence."""
    identifier: NormalizedIdentifier
    line_number: int
    metadata: tuple[str, ...] = field(default=())

    @property
    def address(self) -> str:
        return self.identifier.checksum

    @property
    def name(self) -> Optional[str]:
        return self.metadata[0] if len(self.metadata) > 0 and self.metadata[0] else None

    @property
    def email(self) -> Optional[str]:
        return self.metadata[1] if len(self.metadata) > 1 and self.metadata[1] else None

    def __repr__(self):
        return f"Voter({self.address}, line={self.line_number})"
