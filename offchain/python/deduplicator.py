"""
Deduplicator

Normalizes each candidate and keeps the first occurrence of every address.
Survivors stay in the order they were first accepted.
"""

from address_normalizer import normalize_address
from voter_data_structure import AcceptedVoter, RejectionReason, RejectionRecord


class Deduplicator:
    def __init__(self, strict_checksum=False):
        self.strict_checksum = strict_checksum
        self.seen = set()
        self.survivors = []
        self.rejections = []

    def offer(self, record):
        """Accept or reject one RawRecord. Returns the AcceptedVoter or None."""
        if not record.candidate:
            self.rejections.append(RejectionRecord(record.line_number, RejectionReason.EMPTY))
            return None

        identifier = normalize_address(record.candidate, strict_checksum=self.strict_checksum)
        if identifier is None:
            self.rejections.append(RejectionRecord(
                record.line_number, RejectionReason.INVALID_FORMAT, record.candidate
            ))
            return None

        if identifier.raw in self.seen:
            self.rejections.append(RejectionRecord(
                record.line_number, RejectionReason.DUPLICATE, identifier.checksum
            ))
            return None

        self.seen.add(identifier.raw)
        voter = AcceptedVoter(identifier=identifier, line_number=record.line_number,
                              metadata=record.metadata)
        self.survivors.append(voter)
        return voter


def deduplicate(records, strict_checksum=False):
    """Run every record through a fresh Deduplicator; returns (survivors, rejections)."""
    dedup = Deduplicator(strict_checksum=strict_checksum)
    for record in records:
        dedup.offer(record)
    return dedup.survivors, dedup.rejections
