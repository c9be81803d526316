"""
Record Parser

Input adapters that turn raw text into an ordered list of RawRecord. The CSV
adapter is the default; the JSON adapter lets a previous artifact or a plain
JSON address list be fed back into the builder.
"""

import json
from pathlib import Path

from build_errors import EmptyInputError, InputFormatError
from voter_data_structure import ParsedInput, RawRecord

HEADER_MARKER = "address"
# Keys of a JSON voter object that are not passed through as metadata
RESERVED_JSON_KEYS = ("address", "name", "email", "proof")


def parse_csv_records(text):
    """
    Split delimited text into records.

    Blank lines are dropped. If the first non-blank line mentions "address"
    (case-insensitive) it is treated as a header and skipped. The first
    comma-separated field of each remaining line is the candidate address;
    the rest is kept as metadata. Line numbers refer to the original text.
    """
    lines = [(number, line.strip()) for number, line in enumerate(text.split("\n"), start=1)]
    lines = [(number, line) for number, line in lines if line]

    if not lines:
        raise EmptyInputError("Input is empty")

    start_index = 0
    if HEADER_MARKER in lines[0][1].lower():
        start_index = 1

    records = []
    for number, line in lines[start_index:]:
        fields = [part.strip() for part in line.split(",")]
        records.append(RawRecord(
            line_number=number,
            text=line,
            candidate=fields[0],
            metadata=tuple(fields[1:]),
        ))

    if not records:
        raise EmptyInputError("Input contains only a header line")

    return ParsedInput(records=records, start_index=start_index, header_skipped=start_index == 1)


def _json_items(data):
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if isinstance(data.get("voterProofs"), list):
            return data["voterProofs"]
        if isinstance(data.get("proofs"), dict):
            return list(data["proofs"].keys())
    raise InputFormatError(
        "JSON input must be a list of addresses, a voter list or a merkle artifact"
    )


def _text(value):
    return "" if value is None else str(value).strip()


def parse_json_records(text):
    """Read a JSON address list. Line numbers are 1-based item positions."""
    if not text.strip():
        raise EmptyInputError("Input is empty")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputFormatError(f"Invalid JSON input: {e}") from e

    records = []
    for position, item in enumerate(_json_items(data), start=1):
        if isinstance(item, dict):
            candidate = _text(item.get("address"))
            extra = [value for key, value in item.items() if key not in RESERVED_JSON_KEYS]
            metadata = tuple(_text(value) for value in [item.get("name"), item.get("email")] + extra)
        else:
            candidate = _text(item)
            metadata = ()
        records.append(RawRecord(
            line_number=position,
            text=json.dumps(item),
            candidate=candidate,
            metadata=metadata,
        ))

    if not records:
        raise EmptyInputError("JSON input contains no records")

    return ParsedInput(records=records, start_index=0, header_skipped=False)


def select_parser(path):
    """Pick the input adapter from the file extension."""
    if Path(path).suffix.lower() == ".json":
        return parse_json_records
    return parse_csv_records
