"""
Artifact Writer

Turns a BuildReport into the JSON layouts consumed by the election contract
scripts and the voting front-end, and writes them to disk. Writing is the
last step of a build, so a failed build never leaves a partial file behind.
"""

import json
import os
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from build_errors import ArtifactWriteError
from proof_verifier import digest_to_hex

VOTER_LIST_FILE = "voterList.json"
ROOT_FILE = "merkleRoot.txt"
PROOFS_DIR = "proofs"


def merkle_artifact(report):
    """{root, leaves, proofs} with 0x-prefixed hex digests."""
    return {
        "root": report.root_hex,
        "leaves": [digest_to_hex(leaf) for leaf in report.leaves],
        "proofs": {address: report.proof_hex(address) for address in report.addresses},
    }


def voter_proof_entry(report, voter, include_metadata=True):
    entry = {"address": voter.address, "proof": report.proof_hex(voter.address)}
    if include_metadata:
        if voter.name:
            entry["name"] = voter.name
        if voter.email:
            entry["email"] = voter.email
    return entry


def voter_list_artifact(report, generated_at=None, include_metadata=True):
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)
    return {
        "merkleRoot": report.root_hex,
        "totalVoters": len(report.voters),
        "voterProofs": [voter_proof_entry(report, v, include_metadata) for v in report.voters],
        "generatedAt": generated_at.isoformat(),
    }

def _write_atomic(path, content):
    """Write via a temp file in the same directory, then rename over `path`."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise ArtifactWriteError(path, e) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise ArtifactWriteError(path, e) from e
    return path


def _write_json(path, data):
    return _write_atomic(path, json.dumps(data, indent=2) + "\n")


def write_merkle_artifact(report, path):
    """Save the {root, leaves, proofs} artifact to `path`."""
    return _write_json(path, merkle_artifact(report))


def _replace_proofs_dir(output_dir, entries):
    """
    Write every per-voter proof into a fresh directory, then swap it in for
    proofs/. Proof files left over from an earlier build are dropped.
    """
    proofs_dir = output_dir / PROOFS_DIR
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(dir=output_dir, prefix=f".{PROOFS_DIR}."))
    except OSError as e:
        raise ArtifactWriteError(proofs_dir, e) from e

    retired = None
    try:
        os.chmod(staging, 0o755)
        for entry in entries:
            with open(staging / f"{entry['address']}.json", "w", encoding="utf-8") as f:
                f.write(json.dumps(entry, indent=2) + "\n")

        if proofs_dir.exists():
            retired = output_dir / f".{PROOFS_DIR}.old.{staging.name}"
            os.replace(proofs_dir, retired)
        os.replace(staging, proofs_dir)
    except OSError as e:
        if retired is not None and retired.exists() and not proofs_dir.exists():
            os.replace(retired, proofs_dir)
        shutil.rmtree(staging, ignore_errors=True)
        raise ArtifactWriteError(proofs_dir, e) from e

    if retired is not None:
        shutil.rmtree(retired, ignore_errors=True)
    return proofs_dir


def write_voter_list(report, output_dir, include_metadata=True, generated_at=None):
    """
    Save the voter list layout into `output_dir`:
    voterList.json, merkleRoot.txt and one proofs/<address>.json per voter.
    Returns the path of voterList.json.
    """
    output_dir = Path(output_dir)
    data = voter_list_artifact(report, generated_at=generated_at, include_metadata=include_metadata)

    _replace_proofs_dir(output_dir, data["voterProofs"])
    _write_atomic(output_dir / ROOT_FILE, data["merkleRoot"])
    return _write_json(output_dir / VOTER_LIST_FILE, data)
