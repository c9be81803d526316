import json

import pytest

import build_merkle_tree
import check_eligibility
from conftest import ADDR_A, ADDR_B, ADDR_C, ADDR_D


def test_build_with_named_paths(tmp_path, voters_csv, capsys):
    out = tmp_path / "out" / "merkle.json"
    assert build_merkle_tree.main(["--input", str(voters_csv), "--output", str(out)]) == 0

    data = json.loads(out.read_text(encoding="utf-8"))
    assert list(data["proofs"]) == [ADDR_A, ADDR_B, ADDR_C]

    stdout = capsys.readouterr().out
    assert "Header detected" in stdout
    assert "Valid addresses: 3" in stdout
    assert "Rejected lines: 2" in stdout
    assert "Line 3: invalid address format" in stdout
    assert "Line 5: duplicate address" in stdout
    assert data["root"] in stdout


def test_build_with_positional_paths(tmp_path, voters_csv):
    out = tmp_path / "merkle.json"
    assert build_merkle_tree.main([str(voters_csv), str(out)]) == 0
    assert out.exists()


def test_named_paths_win_over_positional(tmp_path, voters_csv):
    named = tmp_path / "named.json"
    positional = tmp_path / "positional.json"
    assert build_merkle_tree.main([str(voters_csv), str(positional), "-o", str(named)]) == 0
    assert named.exists()
    assert not positional.exists()


def test_quiet_hides_rejection_details(tmp_path, voters_csv, capsys):
    assert build_merkle_tree.main(["-q", "-i", str(voters_csv), "-o", str(tmp_path / "m.json")]) == 0
    stdout = capsys.readouterr().out
    assert "Rejected lines: 2" in stdout
    assert "Line 3:" not in stdout


def test_sort_leaves_flag(tmp_path):
    forward = tmp_path / "forward.csv"
    reverse = tmp_path / "reverse.csv"
    forward.write_text(f"{ADDR_A}\n{ADDR_B}\n{ADDR_C}\n", encoding="utf-8")
    reverse.write_text(f"{ADDR_C}\n{ADDR_B}\n{ADDR_A}\n", encoding="utf-8")

    roots = []
    for source in (forward, reverse):
        out = tmp_path / f"{source.stem}.json"
        assert build_merkle_tree.main([str(source), str(out), "--sort-leaves"]) == 0
        roots.append(json.loads(out.read_text(encoding="utf-8"))["root"])
    assert roots[0] == roots[1]


def test_voter_list_format(tmp_path, voters_csv):
    out = tmp_path / "output"
    assert build_merkle_tree.main([str(voters_csv), str(out), "--format", "voter-list"]) == 0
    assert (out / "voterList.json").exists()
    assert (out / "merkleRoot.txt").exists()
    assert (out / "proofs" / f"{ADDR_A}.json").exists()


def test_missing_input_exits_nonzero(tmp_path, capsys):
    out = tmp_path / "merkle.json"
    assert build_merkle_tree.main([str(tmp_path / "missing.csv"), str(out)]) == 1
    assert not out.exists()
    assert "Input file not found" in capsys.readouterr().err


@pytest.mark.parametrize("content, message", [
    ("", "Input is empty"),
    ("address\n", "only a header"),
    ("address\n0x1234\n", "No valid addresses"),
])
def test_fatal_inputs_write_nothing(tmp_path, capsys, content, message):
    source = tmp_path / "voters.csv"
    source.write_text(content, encoding="utf-8")
    out = tmp_path / "out" / "merkle.json"

    assert build_merkle_tree.main([str(source), str(out)]) == 1
    assert not out.parent.exists()
    assert message in capsys.readouterr().err


def test_strict_checksum_flag(tmp_path):
    source = tmp_path / "voters.csv"
    source.write_text("0x5AAeb6053F3E94C9b9A09f33669435E7Ef1BeAed\n", encoding="utf-8")
    out = tmp_path / "merkle.json"
    assert build_merkle_tree.main([str(source), str(out)]) == 0
    assert build_merkle_tree.main([str(source), str(tmp_path / "strict.json"), "--strict-checksum"]) == 1


def test_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as excinfo:
        build_merkle_tree.main(["--help"])
    assert excinfo.value.code == 0
    assert "--input" in capsys.readouterr().out


def test_check_eligibility(tmp_path, voters_csv, capsys):
    out = tmp_path / "merkle.json"
    assert build_merkle_tree.main([str(voters_csv), str(out)]) == 0
    capsys.readouterr()

    assert check_eligibility.main(["--artifact", str(out), ADDR_A.lower(), ADDR_C]) == 0
    stdout = capsys.readouterr().out
    assert stdout.count("eligible, proof of") == 2

    assert check_eligibility.main(["-a", str(out), ADDR_B, ADDR_D]) == 1
    assert f"{ADDR_D}: not eligible" in capsys.readouterr().out


def test_check_eligibility_missing_artifact(tmp_path, capsys):
    assert check_eligibility.main(["-a", str(tmp_path / "none.json"), ADDR_A]) == 1
    assert "Error loading Merkle data" in capsys.readouterr().err


def test_unwritable_output_exits_nonzero(tmp_path, voters_csv, capsys):
    out = tmp_path / "outdir"
    out.mkdir()
    assert build_merkle_tree.main([str(voters_csv), str(out)]) == 1
    assert "Could not write artifact" in capsys.readouterr().err
    assert list(out.iterdir()) == []
