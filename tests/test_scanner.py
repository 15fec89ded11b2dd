from __future__ import annotations

import os

import pytest

from conftest import write_evidence
from docaudit.evidence.scanner import declared_kind, newest_by_mtime, scan_evidence
from docaudit.exceptions import DirectoryNotFound


def test_prefix_matching_groups_files_by_kind(evidence_dir) -> None:
    write_evidence(evidence_dir, "SignResult_20250101.json", {"kind": "SignResult"})
    write_evidence(evidence_dir, "SignResult_20250102.json", {"kind": "SignResult"})
    write_evidence(evidence_dir, "BuildResult_20250101.json", {"kind": "BuildResult"})
    write_evidence(evidence_dir, "unrelated.json", {})
    write_evidence(evidence_dir, "SignResult_notes.txt", text="not json evidence")

    found = scan_evidence(str(evidence_dir), ["BuildResult", "SignResult", "VerifyResult"])

    assert [os.path.basename(p) for p in found["SignResult"]] == [
        "SignResult_20250101.json", "SignResult_20250102.json"]
    assert [os.path.basename(p) for p in found["BuildResult"]] == ["BuildResult_20250101.json"]
    assert found["VerifyResult"] == []


def test_explicit_schema_field_wins_over_filename(evidence_dir) -> None:
    write_evidence(evidence_dir, "SignResult_copy.json", {"schema": "VerifyResult.schema.json"})

    found = scan_evidence(str(evidence_dir), ["SignResult", "VerifyResult"])

    assert found["SignResult"] == []
    assert [os.path.basename(p) for p in found["VerifyResult"]] == ["SignResult_copy.json"]


def test_schema_field_accepts_plain_kind_and_paths(evidence_dir) -> None:
    p1 = write_evidence(evidence_dir, "a.json", {"schema": "BuildResult"})
    p2 = write_evidence(evidence_dir, "b.json", {"schema": "schemas/BuildResult.schema.json"})

    assert declared_kind(str(p1), ["BuildResult"]) == "BuildResult"
    assert declared_kind(str(p2), ["BuildResult"]) == "BuildResult"


def test_unknown_schema_field_falls_back_to_prefix(evidence_dir) -> None:
    write_evidence(evidence_dir, "SignResult_1.json", {"schema": "Nonexistent"})

    found = scan_evidence(str(evidence_dir), ["SignResult"])

    assert len(found["SignResult"]) == 1


def test_malformed_evidence_still_matched_by_prefix(evidence_dir) -> None:
    write_evidence(evidence_dir, "Foo_20250101.json", text="{not json")

    found = scan_evidence(str(evidence_dir), ["Foo"])

    assert len(found["Foo"]) == 1


def test_reports_are_not_evidence(evidence_dir) -> None:
    write_evidence(evidence_dir, "SchemaValidation_20250101T000000Z.json", {"evidence_type": "SchemaValidationResult"})

    found = scan_evidence(str(evidence_dir), ["SignResult"])

    assert found == {"SignResult": []}


def test_missing_directory_raises(tmp_path) -> None:
    with pytest.raises(DirectoryNotFound):
        scan_evidence(str(tmp_path / "missing"), ["Foo"])


def test_newest_by_mtime(evidence_dir) -> None:
    old = write_evidence(evidence_dir, "Foo_old.json", {})
    new = write_evidence(evidence_dir, "Foo_new.json", {})
    os.utime(old, (2_000_000_000, 2_000_000_000))
    os.utime(new, (1_000_000_000, 1_000_000_000))

    assert newest_by_mtime([str(new), str(old)]) == str(old)
    assert newest_by_mtime([str(evidence_dir / "gone.json")]) is None
    assert newest_by_mtime([]) is None


def test_oversized_or_deep_json_does_not_break_binding(evidence_dir) -> None:
    big = write_evidence(evidence_dir, "Foo_big.json", text='{"count": ' + "9" * 5000 + "}")
    deep = write_evidence(evidence_dir, "Foo_deep.json", text="[" * 100000 + "]" * 100000)

    assert declared_kind(str(big), ["Foo"]) is None
    assert declared_kind(str(deep), ["Foo"]) is None
    assert len(scan_evidence(str(evidence_dir), ["Foo"])["Foo"]) == 2
