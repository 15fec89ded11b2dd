from __future__ import annotations

import json
import os
import zipfile
from datetime import timedelta

import pytest

from conftest import write_evidence
from docaudit.archive import cli as archive_cli
from docaudit.archive.retention import archive_evidence, purge_archives
from docaudit.exceptions import DirectoryNotFound


def _age(path, now, days) -> None:
    ts = (now - timedelta(days=days)).timestamp()
    os.utime(path, (ts, ts))


def test_old_evidence_is_bundled_and_removed(evidence_dir, tmp_path, now) -> None:
    old_json = write_evidence(evidence_dir, "SignResult_old.json", {"kind": "SignResult"})
    old_md = write_evidence(evidence_dir, "SchemaValidationSummary_old.md", text="# old\n")
    fresh = write_evidence(evidence_dir, "SignResult_new.json", {"kind": "SignResult"})
    _age(old_json, now, 40)
    _age(old_md, now, 31)
    _age(fresh, now, 2)

    bundle = archive_evidence(str(evidence_dir), str(tmp_path / "archive"), 30, now=now)

    assert os.path.basename(bundle) == "EvidenceArchive_20250101T120000Z.zip"
    assert not old_json.exists() and not old_md.exists()
    assert fresh.exists()
    with zipfile.ZipFile(bundle) as zf:
        names = set(zf.namelist())
        manifest = json.loads(zf.read("MANIFEST.json"))
        assert json.loads(zf.read("SignResult_old.json")) == {"kind": "SignResult"}
    assert names == {"SignResult_old.json", "SchemaValidationSummary_old.md", "MANIFEST.json"}
    assert [f["name"] for f in manifest["files"]] == ["SchemaValidationSummary_old.md", "SignResult_old.json"]
    assert all(len(f["sha256"]) == 64 for f in manifest["files"])
    assert manifest["older_than_days"] == 30


def test_nothing_to_archive(evidence_dir, tmp_path, now) -> None:
    ev = write_evidence(evidence_dir, "SignResult_new.json", {})
    _age(ev, now, 1)

    assert archive_evidence(str(evidence_dir), str(tmp_path / "archive"), 30, now=now) is None
    assert not (tmp_path / "archive").exists()


def test_archive_requires_evidence_dir(tmp_path, now) -> None:
    with pytest.raises(DirectoryNotFound):
        archive_evidence(str(tmp_path / "missing"), str(tmp_path / "archive"), 30, now=now)


def test_purge_only_expired_bundles(tmp_path, now) -> None:
    archive = tmp_path / "archive"
    archive.mkdir()
    expired = archive / "EvidenceArchive_20230101T000000Z.zip"
    kept = archive / "EvidenceArchive_20241201T000000Z.zip"
    other = archive / "keep-me.zip"
    for p in (expired, kept, other):
        p.write_bytes(b"PK")
    _age(expired, now, 400)
    _age(kept, now, 31)
    _age(other, now, 900)

    removed = purge_archives(str(archive), 365, now=now)

    assert removed == [str(expired)]
    assert kept.exists() and other.exists()
    assert purge_archives(str(tmp_path / "none"), 365, now=now) == []


def test_archive_cli(evidence_dir, tmp_path, capsys) -> None:
    write_evidence(evidence_dir, "SignResult_new.json", {})

    code = archive_cli.main(["--evidence", str(evidence_dir), "--archive", str(tmp_path / "a"), "-q"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "ARCHIVE: none PURGED=0"
    assert archive_cli.main(["--evidence", str(tmp_path / "gone"), "-q"]) == 1
