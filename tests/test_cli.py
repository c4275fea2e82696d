import sys

import pytest

from test_bsc import bsc_line
from test_hd_xref import xref_line
from tycho2xref import cli


def _run(monkeypatch, argv):
    monkeypatch.setattr(sys, "argv", ["tycho2xref"] + argv)
    cli.main()


def test_crossref_command(tycho2_dir, tmp_path, monkeypatch, capsys):
    path = tycho2_dir(["1; 2"], [(1, 94, "1", 6.2)])
    bsc = tmp_path / "bsc.dat"
    bsc.write_text(bsc_line(1, 3, 6.70) + "\n", encoding="latin-1")
    hd = tmp_path / "tyc2_hd.dat"
    hd.write_text(xref_line("1 94 1", 3) + "\n", encoding="utf-8")
    out = tmp_path / "CrossRef.txt"
    stars = tmp_path / "Stars.dat"
    _run(
        monkeypatch,
        [
            "crossref",
            path,
            "--hd-xref",
            str(hd),
            "--bsc",
            str(bsc),
            "--crossref-out",
            str(out),
            "--catalog-out",
            str(stars),
        ],
    )
    assert out.read_text(encoding="utf-8") == "1 1-94-1\n"
    assert stars.read_text(encoding="latin-1")[102:107] == " 6.20"
    assert "cross-referenced stars" in capsys.readouterr().out


def test_missing_directory(tmp_path, monkeypatch):
    with pytest.raises(SystemExit, match="does not exist"):
        _run(monkeypatch, ["crossref", str(tmp_path / "nope")])


def test_missing_catalog_files(tmp_path, monkeypatch):
    with pytest.raises(SystemExit, match="should contain both"):
        _run(monkeypatch, ["lookup", str(tmp_path), "1", "2", "3"])


def test_lookup_not_found(tycho2_dir, monkeypatch):
    path = tycho2_dir(["1; 2"], [(1, 94, "1", 6.2)])
    with pytest.raises(SystemExit, match="not found"):
        _run(monkeypatch, ["lookup", path, "1", "95", "1"])
