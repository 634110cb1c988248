from __future__ import annotations

from pathlib import Path

import pytest

from script.fetch import main


def test_fetch_prints_mock_payload(mocks_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["https://api.example.com", "/users/1", "--mock-dir", str(mocks_dir), "--delay", "0"])
    assert code == 0
    out = capsys.readouterr().out
    assert "Ada Lovelace" in out


def test_fetch_raw_prints_body(mocks_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["https://api.example.com", "/health", "--mock-dir", str(mocks_dir), "--delay", "0", "--raw"])
    assert code == 0
    assert '"uptime": 12.5' in capsys.readouterr().out


def test_fetch_reports_taxonomy_errors(mocks_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["https://api.example.com", "/missing", "--mock-dir", str(mocks_dir), "--delay", "0"])
    assert code == 1
    out = capsys.readouterr().out
    assert "invalid_url" in out
    assert "Invalid URL" in out


def test_fetch_rejects_malformed_query(mocks_dir: Path) -> None:
    with pytest.raises(SystemExit):
        main(["https://api.example.com", "/users", "--mock-dir", str(mocks_dir), "--query", "novalue"])
