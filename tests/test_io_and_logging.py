import json
import logging
from pathlib import Path

import pytest  # type: ignore[import-not-found]

from transnet.utils.io import read_jsonl, write_json
from transnet.utils.logging import configure_root_logger, get_logger, resolve_level


def test_read_jsonl_skips_blank_lines(tmp_path: Path):
    path = tmp_path / "records.jsonl"
    path.write_text('{"author": "A"}\n\n   \n{"author": "B"}\n', encoding="utf-8")
    assert [record["author"] for record in read_jsonl(path)] == ["A", "B"]


def test_read_jsonl_reports_malformed_line(tmp_path: Path):
    path = tmp_path / "records.jsonl"
    path.write_text('{"author": "A"}\n{"author": \n', encoding="utf-8")
    with pytest.raises(ValueError, match=r"records\.jsonl:2: invalid JSON record"):
        list(read_jsonl(path))


def test_read_jsonl_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        list(read_jsonl(tmp_path / "missing.jsonl"))


def test_write_json_creates_parent_folders(tmp_path: Path):
    target = tmp_path / "artifacts" / "metrics.json"
    written = write_json(target, {"translator": "José Saramago"})
    assert written == target
    assert json.loads(target.read_text(encoding="utf-8")) == {"translator": "José Saramago"}
    assert "José" in target.read_text(encoding="utf-8")


def test_get_logger_defaults_to_project_name(monkeypatch):
    monkeypatch.delenv("TRANSNET_LOGGER_NAME", raising=False)
    logger = get_logger()
    assert logger.name == "transnet"
    assert get_logger() is logger


def test_resolve_level_accepts_names_and_numbers():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(logging.WARNING) == logging.WARNING
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_configure_root_logger_adjusts_level_of_installed_handler():
    root = logging.getLogger()
    previous = root.level
    get_logger("transnet.tests")
    try:
        configure_root_logger("warning")
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
