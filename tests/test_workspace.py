"""Tests for pbj/workspace.py, pbj/fileio.py and pbj/logs.py."""

import logging

import pytest
import yaml

from pbj.fileio import read_json, read_yaml, write_json_atomic
from pbj.logs import PrettyFormatter, configure_logging
from pbj.workspace import (
    get_user_timezone,
    init_workspace,
    load_profile,
    summary_path,
    workspace_root,
)


def test_workspace_root_from_env(workspace):
    assert workspace_root() == workspace.resolve()


def test_load_profile(workspace):
    p = load_profile(workspace)
    assert p.timezone == "UTC"
    assert p.calorie_target == 2200
    assert p.lookback_days == 60


def test_bad_timezone_falls_back_to_utc(tmp_path):
    (tmp_path / "profile.yaml").write_text("timezone: Mars/Olympus\n", encoding="utf-8")
    assert get_user_timezone(tmp_path).key == "UTC"


def test_init_workspace_creates_layout(tmp_path):
    root = tmp_path / "fresh"
    init_workspace(root)
    assert (root / "summaries").is_dir()
    data = yaml.safe_load((root / "profile.yaml").read_text())
    assert data == {"timezone": "UTC", "lookback_days": 60}


def test_init_workspace_keeps_existing_profile(workspace):
    init_workspace(workspace)
    assert load_profile(workspace).calorie_target == 2200


@pytest.mark.parametrize("user_id", ["alice", "bob.smith", "a_b-c@example.com"])
def test_summary_path_accepts_plain_ids(tmp_path, user_id):
    assert summary_path(user_id, tmp_path) == tmp_path / "summaries" / f"{user_id}.json"


@pytest.mark.parametrize("user_id", ["", ".", "..", "../x", "a/b", "name with space"])
def test_summary_path_rejects_unsafe_ids(tmp_path, user_id):
    with pytest.raises(ValueError):
        summary_path(user_id, tmp_path)


def test_read_missing_files(tmp_path):
    assert read_json(tmp_path / "nope.json") == {}
    assert read_yaml(tmp_path / "nope.yaml") == {}


def test_write_json_atomic(tmp_path):
    path = tmp_path / "nested" / "data.json"
    write_json_atomic(path, {"b": 1, "a": "é"})
    assert read_json(path) == {"b": 1, "a": "é"}
    assert not list(path.parent.glob(".tmp_*"))


def test_configure_logging_single_handler(monkeypatch):
    monkeypatch.setenv("PBJ_LOG_LEVEL", "debug")
    logger = configure_logging()
    configure_logging()
    assert logger.level == logging.DEBUG
    assert sum(1 for h in logger.handlers if getattr(h, "_pbj_handler", False)) == 1
    configure_logging("WARNING")
    assert logger.level == logging.WARNING
    configure_logging("INFO")


def test_pretty_formatter():
    record = logging.LogRecord("pbj.store", logging.INFO, __file__, 1, "saved %s", ("x",), None)
    record.created = 0
    assert PrettyFormatter().format(record) == "1970-01-01T00:00:00Z INFO [pbj.store] saved x"
