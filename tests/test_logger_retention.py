import os
import sys
import time
from pathlib import Path

import pytest

from dated_logger import FilterPatternError, Logger, Platform
from dated_logger.retention import compile_filter, cutoff_for, enforce_retention

DAY = 86400


def _age(path: Path, days: float) -> None:
    t = time.time() - days * DAY
    os.utime(path, (t, t))


def _make(path: Path, days_old: float) -> Path:
    path.write_text("x")
    _age(path, days_old)
    return path


def _snapshot(directory: Path) -> dict:
    return {p.name: p.stat().st_mtime_ns for p in directory.iterdir()}


@pytest.fixture
def logger_factory(log_dir, fixed_clock):
    def make(retention_days):
        return Logger(log_dir, "self-%Y%m%d.log", "", retention_days, clock=fixed_clock)

    return make


def _self_log(log_dir: Path) -> str:
    return (log_dir / "self-20240101.log").read_text()


def test_clean_with_empty_directory_logs_nothing(logger_factory, log_dir):
    logger = logger_factory(1)

    logger.log_clean()

    assert sorted(p.name for p in log_dir.iterdir()) == ["self-20240101.log"]
    assert _self_log(log_dir) == "\n"


def test_old_file_deleted_without_filter(logger_factory, log_dir):
    logger = logger_factory(1)
    old = _make(log_dir / "app.log", days_old=2)

    logger.log_clean(None)

    assert not old.exists()


def test_old_file_not_matching_filter_is_kept(logger_factory, log_dir):
    logger = logger_factory(1)
    old = _make(log_dir / "app.log", days_old=2)

    logger.log_clean(r"other_\d+\.log")

    assert old.exists()


def test_only_matching_old_files_deleted(logger_factory, log_dir):
    logger = logger_factory(1)
    match_old = _make(log_dir / "other_1.log", days_old=5)
    match_new = _make(log_dir / "other_2.log", days_old=0.5)
    nomatch_old = _make(log_dir / "keep.txt", days_old=30)

    logger.log_clean(r"other_\d+\.log")

    assert not match_old.exists()
    assert match_new.exists()
    assert nomatch_old.exists()


def test_filter_is_unanchored_search(logger_factory, log_dir):
    logger = logger_factory(1)
    old = _make(log_dir / "prefix-app-20230101.log", days_old=3)

    logger.log_clean(r"app-\d{8}")

    assert not old.exists()


def test_empty_filter_means_no_filter(logger_factory, log_dir):
    logger = logger_factory(1)
    old = _make(log_dir / "anything.bin", days_old=3)

    logger.log_clean("")

    assert not old.exists()


def test_recent_file_is_kept(logger_factory, log_dir):
    logger = logger_factory(1)
    recent = _make(log_dir / "app.log", days_old=0.5)

    logger.log_clean()

    assert recent.exists()


def test_own_current_file_survives(logger_factory, log_dir):
    logger = logger_factory(1)

    logger.log_clean()

    assert logger.log_path().exists()


def test_directories_are_never_deleted(logger_factory, log_dir):
    logger = logger_factory(1)
    sub = log_dir / "archive.log"
    sub.mkdir()
    _make(sub / "inner.log", days_old=10)
    _age(sub, 10)

    logger.log_clean(r"\.log$")

    assert sub.is_dir()
    assert (sub / "inner.log").exists()


@pytest.mark.parametrize("pattern", [None, "", r"app", r"(unclosed"])
def test_no_retention_is_a_noop(logger_factory, log_dir, pattern):
    logger = logger_factory(None)
    _make(log_dir / "app.log", days_old=400)
    _make(log_dir / "other.log", days_old=2)
    before = _snapshot(log_dir)

    logger.log_clean(pattern)

    assert _snapshot(log_dir) == before


def test_invalid_filter_is_reported_and_nothing_deleted(logger_factory, log_dir):
    logger = logger_factory(1)
    old = _make(log_dir / "app.log", days_old=5)

    logger.log_clean("(unclosed")

    assert old.exists()
    assert "Log cleaner error: invalid filter pattern" in _self_log(log_dir)


def test_listing_failure_is_reported_even_without_retention(
    logger_factory, log_dir, monkeypatch
):
    logger = logger_factory(None)

    def boom(path):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("dated_logger.retention.os.listdir", boom)
    logger.log_clean()
    monkeypatch.undo()

    assert "Log cleaner error: could not read directory" in _self_log(log_dir)


def test_delete_failure_is_reported_and_scan_continues(
    logger_factory, log_dir, monkeypatch
):
    logger = logger_factory(1)
    stuck = _make(log_dir / "a-stuck.log", days_old=5)
    other = _make(log_dir / "b-other.log", days_old=5)

    real_unlink = Path.unlink

    def unlink(self, *args, **kwargs):
        if self.name == "a-stuck.log":
            raise PermissionError(13, "Permission denied")
        return real_unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", unlink)
    logger.log_clean()

    assert stuck.exists()
    assert not other.exists()
    assert "could not delete file a-stuck.log" in _self_log(log_dir)


@pytest.mark.skipif(
    not sys.platform.startswith("linux"), reason="needs byte file names"
)
def test_undecodable_name_is_reported_and_skipped(logger_factory, log_dir):
    logger = logger_factory(1)
    raw = os.path.join(os.fsencode(log_dir), b"bad\xff.log")
    with open(raw, "wb") as fh:
        fh.write(b"x")
    t = time.time() - 5 * DAY
    os.utime(raw, (t, t))

    logger.log_clean()

    assert os.path.exists(raw)
    assert "Log cleaner error: could not convert file name" in _self_log(log_dir)


def test_unsupported_platform_is_a_silent_noop(tmp_path):
    old = _make(tmp_path / "app.log", days_old=5)
    reports = []

    enforce_retention(
        tmp_path, 1, None, report=reports.append, platform=Platform.UNSUPPORTED
    )

    assert old.exists()
    assert reports == []


def test_enforce_retention_reports_through_callback(tmp_path):
    reports = []

    enforce_retention(
        tmp_path / "missing", 1, None, report=reports.append, platform=Platform.UNIX
    )

    assert len(reports) == 1
    assert reports[0].startswith("Log cleaner error: could not read directory")


def test_zero_retention_deletes_anything_older_than_now(tmp_path):
    old = _make(tmp_path / "app.log", days_old=0.01)

    enforce_retention(tmp_path, 0, None, report=lambda m: None, platform=Platform.UNIX)

    assert not old.exists()


def test_cutoff_for():
    assert cutoff_for(1, now=200000.9) == 200000 - DAY
    assert cutoff_for(0, now=5.0) == 5


def test_compile_filter():
    assert compile_filter(None) is None
    assert compile_filter("") is None
    assert compile_filter(r"x\d").search("ax1")

    with pytest.raises(FilterPatternError):
        compile_filter("[")


def test_metadata_failure_is_reported_and_scan_continues(
    logger_factory, log_dir, monkeypatch
):
    logger = logger_factory(1)
    stuck = _make(log_dir / "a-stuck.log", days_old=5)
    other = _make(log_dir / "b-other.log", days_old=5)

    real_stat = Path.stat

    def stat(self, *args, **kwargs):
        if self.name == "a-stuck.log":
            raise FileNotFoundError(2, "No such file or directory")
        return real_stat(self, *args, **kwargs)

    monkeypatch.setattr(Path, "stat", stat)
    logger.log_clean()
    monkeypatch.undo()

    assert stuck.exists()
    assert not other.exists()
    assert "could not read metadata from file a-stuck.log" in _self_log(log_dir)
