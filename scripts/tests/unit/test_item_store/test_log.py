"""Tests for the diagnostic log helpers."""

from item_store import log
from item_store.log import store_log, store_log_clear, store_log_print


class TestStoreLog:
    def test_appends_timestamped_lines(self, isolated_store_log):
        store_log("first")
        store_log("second")
        lines = isolated_store_log.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("[")
        assert lines[0].endswith("] first")
        assert lines[1].endswith("] second")

    def test_disabled(self, isolated_store_log, monkeypatch):
        monkeypatch.setattr(log, "LOG", False)
        store_log("ignored")
        assert not isolated_store_log.exists()

    def test_clear(self, isolated_store_log):
        store_log("x")
        store_log_clear()
        assert not isolated_store_log.exists()
        store_log_clear()

    def test_print(self, isolated_store_log, capsys):
        store_log("visible")
        store_log_print()
        assert "] visible" in capsys.readouterr().out
