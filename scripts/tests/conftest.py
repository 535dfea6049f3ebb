"""Pytest fixtures shared by the item_store tests."""

import pytest

from item_store import log
from item_store.log import store_log_clear, store_log_print


@pytest.fixture(autouse=True)
def isolated_store_log(tmp_path, monkeypatch):
    """Point the diagnostic log at the test's temp directory; dump it afterwards."""
    log_file = tmp_path / "diag" / "item_store.log"
    monkeypatch.setattr(log, "LOG_FILE", log_file)
    store_log_clear()
    yield log_file
    store_log_print()
