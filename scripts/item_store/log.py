"""Diagnostic log for failures the store reports before re-raising them."""
from datetime import datetime

from .conf import LOG_FILE, TIMESTAMP_FORMAT

LOG = True  # Set to False to disable logging


def store_log(message: str) -> None:
    """Append a timestamped line to LOG_FILE."""
    if not LOG:
        return
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(f"[{timestamp}] {message}\n")


def store_log_print() -> None:
    """Dump the log to stdout (pytest shows it for failing tests)."""
    if LOG_FILE.exists():
        print(LOG_FILE.read_text(encoding="utf-8"), end="")


def store_log_clear() -> None:
    """Delete the log file."""
    LOG_FILE.unlink(missing_ok=True)
