"""item_store - Central path configuration."""

from pathlib import Path

USER_HOME = Path.home()
ITEM_STORE_HOME = USER_HOME / ".item_store"

PACKAGE_DIR = Path(__file__).resolve().parent

LOG_FILE = ITEM_STORE_HOME / "item_store.log"

# Root element of the persisted XML document
XML_ROOT_TAG = "Items"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
