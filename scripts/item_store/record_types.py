"""Record type constants used across the item_store layer."""

from enum import StrEnum


class RecordType(StrEnum):
    PRODUCT = "Product"
    SERVICE = "Service"
