"""In-memory store for Products and Services with audit logging and file persistence."""

from .audit_log import AuditEvent, AuditLog
from .codec import StorageFormat, decode_records, encode_records, read_records, write_records
from .errors import (
    DisposedError,
    ItemStoreError,
    MalformedDataError,
    NotFoundError,
    UnsupportedVariantError,
)
from .ordering import compare_products, product_sort_key, sort_products
from .record_types import RecordType
from .records import ItemRecord, Product, Record, Service
from .store import ItemStore
