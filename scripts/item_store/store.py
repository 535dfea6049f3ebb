"""An ordered, in-memory collection of records with an audit sink and file persistence."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, TypeVar

from .audit_log import AuditEvent, AuditLog
from .codec import read_records, write_records
from .errors import DisposedError, ItemStoreError, NotFoundError
from .log import store_log
from .record_types import RecordType
from .records import VARIANTS, ItemRecord, variant_for

T = TypeVar("T", bound=ItemRecord)

_VARIANT_CLASSES = tuple(VARIANTS.values())


class ItemStore:
    """Ordered collection of Products and Services.

    Insertion order is kept for iteration and for the saved file.

    When ``log_path`` is given, an ``AuditLog`` is opened for append and every
    mutation, save and load is recorded there. The sink is released by
    ``dispose()``; use the store as a context manager so that happens on
    every exit path::

        with ItemStore(log_path="store.log") as store:
            store.add(Product(name="Laptop", price=1500))
            store.save("items.xml")

    Iteration works on a snapshot taken when it starts, so the store may be
    mutated inside a ``for`` loop without affecting that loop.
    """

    def __init__(self, log_path: str | Path | None = None):
        self._records: list[ItemRecord] = []
        self._disposed = False
        self._log: AuditLog | None = None
        if log_path is not None and str(log_path).strip():
            self._log = AuditLog(log_path)
            try:
                self._audit(AuditEvent.CREATED, "store created")
            except Exception:
                self._log.close()
                raise

    # -- Lifecycle --

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Close the audit sink. Later calls are no-ops."""
        if self._disposed:
            return
        self._disposed = True
        if self._log is not None:
            try:
                self._audit(AuditEvent.DISPOSED, "store disposed")
            finally:
                self._log.close()

    def __enter__(self) -> ItemStore:
        self._ensure_alive("enter")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # -- CRUD --

    def add(self, record: ItemRecord) -> None:
        """Append a record to the end of the collection."""
        self._ensure_alive("add")
        if not isinstance(record, _VARIANT_CLASSES):
            raise TypeError(f"Expected a Product or Service, got {type(record).__name__}")
        self._records.append(record)
        self._audit(AuditEvent.ADDED, str(record))

    def remove(self, record_id: str) -> bool:
        """Remove the first record whose id matches. Returns True if one was removed.

        Ids are expected to be unique but this is not enforced on ``add``;
        with duplicates only the earliest inserted one goes.
        """
        self._ensure_alive("remove")
        for index, record in enumerate(self._records):
            if record.id == record_id:
                self._audit(AuditEvent.REMOVED, str(record))
                del self._records[index]
                return True
        return False

    def get(self, record_id: str) -> ItemRecord | None:
        """Look up the first record with ``record_id``."""
        self._ensure_alive("get")
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    # -- Collection access --

    @property
    def count(self) -> int:
        self._ensure_alive("count")
        return len(self._records)

    def __len__(self) -> int:
        return self.count

    @property
    def records(self) -> list[ItemRecord]:
        self._ensure_alive("read records")
        return list(self._records)

    def __iter__(self) -> Iterator[ItemRecord]:
        self._ensure_alive("iterate")
        return iter(list(self._records))

    def records_of_type(self, record_class: type[T] | RecordType | str) -> Iterator[T]:
        """Yield, in collection order, only records of the given variant.

        ``record_class`` may be a class (``Product``) or a tag (``"Product"``).
        Each call scans the collection as it is at call time.
        """
        self._ensure_alive("filter records")
        if not isinstance(record_class, type):
            resolved = variant_for(record_class)
            if resolved is None:
                raise ValueError(f"Unknown record type: {record_class!r}")
            record_class = resolved
        snapshot = list(self._records)
        return (r for r in snapshot if isinstance(r, record_class))

    # -- Persistence --

    def save(self, path: str | Path) -> None:
        """Write the whole collection to ``path``, replacing its contents."""
        self._ensure_alive("save")
        try:
            write_records(path, self._records)
        except (OSError, ItemStoreError) as e:
            store_log(f"Failed to save {path}: {e}")
            raise
        self._audit(AuditEvent.SAVED, f"{path} ({len(self._records)} records)")

    def load(self, path: str | Path) -> None:
        """Replace the collection with the records stored at ``path``.

        Nothing changes in memory unless the whole file decodes.
        """
        self._ensure_alive("load")
        p = Path(path)
        if not p.is_file():
            raise NotFoundError(p)
        try:
            loaded = read_records(p)
        except (OSError, ItemStoreError) as e:
            store_log(f"Failed to load {p}: {e}")
            raise
        self._records = loaded
        self._audit(AuditEvent.LOADED, f"{p} ({len(loaded)} records)")

    # -- Internals --

    def _audit(self, event: AuditEvent, detail: str) -> None:
        if self._log is not None:
            self._log.write(event, detail)

    def _ensure_alive(self, operation: str) -> None:
        if self._disposed:
            raise DisposedError(operation)
