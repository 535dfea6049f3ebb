"""Error kinds raised by the store and its codecs."""

from __future__ import annotations


class ItemStoreError(Exception):
    """Base class for every item_store failure."""


class DisposedError(ItemStoreError, RuntimeError):
    """An operation was invoked on a store that has been disposed."""

    def __init__(self, operation: str = ""):
        self.operation = operation
        detail = f" (cannot {operation})" if operation else ""
        super().__init__(f"ItemStore has been disposed{detail}")


class NotFoundError(ItemStoreError, FileNotFoundError):
    """``load`` was given a path that does not exist."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Data file not found: {self.path}")

    def __str__(self) -> str:
        return f"Data file not found: {self.path}"


class MalformedDataError(ItemStoreError, ValueError):
    """The persisted document is structurally invalid.

    ``position`` describes where decoding failed, e.g. ``"line 3, column 7"``
    or ``"element 2 <Product>"``.
    """

    def __init__(self, message: str, position: str | None = None):
        self.position = position
        if position:
            message = f"{message} at {position}"
        super().__init__(message)


class UnsupportedVariantError(ItemStoreError, ValueError):
    """The persisted document holds a record tag outside the known variants."""

    def __init__(self, tag: str, position: str | None = None):
        self.tag = tag
        self.position = position
        message = f"Unsupported record variant {tag!r}"
        if position:
            message = f"{message} at {position}"
        super().__init__(message)
