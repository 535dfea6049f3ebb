"""Serialization of an ordered record collection to XML or JSONL documents.

Every record is written under its variant tag followed by its persisted
fields in ``persisted_fields()`` order. Derived attributes such as
``Service.total`` are never written.

XML layout::

    <Items>
      <Product><Id>..</Id><Name>..</Name><Price>25.99</Price></Product>
      <Service><Id>..</Id><Name>..</Name><HourlyRate>10</HourlyRate><Hours>12</Hours></Service>
    </Items>

JSONL layout: one ``{"kind": "<tag>", "id": .., "name": .., ...}`` object per line.
"""

from __future__ import annotations

import json
import re
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import Iterable

from pydantic import TypeAdapter, ValidationError

from .conf import XML_ROOT_TAG
from .errors import MalformedDataError, UnsupportedVariantError
from .records import ItemRecord, Record, variant_for

_RECORD_ADAPTER: TypeAdapter[ItemRecord] = TypeAdapter(Record)

_XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'

# Anything outside the XML 1.0 Char production
_XML_ILLEGAL = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


class StorageFormat(str, Enum):
    """How a record collection is laid out on disk."""

    XML = "xml"      # one <Items> document, one element per record
    JSONL = "jsonl"  # one JSON object per line

    @classmethod
    def for_path(cls, path: str | Path) -> StorageFormat:
        """``.jsonl`` files use JSONL; everything else is XML."""
        if Path(path).suffix.lower() == ".jsonl":
            return cls.JSONL
        return cls.XML


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def field_tag(field_name: str) -> str:
    """``hourly_rate`` -> ``HourlyRate``."""
    return "".join(part.capitalize() for part in field_name.split("_"))


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"][1:]) or "record"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def _build_record(tag: str, data: dict, position: str) -> ItemRecord:
    """Validate ``data`` into the variant named by ``tag``."""
    record_class = variant_for(tag)
    if record_class is None:
        raise UnsupportedVariantError(tag, position)

    expected = record_class.persisted_fields()
    missing = [name for name in expected if name not in data]
    if missing:
        raise MalformedDataError(
            f"{tag} is missing field(s) {', '.join(missing)}", position
        )
    unknown = [name for name in data if name not in expected]
    if unknown:
        raise MalformedDataError(
            f"{tag} has unknown field(s) {', '.join(unknown)}", position
        )

    try:
        return _RECORD_ADAPTER.validate_python({"kind": tag, **data})
    except ValidationError as exc:
        raise MalformedDataError(f"Invalid {tag}: {_summarize(exc)}", position) from exc


# ---------------------------------------------------------------------------
# XML
# ---------------------------------------------------------------------------

def _xml_text(record: ItemRecord, name: str, position: str) -> str:
    text = str(getattr(record, name))
    bad = _XML_ILLEGAL.search(text)
    if bad:
        raise MalformedDataError(
            f"Field {name} holds U+{ord(bad.group()):04X}, which XML cannot store",
            position,
        )
    return text


def encode_xml(records: Iterable[ItemRecord]) -> str:
    """Build the ``<Items>`` document.

    Raises ``MalformedDataError`` for text XML 1.0 cannot hold, before any
    output exists.
    """
    root = ET.Element(XML_ROOT_TAG)
    for index, record in enumerate(records, start=1):
        position = f"record {index} <{record.kind}>"
        element = ET.SubElement(root, record.kind)
        for name in record.persisted_fields():
            child = ET.SubElement(element, field_tag(name))
            child.text = _xml_text(record, name, position)
    ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    # Parsers normalize a literal CR to LF; only field text can contain one.
    body = body.replace("\r", "&#13;")
    return _XML_DECLARATION + body + "\n"


def decode_xml(text: str | bytes) -> list[ItemRecord]:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        line, column = exc.position
        raise MalformedDataError(
            f"Invalid XML document: {exc}", f"line {line}, column {column}"
        ) from exc

    if root.tag != XML_ROOT_TAG:
        raise MalformedDataError(
            f"Expected <{XML_ROOT_TAG}> root element, got <{root.tag}>",
            "document root",
        )

    records: list[ItemRecord] = []
    for index, element in enumerate(root, start=1):
        position = f"element {index} <{element.tag}>"
        record_class = variant_for(element.tag)
        if record_class is None:
            raise UnsupportedVariantError(element.tag, position)

        names_by_tag = {field_tag(name): name for name in record_class.persisted_fields()}
        data: dict[str, str] = {}
        for child in element:
            name = names_by_tag.get(child.tag)
            if name is None:
                raise MalformedDataError(
                    f"{element.tag} has unknown field <{child.tag}>", position
                )
            if name in data:
                raise MalformedDataError(
                    f"{element.tag} repeats field <{child.tag}>", position
                )
            if len(child):
                raise MalformedDataError(
                    f"Field <{child.tag}> must hold text, not elements", position
                )
            data[name] = child.text or ""
        records.append(_build_record(element.tag, data, position))
    return records


# ---------------------------------------------------------------------------
# JSONL
# ---------------------------------------------------------------------------

def encode_jsonl(records: Iterable[ItemRecord]) -> str:
    lines = []
    for record in records:
        data = {"kind": record.kind}
        data.update(record.model_dump(mode="json", include=set(record.persisted_fields())))
        lines.append(json.dumps(data))
    return "".join(line + "\n" for line in lines)


def decode_jsonl(text: str | bytes) -> list[ItemRecord]:
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDataError(f"Invalid UTF-8: {exc.reason}", f"byte {exc.start}") from exc
    records: list[ItemRecord] = []
    # LF only: str.splitlines also breaks on U+0085 and U+2028
    for lineno, line in enumerate(text.split("\n"), start=1):
        line = line.strip()
        if not line:
            continue
        position = f"line {lineno}"
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise MalformedDataError(f"Invalid JSON: {exc.msg}", position) from exc
        if not isinstance(data, dict):
            raise MalformedDataError("Expected a JSON object", position)
        tag = data.pop("kind", None)
        if not isinstance(tag, str) or not tag:
            raise MalformedDataError("Record has no 'kind' tag", position)
        records.append(_build_record(tag, data, f"{position} <{tag}>"))
    return records


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

_ENCODERS = {
    StorageFormat.XML: encode_xml,
    StorageFormat.JSONL: encode_jsonl,
}

_DECODERS = {
    StorageFormat.XML: decode_xml,
    StorageFormat.JSONL: decode_jsonl,
}


def encode_records(
    records: Iterable[ItemRecord], storage_format: StorageFormat = StorageFormat.XML
) -> str:
    """Serialize an ordered collection to a document string."""
    return _ENCODERS[storage_format](records)


def decode_records(
    text: str | bytes, storage_format: StorageFormat = StorageFormat.XML
) -> list[ItemRecord]:
    """Parse a document given as text or raw file bytes.

    All-or-nothing: raises before returning any record.
    """
    return _DECODERS[storage_format](text)


def write_records(path: str | Path, records: Iterable[ItemRecord]) -> None:
    """Overwrite ``path`` with the encoded collection (format chosen by suffix)."""
    p = Path(path)
    document = encode_records(records, StorageFormat.for_path(p))
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(document, encoding="utf-8")


def read_records(path: str | Path) -> list[ItemRecord]:
    """Read and decode ``path`` (format chosen by suffix)."""
    p = Path(path)
    return decode_records(p.read_bytes(), StorageFormat.for_path(p))
