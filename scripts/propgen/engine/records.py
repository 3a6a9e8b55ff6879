#!/usr/bin/env python3
"""
Property Record Store

Loads raw records and answers "all records derived from class X" queries.
Two input formats are supported:

- TableGen JSON dump (``llvm-tblgen --dump-json Properties.td``). Records
  deriving from a class are listed under ``!instanceof``; fields set to an
  uninitialized value are dumped as ``null`` and treated as absent.
- YAML definitions file, validated with pydantic:

      definitions:
        Target:
          - name: EnableSyntheticTypes
            type: Boolean
            default_unsigned_value: 1
            description: "Enable synthetic."
      properties:
        - definition: Process
          name: ...

  ``definitions`` maps a Definition key to its properties; ``properties`` is
  a flat list where every entry names its own ``definition``. Each entry may
  carry a ``record`` identifier; it defaults to ``name``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import Fields, PropertyRecord, PropgenError

logger = logging.getLogger(__name__)

YAML_RECORD_CLASS = "Property"


class RecordStoreError(PropgenError):
    """Raised when an input document cannot be read as a record store."""


# ---------------------------------------------------------------------------
# YAML document schema
# ---------------------------------------------------------------------------


class PropertyEntry(BaseModel):
    """One property as written in a YAML definitions file."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    record: str | None = None
    definition: str | None = None
    name: str
    type: str
    is_global: bool = Field(default=False, alias="global")
    default_unsigned_value: int | None = None
    default_enum_value: str | None = None
    default_string_value: str | None = None
    enum_values: str | None = None
    description: str | None = None

    def to_fields(self, definition: str) -> dict[str, Any]:
        """Convert to the raw field mapping PropertyRecord reads."""
        raw: dict[str, Any] = {
            Fields.DEFINITION: definition,
            Fields.NAME: self.name,
            Fields.TYPE: self.type,
        }
        if self.is_global:
            raw[Fields.GLOBAL] = 1
        optional = {
            Fields.DEFAULT_UNSIGNED_VALUE: self.default_unsigned_value,
            Fields.DEFAULT_ENUM_VALUE: self.default_enum_value,
            Fields.DEFAULT_STRING_VALUE: self.default_string_value,
            Fields.ENUM_VALUES: self.enum_values,
            Fields.DESCRIPTION: self.description,
        }
        for key, value in optional.items():
            if value is not None:
                raw[key] = value
        return raw


class PropertyDocument(BaseModel):
    """Top level of a YAML definitions file."""

    model_config = ConfigDict(extra="forbid")

    definitions: dict[str, list[PropertyEntry]] = Field(default_factory=dict)
    properties: list[PropertyEntry] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# RecordStore
# ---------------------------------------------------------------------------


class RecordStore:
    """In-memory, read-only snapshot of named records."""

    def __init__(
        self,
        records: Mapping[str, Mapping[str, Any]],
        instanceof: Mapping[str, list[str]],
        source: str | None = None,
    ):
        self._records = {name: dict(fields) for name, fields in records.items()}
        self._instanceof = {kind: list(names) for kind, names in instanceof.items()}
        self.source = source

        for kind, names in self._instanceof.items():
            for name in names:
                if name not in self._records:
                    raise RecordStoreError(
                        f"{source or '<input>'}: class {kind!r} lists unknown record {name!r}"
                    )

    def __len__(self) -> int:
        return len(self._records)

    def all_derived_definitions(self, kind: str) -> list[PropertyRecord]:
        """Return every record deriving from ``kind``, in store order."""
        names = self._instanceof.get(kind, [])
        logger.debug("Found %d records deriving from %s", len(names), kind)
        return [PropertyRecord(name, self._records[name]) for name in names]

    # -- TableGen JSON ------------------------------------------------------

    @classmethod
    def from_json(cls, text: str, *, source: str = "<string>") -> "RecordStore":
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RecordStoreError(f"{source}: invalid JSON: {exc}") from exc

        if not isinstance(doc, dict) or "!instanceof" not in doc:
            raise RecordStoreError(f"{source}: not a TableGen JSON dump (no '!instanceof')")

        instanceof = doc["!instanceof"]
        if not isinstance(instanceof, dict):
            raise RecordStoreError(f"{source}: '!instanceof' must be an object")

        records: dict[str, dict[str, Any]] = {}
        for name, value in doc.items():
            if name.startswith("!"):
                continue
            if not isinstance(value, dict):
                raise RecordStoreError(f"{source}: record {name!r} is not an object")
            # Drop TableGen bookkeeping keys (!name, !superclasses, ...)
            records[name] = {k: v for k, v in value.items() if not k.startswith("!")}

        return cls(records, instanceof, source=source)

    # -- YAML ---------------------------------------------------------------

    @classmethod
    def from_yaml(cls, text: str, *, source: str = "<string>") -> "RecordStore":
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise RecordStoreError(f"{source}: invalid YAML: {exc}") from exc

        try:
            doc = PropertyDocument.model_validate(raw)
        except ValidationError as exc:
            raise RecordStoreError(f"{source}: invalid property definitions:\n{exc}") from exc

        records: dict[str, dict[str, Any]] = {}

        def add(entry: PropertyEntry, definition: str) -> None:
            record_name = entry.record or entry.name
            if record_name in records:
                raise RecordStoreError(f"{source}: duplicate property record {record_name!r}")
            records[record_name] = entry.to_fields(definition)

        for definition, entries in doc.definitions.items():
            for entry in entries:
                if entry.definition is not None and entry.definition != definition:
                    raise RecordStoreError(
                        f"{source}: property {entry.name!r} is listed under {definition!r} "
                        f"but declares definition {entry.definition!r}"
                    )
                add(entry, definition)

        for entry in doc.properties:
            if entry.definition is None:
                raise RecordStoreError(f"{source}: property {entry.name!r} has no definition")
            add(entry, entry.definition)

        return cls(records, {YAML_RECORD_CLASS: list(records)}, source=source)


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------

FORMAT_AUTO = "auto"
FORMAT_JSON = "json"
FORMAT_YAML = "yaml"
FORMATS = (FORMAT_AUTO, FORMAT_JSON, FORMAT_YAML)


def detect_format(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix == ".json":
        return FORMAT_JSON
    if suffix in (".yaml", ".yml"):
        return FORMAT_YAML
    raise RecordStoreError(f"{path}: cannot infer input format from suffix {suffix!r}")


def load_records(path: str | Path, fmt: str = FORMAT_AUTO) -> RecordStore:
    """Load a RecordStore from a TableGen JSON dump or a YAML definitions file."""
    path = Path(path)
    if fmt not in FORMATS:
        raise RecordStoreError(f"unknown input format {fmt!r}")
    if fmt == FORMAT_AUTO:
        fmt = detect_format(path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RecordStoreError(f"{path}: cannot read input: {exc}") from exc

    if fmt == FORMAT_JSON:
        store = RecordStore.from_json(text, source=str(path))
    else:
        store = RecordStore.from_yaml(text, source=str(path))
    logger.debug("Loaded %d records from %s", len(store), path)
    return store
