#!/usr/bin/env python3
"""
Property Generator Data Models

Typed read-only view over a raw property record, plus the exception hierarchy
shared by the engine.

A raw record is whatever the record store hands back: a mapping of field name
to value, where a missing key or a ``None`` value means the field is unset.
PropertyRecord keeps presence and value separate so that, for example, an
explicitly empty default string is never confused with an absent one.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PropgenError(Exception):
    """Base class for every error the generator reports."""


class RecordFieldError(PropgenError):
    """Raised when a required field is missing or has the wrong kind."""

    def __init__(self, record_name: str, field_name: str, message: str):
        self.record_name = record_name
        self.field_name = field_name
        super().__init__(f"{record_name}: field {field_name!r} {message}")


class PropertyDefinitionError(PropgenError):
    """Raised when a property violates one of the default-value invariants."""

    MISSING_DEFAULT = "missing-default"
    CONFLICTING_DEFAULTS = "conflicting-defaults"

    def __init__(self, record_name: str, invariant: str, message: str):
        self.record_name = record_name
        self.invariant = invariant
        super().__init__(f"{record_name}: {message}")


# ---------------------------------------------------------------------------
# Field names
# ---------------------------------------------------------------------------


class Fields:
    DEFINITION = "Definition"
    NAME = "Name"
    TYPE = "Type"
    GLOBAL = "Global"
    DEFAULT_UNSIGNED_VALUE = "DefaultUnsignedValue"
    DEFAULT_ENUM_VALUE = "DefaultEnumValue"
    DEFAULT_STRING_VALUE = "DefaultStringValue"
    ENUM_VALUES = "EnumValues"
    DESCRIPTION = "Description"

    # Marker bits set by the TableGen mixin classes alongside the value
    HAS_DEFAULT_UNSIGNED_VALUE = "HasDefaultUnsignedValue"
    HAS_DEFAULT_ENUM_VALUE = "HasDefaultEnumValue"
    HAS_DEFAULT_STRING_VALUE = "HasDefaultStringValue"
    HAS_DEFAULT_BOOLEAN_VALUE = "HasDefaultBooleanValue"


# ---------------------------------------------------------------------------
# PropertyRecord
# ---------------------------------------------------------------------------


class PropertyRecord:
    """Read-only view of one property definition record."""

    def __init__(self, record_name: str, fields: Mapping[str, Any]):
        self._record_name = record_name
        self._fields = dict(fields)

    def __repr__(self) -> str:
        return f"PropertyRecord({self._record_name!r})"

    @property
    def record_name(self) -> str:
        """Identifier of the record in its store (the TableGen def name)."""
        return self._record_name

    # -- generic accessors --------------------------------------------------

    def has(self, name: str) -> bool:
        """Return True if the field is present and set."""
        return self._fields.get(name) is not None

    def get_string(self, name: str) -> str:
        value = self._fields.get(name)
        if value is None:
            raise RecordFieldError(self._record_name, name, "is not set")
        # TableGen dumps code fragments as {"kind": "code", "printable": ...}
        if isinstance(value, dict) and "printable" in value:
            value = value["printable"]
        if not isinstance(value, str):
            raise RecordFieldError(
                self._record_name, name, f"is not a string (got {type(value).__name__})"
            )
        return value

    def get_int(self, name: str) -> int:
        value = self._fields.get(name)
        if value is None:
            raise RecordFieldError(self._record_name, name, "is not set")
        if isinstance(value, bool) or not isinstance(value, int):
            raise RecordFieldError(
                self._record_name, name, f"is not an integer (got {type(value).__name__})"
            )
        return value

    def get_optional_string(self, name: str) -> str | None:
        if not self.has(name):
            return None
        return self.get_string(name)

    def get_unquoted_text(self, name: str) -> str:
        """Return the raw text of a string field, without any quoting."""
        return self.get_string(name)

    # -- named accessors ----------------------------------------------------

    @property
    def definition(self) -> str:
        return self.get_string(Fields.DEFINITION)

    @property
    def name(self) -> str:
        return self.get_string(Fields.NAME)

    @property
    def type(self) -> str:
        return self.get_string(Fields.TYPE)

    @property
    def is_global(self) -> bool:
        # Only the presence of the field matters, not its bit value
        return self.has(Fields.GLOBAL)

    @property
    def has_default_unsigned_value(self) -> bool:
        # Booleans are stored in the unsigned slot
        return (
            self.has(Fields.HAS_DEFAULT_UNSIGNED_VALUE)
            or self.has(Fields.HAS_DEFAULT_BOOLEAN_VALUE)
            or self.has(Fields.DEFAULT_UNSIGNED_VALUE)
        )

    @property
    def has_default_enum_value(self) -> bool:
        return self.has(Fields.HAS_DEFAULT_ENUM_VALUE) or self.has(Fields.DEFAULT_ENUM_VALUE)

    @property
    def has_default_string_value(self) -> bool:
        return self.has(Fields.HAS_DEFAULT_STRING_VALUE) or self.has(Fields.DEFAULT_STRING_VALUE)

    @property
    def default_unsigned_value(self) -> int | None:
        if not self.has_default_unsigned_value:
            return None
        return self.get_int(Fields.DEFAULT_UNSIGNED_VALUE)

    @property
    def default_enum_value(self) -> str | None:
        if not self.has_default_enum_value:
            return None
        return self.get_unquoted_text(Fields.DEFAULT_ENUM_VALUE)

    @property
    def default_string_value(self) -> str | None:
        """Default string text; "" when the marker is set without a value."""
        if not self.has_default_string_value:
            return None
        if not self.has(Fields.DEFAULT_STRING_VALUE):
            return ""
        return self.get_unquoted_text(Fields.DEFAULT_STRING_VALUE)

    @property
    def enum_values(self) -> str | None:
        return self.get_optional_string(Fields.ENUM_VALUES)

    @property
    def description(self) -> str | None:
        return self.get_optional_string(Fields.DESCRIPTION)


# ---------------------------------------------------------------------------
# DefinitionGroup
# ---------------------------------------------------------------------------


@dataclass
class DefinitionGroup:
    """All properties that share one Definition key, in store order."""
    key: str
    records: list[PropertyRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)
