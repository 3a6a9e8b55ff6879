#!/usr/bin/env python3
"""
Property Definition Emitters

Renders grouped property records as C++ include fragments:

- PropertyDefsCodegen: one ``static constexpr PropertyDefinition`` array per
  definition group.
- PropertyEnumCodegen: one ``ePropertyX,`` enumerator case per property.

Each group is wrapped in ``#ifdef LLDB_PROPERTIES_<Group>`` so a consumer can
include the generated file several times, selecting one group each time. The
macro is undefined again at the end of the block.

Output is built as a single string and only handed to the caller once every
record rendered, so an invalid record never leaves a half-written file.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, TextIO

from .config import DEFAULT_CONFIG, GeneratorConfig
from .grouping import iter_definition_groups
from .models import PropertyDefinitionError, PropertyRecord
from .records import RecordStore

logger = logging.getLogger(__name__)


# ==============================================================================
# Source file header
# ==============================================================================

MAX_LINE_LEN = 80


def _print_line(prefix: str, fill: str, suffix: str) -> str:
    return prefix + fill * (MAX_LINE_LEN - len(prefix) - len(suffix)) + suffix


def _wrapped_lines(text: str, prefix: str, suffix: str) -> list[str]:
    width = MAX_LINE_LEN - len(prefix) - len(suffix)
    chunks = [text[pos : pos + width] for pos in range(0, len(text), width)] or [""]
    return [_print_line(prefix + chunk, " ", suffix) for chunk in chunks]


def emit_source_file_header(description: str, source: str | None = None) -> str:
    """Return the standard TableGen banner that opens every generated file."""
    prefix, suffix = "|* ", " *|"
    lines = [_print_line("/*===- TableGen'erated file ", "-", "*- C++ -*-===*\\")]
    lines.append(_print_line(prefix, " ", suffix))
    lines.extend(_wrapped_lines(description, prefix, suffix))
    lines.append(_print_line(prefix, " ", suffix))
    lines.append(_print_line(prefix + "Automatically generated file, do not edit!", " ", suffix))
    if source:
        lines.extend(_wrapped_lines(f"From: {source}", prefix, suffix))
    lines.append(_print_line(prefix, " ", suffix))
    lines.append(_print_line("\\*===", "-", "===*/"))
    return "\n".join(lines) + "\n\n"


# ==============================================================================
# Codegen base
# ==============================================================================


class _PropertyCodegen(ABC):
    """Shared group wrapping for both emitters."""

    BLOCK_LABEL = ""

    def __init__(self, config: GeneratorConfig = DEFAULT_CONFIG):
        self.config = config

    @property
    @abstractmethod
    def description(self) -> str:
        """Text shown in the generated file header."""

    def generate(self, records: Iterable[PropertyRecord], source: str | None = None) -> str:
        """Generate the full file: header followed by every definition group."""
        parts = [emit_source_file_header(self.description, source)]
        for group in iter_definition_groups(records):
            parts.append(self.generate_group(group.key, group.records))
        return "".join(parts)

    def generate_group(self, key: str, records: list[PropertyRecord]) -> str:
        """Generate the macro-guarded block for one definition group."""
        macro = self.config.needed_macro(key)
        lines = [f"// Property {self.BLOCK_LABEL} for {key}", f"#ifdef {macro}"]
        lines.extend(self._generate_body(key, records))
        lines.append(f"#undef {macro}")
        lines.append(f"#endif // {key} Property")
        return "\n".join(lines) + "\n\n"

    @abstractmethod
    def _generate_body(self, key: str, records: list[PropertyRecord]) -> list[str]:
        """Lines between the opening #ifdef and the closing #undef."""


# ==============================================================================
# PropertyEnumCodegen
# ==============================================================================


class PropertyEnumCodegen(_PropertyCodegen):
    """Generate the enumerator cases identifying each property."""

    BLOCK_LABEL = "enum cases"

    @property
    def description(self) -> str:
        return self.config.enum_description

    def generate_entry(self, record: PropertyRecord) -> str:
        return f"{self.config.enum_prefix}{record.record_name},"

    def _generate_body(self, key: str, records: list[PropertyRecord]) -> list[str]:
        return [self.generate_entry(record) for record in records]


# ==============================================================================
# PropertyDefsCodegen
# ==============================================================================


def check_default_invariants(record: PropertyRecord) -> None:
    """Raise PropertyDefinitionError unless the record has exactly one numeric slot default."""
    has_unsigned = record.has_default_unsigned_value
    has_enum = record.has_default_enum_value
    has_string = record.has_default_string_value

    if not (has_unsigned or has_enum or has_string):
        raise PropertyDefinitionError(
            record.record_name,
            PropertyDefinitionError.MISSING_DEFAULT,
            "Property must have a default value",
        )

    # Unsigned and enum defaults share the same field in PropertyDefinition
    if has_unsigned and has_enum:
        raise PropertyDefinitionError(
            record.record_name,
            PropertyDefinitionError.CONFLICTING_DEFAULTS,
            "Property cannot have both a unsigned and enum default value.",
        )


class PropertyDefsCodegen(_PropertyCodegen):
    """Generate the PropertyDefinition tables."""

    BLOCK_LABEL = "definitions"

    @property
    def description(self) -> str:
        return self.config.defs_description

    def generate_entry(self, record: PropertyRecord) -> str:
        """Render one ``{...},`` PropertyDefinition initializer."""
        check_default_invariants(record)

        slots = [
            f'"{record.name}"',
            f"{self.config.type_prefix}{record.type}",
            "true" if record.is_global else "false",
            self._default_value_slot(record),
            self._default_string_slot(record),
            self._enum_values_slot(record),
            f'"{record.description or ""}"',
        ]
        return "  {" + ", ".join(slots) + "},"

    def _default_value_slot(self, record: PropertyRecord) -> str:
        if record.has_default_unsigned_value:
            return str(record.default_unsigned_value)
        if record.has_default_enum_value:
            return record.default_enum_value
        return "0"

    def _default_string_slot(self, record: PropertyRecord) -> str:
        value = record.default_string_value
        if value is None:
            return "nullptr"
        return f'"{value}"'

    def _enum_values_slot(self, record: PropertyRecord) -> str:
        value = record.enum_values
        if value is None:
            return "{}"
        return value

    def _generate_body(self, key: str, records: list[PropertyRecord]) -> list[str]:
        lines = [f"static constexpr PropertyDefinition g_{key}_properties[] = {{"]
        lines.extend(self.generate_entry(record) for record in records)
        lines.append("};")
        return lines


# ==============================================================================
# Driver
# ==============================================================================


class Action(Enum):
    PROPERTY_DEFS = "gen-lldb-property-defs"
    PROPERTY_ENUM_DEFS = "gen-lldb-property-enum-defs"


CODEGENS = {
    Action.PROPERTY_DEFS: PropertyDefsCodegen,
    Action.PROPERTY_ENUM_DEFS: PropertyEnumCodegen,
}


def generate(
    store: RecordStore,
    action: Action,
    config: GeneratorConfig = DEFAULT_CONFIG,
    source: str | None = None,
) -> str:
    """Run one full pass (fetch, group, emit) and return the generated text."""
    codegen = CODEGENS[action](config)
    records = store.all_derived_definitions(config.base_class)
    logger.debug("%s: rendering %d properties", action.value, len(records))
    return codegen.generate(records, source)


def emit_property_defs(
    store: RecordStore,
    os: TextIO,
    config: GeneratorConfig = DEFAULT_CONFIG,
    source: str | None = None,
) -> None:
    """Write the PropertyDefinition tables for every definition group."""
    os.write(generate(store, Action.PROPERTY_DEFS, config, source))


def emit_property_enum_defs(
    store: RecordStore,
    os: TextIO,
    config: GeneratorConfig = DEFAULT_CONFIG,
    source: str | None = None,
) -> None:
    """Write the property enumerator cases for every definition group."""
    os.write(generate(store, Action.PROPERTY_ENUM_DEFS, config, source))
