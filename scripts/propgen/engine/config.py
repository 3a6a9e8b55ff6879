#!/usr/bin/env python3
"""
Generator Configuration Reader

Reads optional generator settings from a YAML file:

    generator:
      base_class: "Property"
      macro_prefix: "LLDB_PROPERTIES_"
      enum_prefix: "eProperty"
      type_prefix: "OptionValue::eType"
      defs_description: "Property definitions for LLDB."
      enum_description: "Property definition enum for LLDB."

Every setting has a default that reproduces LLDB's generated files, so the
file is only needed when emitting tables for another host application.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .models import PropgenError

logger = logging.getLogger(__name__)


class ConfigError(PropgenError):
    """Raised when the generator config file is malformed."""


@dataclass(frozen=True)
class GeneratorConfig:
    base_class: str = "Property"            # record class the properties derive from
    macro_prefix: str = "LLDB_PROPERTIES_"  # include guard prefix
    enum_prefix: str = "eProperty"          # enumerator case prefix
    type_prefix: str = "OptionValue::eType"
    defs_description: str = "Property definitions for LLDB."
    enum_description: str = "Property definition enum for LLDB."

    def needed_macro(self, key: str) -> str:
        """Macro a consumer defines before including the generated file."""
        return (self.macro_prefix + key).replace(" ", "_")


DEFAULT_CONFIG = GeneratorConfig()


def parse_generator_config(doc: dict[str, Any] | None, *, source: str = "<string>") -> GeneratorConfig:
    """Build a GeneratorConfig from a parsed YAML document."""
    if not doc:
        return DEFAULT_CONFIG
    if not isinstance(doc, dict):
        raise ConfigError(f"{source}: expected a mapping at top level")

    section = doc.get("generator") or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{source}: 'generator' must be a mapping")

    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(str(key) for key in set(section) - known)
    if unknown:
        raise ConfigError(f"{source}: unknown generator settings: {', '.join(unknown)}")

    for key, value in section.items():
        if not isinstance(value, str):
            raise ConfigError(f"{source}: generator.{key} must be a string")

    return GeneratorConfig(**section)


def load_generator_config(config_path: str | Path | None = None) -> GeneratorConfig:
    """
    Load GeneratorConfig from a YAML file.

    Returns the defaults when no path is given or the file does not exist.
    """
    if config_path is None:
        return DEFAULT_CONFIG

    path = Path(config_path)
    if not path.exists():
        logger.debug("No generator config at %s, using defaults", path)
        return DEFAULT_CONFIG

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"{path}: cannot read config: {exc}") from exc

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML: {exc}") from exc

    return parse_generator_config(doc, source=str(path))
