"""
Property generator engine core.

Record store, typed record view, definition grouping, and the two emitters.
"""

from .config import DEFAULT_CONFIG, ConfigError, GeneratorConfig, load_generator_config
from .emitter import (
    Action,
    PropertyDefsCodegen,
    PropertyEnumCodegen,
    emit_property_defs,
    emit_property_enum_defs,
    emit_source_file_header,
    generate,
)
from .grouping import group_by_definition, iter_definition_groups
from .models import (
    DefinitionGroup,
    PropertyDefinitionError,
    PropertyRecord,
    PropgenError,
    RecordFieldError,
)
from .records import RecordStore, RecordStoreError, load_records
