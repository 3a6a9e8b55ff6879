#!/usr/bin/env python3
"""
Definition Grouping

Partitions property records by their Definition key. Keys come back in
sorted order so the generated file is identical from run to run; records
within a key keep the order the record store returned them in.
"""

import logging
from typing import Iterable, Iterator

from .models import DefinitionGroup, PropertyRecord

logger = logging.getLogger(__name__)


def group_by_definition(records: Iterable[PropertyRecord]) -> dict[str, list[PropertyRecord]]:
    """Group records by Definition, keyed in lexicographic order."""
    grouped: dict[str, list[PropertyRecord]] = {}
    for record in records:
        grouped.setdefault(record.definition, []).append(record)

    result = {key: grouped[key] for key in sorted(grouped)}
    logger.debug(
        "Grouped %d properties into %d definitions",
        sum(len(v) for v in result.values()),
        len(result),
    )
    return result


def iter_definition_groups(records: Iterable[PropertyRecord]) -> Iterator[DefinitionGroup]:
    """Yield DefinitionGroup objects in the same order as group_by_definition."""
    for key, group in group_by_definition(records).items():
        yield DefinitionGroup(key=key, records=group)
