"""
Tests for engine/grouping.py

Validates:
- Every record lands in exactly one group
- Keys iterate in lexicographic order regardless of input order
- Records keep store order within a group
- Empty input yields no groups
"""

from propgen.engine.grouping import group_by_definition, iter_definition_groups


def _records(make_record, pairs):
    return [
        make_record(Definition=definition, Name=name, Type="Boolean")
        for definition, name in pairs
    ]


def test_empty_input_has_no_groups():
    assert group_by_definition([]) == {}
    assert list(iter_definition_groups([])) == []


def test_grouping_is_lossless(make_record):
    records = _records(
        make_record,
        [("Target", "A"), ("Process", "B"), ("Target", "C"), ("Debugger", "D"), ("Process", "E")],
    )
    groups = group_by_definition(records)

    flattened = [r for group in groups.values() for r in group]
    assert len(flattened) == len(records)
    assert {id(r) for r in flattened} == {id(r) for r in records}


def test_keys_sorted_lexicographically(make_record):
    records = _records(
        make_record,
        [("Target", "A"), ("Process", "B"), ("Debugger", "C"), ("Thread", "D")],
    )
    assert list(group_by_definition(records)) == ["Debugger", "Process", "Target", "Thread"]


def test_sorting_is_case_sensitive(make_record):
    """Uppercase keys sort before lowercase ones, matching byte order."""
    records = _records(make_record, [("target", "A"), ("Thread", "B"), ("Process", "C")])
    assert list(group_by_definition(records)) == ["Process", "Thread", "target"]


def test_store_order_kept_within_group(make_record):
    records = _records(
        make_record,
        [("Target", "Zeta"), ("Process", "X"), ("Target", "Alpha"), ("Target", "Mid")],
    )
    groups = group_by_definition(records)
    assert [r.name for r in groups["Target"]] == ["Zeta", "Alpha", "Mid"]


def test_grouping_is_deterministic(make_record):
    records = _records(
        make_record,
        [("Target", "A"), ("Process", "B"), ("Target", "C"), ("Platform", "D")],
    )
    first = group_by_definition(records)
    second = group_by_definition(list(records))
    assert list(first) == list(second)
    for key in first:
        assert [r.name for r in first[key]] == [r.name for r in second[key]]


def test_iter_definition_groups(make_record):
    records = _records(make_record, [("Target", "A"), ("Process", "B"), ("Target", "C")])
    groups = list(iter_definition_groups(records))
    assert [g.key for g in groups] == ["Process", "Target"]
    assert len(groups[1]) == 2
