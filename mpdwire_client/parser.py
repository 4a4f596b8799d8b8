#!/usr/bin/env python3
"""
Response Parser - turns a frame's "key: value" lines into structured values.

The wire format carries no shape information, so the shape is inferred:

  no lines              -> True            ([] for list-output verbs)
  one line              -> "value"         (["value"] for list-output verbs)
  grouped verbs         -> {name: {key: [values]}}
  keys never repeat     -> {key: value}    ([{...}] for list-output verbs)
  keys repeat           -> [{...}, {...}]  with single-key records collapsed
                           to their value, e.g. ["a", "b"]

A record ends when a key it already holds appears again. This cannot tell
"one object with many fields" from "many single-field objects" except by
repetition, and list-output verbs are a hand-maintained allowlist for the
zero and one line cases. Both are kept as is: changing either changes what
existing verbs return.
"""

from typing import Dict, List, Optional, Tuple, Union

from mpdwire_common.constants import KEY_VALUE_SEPARATOR

Record = Dict[str, str]
GroupedRecord = Dict[str, List[str]]
ParsedValue = Union[
    bool,
    str,
    Record,
    List[Union[Record, str]],
    Dict[str, GroupedRecord],
]


def split_line(line: str) -> Optional[Tuple[str, str]]:
    """Split "key: value"; None for lines without exactly one key and one value."""
    parts = line.split(KEY_VALUE_SEPARATOR, 1)
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def parse_response(lines: List[str], expects_list: bool = False,
                   grouping_key: Optional[str] = None) -> ParsedValue:
    """
    Infer the shape of one frame.

    Args:
        lines: Data lines of the frame, terminator excluded
        expects_list: The verb always yields a list, even for 0 or 1 lines
        grouping_key: Field whose value names each sub-object (e.g. "plugin")

    Returns:
        True, a string, a record, a list of records/strings, or a map of named records
    """
    pairs = [pair for pair in map(split_line, lines) if pair is not None]

    if not pairs:
        return [] if expects_list else True

    if len(pairs) == 1:
        value = pairs[0][1]
        return [value] if expects_list else value

    if grouping_key is not None:
        return _group_by_key(pairs, grouping_key)

    records = _split_records(pairs)

    if len(records) == 1:
        return records if expects_list else records[0]

    return [
        next(iter(record.values())) if len(record) == 1 else record
        for record in records
    ]


def _split_records(pairs: List[Tuple[str, str]]) -> List[Record]:
    records: List[Record] = []
    current: Record = {}
    for key, value in pairs:
        if key in current:
            records.append(current)
            current = {}
        current[key] = value
    records.append(current)
    return records


def _group_by_key(pairs: List[Tuple[str, str]], grouping_key: str) -> Dict[str, GroupedRecord]:
    groups: Dict[str, GroupedRecord] = {}
    name: Optional[str] = None
    current: GroupedRecord = {}
    for key, value in pairs:
        if key == grouping_key:
            if name is not None:
                groups[name] = current
            name = value
            current = {}
        elif name is not None:
            current.setdefault(key, []).append(value)
        # lines before the first grouping key belong to no group and are dropped
    if name is not None:
        groups[name] = current
    return groups
