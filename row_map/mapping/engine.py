"""The field copy algorithm.

One routine serves every source/receiver pairing; differences between row,
row-set, cursor and object shapes live entirely in the adapters.
"""

from __future__ import annotations

from typing import Any

from row_map.adapters.protocol import DataReceiver, DataSource, MapSettable, SupportsInitialize


def map_fields(
    source: DataSource,
    source_data: Any,
    receiver: DataReceiver,
    receiver_data: Any,
) -> None:
    """Copy every source field into the receiver slot of the same name.

    1. ``begin_init`` on receivers that support staged initialization.
    2. Each named field is first offered to ``set_mapped_field``; fields it
       does not handle are resolved to a slot and written. Unnamed fields
       and names with no slot are skipped.
    3. ``end_init`` once all fields are processed.
    """
    staged = isinstance(receiver_data, SupportsInitialize)
    settable = receiver_data if isinstance(receiver_data, MapSettable) else None

    if staged:
        receiver_data.begin_init()

    for i in range(source.field_count):
        name = source.field_name(i)
        if not name:
            continue

        if settable is not None:
            value = source.get_value(i, source_data)
            if settable.set_mapped_field(name, value):
                continue
            slot = receiver.resolve_slot(name)
            if slot is not None:
                receiver.set_value(slot, name, receiver_data, value)
            continue

        slot = receiver.resolve_slot(name)
        if slot is not None:
            receiver.set_value(slot, name, receiver_data, source.get_value(i, source_data))

    if staged:
        receiver_data.end_init()
