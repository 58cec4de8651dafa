"""
hangar_engines.snapshot -- Current hangar contents from an asset snapshot.

Architecture: hangar_engines -- pure calculation, zero I/O.  The service layer
fetches the asset snapshot and passes it in.

Unlike delivery extraction, the universal inbound flag ``CorpDeliveries``
counts as part of every division here: items waiting in deliveries are
on hand for the purpose of reading current contents.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from hangar_engines.tracer import traced_engine
from hangar_kernel.domain.values import DELIVERIES_FLAG, InventoryItem, hangar_flag


def filter_hangar_items(
    items: Iterable[InventoryItem],
    subdivision: int,
) -> tuple[InventoryItem, ...]:
    """Items sitting in ``subdivision`` or in corporation deliveries."""
    flags = {hangar_flag(subdivision), DELIVERIES_FLAG}
    return tuple(item for item in items if item.location_flag in flags)


@traced_engine("snapshot_reader", "1.0", fingerprint_fields=("subdivision",))
def summarize_hangar_contents(
    items: Iterable[InventoryItem],
    subdivision: int,
) -> dict[int, int]:
    """Sum on-hand quantity per type ID for one hangar division."""
    contents: dict[int, int] = defaultdict(int)
    for item in filter_hangar_items(items, subdivision):
        contents[item.type_id] += item.quantity
    return dict(contents)
