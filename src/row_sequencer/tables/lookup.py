import logging
from typing import Any

from ..helpers.parsing import strict_parse_int
from .base.typing import TabularStoreProtocol

logger = logging.getLogger(__name__)


def find_row_by_id(store: TabularStoreProtocol, target_id: Any) -> int | None:
    """
    Locate the row holding ``target_id`` and return its row number.

    Binary search over the id column, which is sorted once reconciled. If an
    unparseable cell is hit mid-search the column is not trustworthy and the
    lookup falls back to a linear scan.
    """
    target = strict_parse_int(target_id)
    if target is None:
        return None

    last_row = store.last_row()
    if last_row < 2:
        return None
    ids = [strict_parse_int(v) for v in store.read_ids(2, last_row - 1)]

    left, right = 0, len(ids) - 1
    while left <= right:
        mid = (left + right) // 2
        current = ids[mid]
        if current is None:
            logger.debug(f"Unparseable id at row {mid + 2}; scanning linearly for {target}")
            return _linear_scan(ids, target)
        if current == target:
            return mid + 2
        if current < target:
            left = mid + 1
        else:
            right = mid - 1
    return None


def _linear_scan(ids: list[int | None], target: int) -> int | None:
    for pos, value in enumerate(ids):
        if value == target:
            return pos + 2
    return None
