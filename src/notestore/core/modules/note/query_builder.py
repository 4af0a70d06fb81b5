"""Pure functions for building MongoDB queries for notes."""

from typing import Any

from bson import ObjectId

from notestore.core.pagination import PageWindow
from notestore.errors import InvalidPaginationError

# Largest skip or limit MongoDB accepts (BSON int64)
MAX_WINDOW_VALUE = 2**63 - 1

# ObjectIds grow with insertion time, so pages stay stable across requests
LIST_SORT: list[tuple[str, int]] = [("_id", 1)]


def build_list_window(page: int, limit: int) -> PageWindow:
    """Build the filter and skip/limit window for one page of notes.

    Args:
        page: 1-based page number
        limit: Maximum number of notes per page

    Returns:
        Page window with an empty filter

    Raises:
        InvalidPaginationError: If page or limit is less than 1, or the window
            does not fit in a 64-bit integer
    """
    if page < 1 or limit < 1:
        raise InvalidPaginationError(page, limit)
    skip = (page - 1) * limit
    if skip > MAX_WINDOW_VALUE or limit > MAX_WINDOW_VALUE:
        raise InvalidPaginationError(page, limit)
    return PageWindow(filter={}, skip=skip, limit=limit, sort=LIST_SORT)


def build_id_filter(note_id: ObjectId) -> dict[str, Any]:
    return {"_id": note_id}


def build_set_update(fields: dict[str, Any]) -> dict[str, Any]:
    """Wrap a partial document in a $set update. An empty document is passed through as is."""
    return {"$set": fields}
