"""Pagination Math — offset and page metadata for listing endpoints.

Invariants:
    - offset = (page - 1) * limit
    - total_pages = ceil(total / limit); 0 when the store is empty
    - A page past the end is not an error: the caller returns an empty window
"""

import math


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def page_meta(page: int, limit: int, total: int) -> dict:
    """Pagination block for a listing response."""
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": math.ceil(total / limit),
    }
