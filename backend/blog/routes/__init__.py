# Routes package init
"""
Blog Backend — API Routes Package
==================================

Route Inventory:
    - index.py:       GET  /api/
    - posts.py:       GET|POST /api/posts/, GET|PATCH|DELETE /api/posts/{id}/
    - categories.py:  GET|POST /api/categories/, GET|PATCH|DELETE /api/categories/{id}/
    - health.py:      GET  /health

Routes stay THIN: take the path parameter and parsed body, call the service,
pick the status code. Writes answer with an empty body (201 or 204).

Item path ids arrive as strings. An id that is not an integer cannot match
any row, so it is handed to the services as None and treated as a miss
(404 on GET, 204 on PATCH/DELETE) rather than rejected.
"""

from typing import Optional

# SQLite INTEGER range
_MIN_ID = -(2 ** 63)
_MAX_ID = 2 ** 63 - 1


def parse_resource_id(raw: str) -> Optional[int]:
    """Return the path segment as an int, or None if no row could have that id."""
    try:
        value = int(raw)
    except ValueError:
        return None
    if not _MIN_ID <= value <= _MAX_ID:
        return None
    return value
