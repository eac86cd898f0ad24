"""Offset pagination and sort-field resolution shared by list endpoints."""

import math
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Query

from taskboard.core.errors import BadRequestError


def page_count(total: int, limit: int) -> int:
    """Number of pages needed for total rows at limit per page."""
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def resolve_sort_column(sort: str, columns: Mapping[str, Any]) -> Any:
    """Map an API sort name (camelCase) to its column; unknown names are a 400."""
    column = columns.get(sort)
    if column is None:
        raise BadRequestError(
            f"Invalid sort field: {sort}. Allowed: {', '.join(columns)}.",
            error_code="INVALID_SORT_FIELD",
        )
    return column


def paginate(query: Query, page: int, limit: int) -> tuple[list, int]:
    """Return (rows for page, total row count) for a filtered, ordered query."""
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return rows, total
