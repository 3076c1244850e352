"""Page-window metadata for list views."""

import math
from typing import Any, Iterable

from petclinic.errors import PaginationError


def paginate(page: int, page_size: int, total_elements: int, page_content: Iterable[Any]) -> dict[str, Any]:
    """
    Build the template model for one page of a paginated list.

    Args:
        page: 1-based page number being displayed.
        page_size: Rows per page; must be positive.
        total_elements: Total number of matching rows across all pages.
        page_content: Rows on the current page.

    Returns:
        Dictionary with ``current_page``, ``total_pages``, ``total_items``
        and ``items``.

    Raises:
        PaginationError: If ``page_size`` is not positive.
    """
    if page_size <= 0:
        raise PaginationError(f"Page size must be positive, got {page_size}")

    return {
        "current_page": page,
        "total_pages": math.ceil(total_elements / page_size),
        "total_items": total_elements,
        "items": list(page_content),
    }
