"""
Pagination

Page/limit normalization shared by every listing endpoint. Routes pass
raw query strings straight through so that garbage input is defaulted
here instead of being rejected by request validation.
"""
import math
import re
from typing import Any, Dict, Tuple

from vidtube.settings import get_settings

DEFAULT_PAGE = 1

# Any offset past this is past the data; keeps OFFSET inside a signed 64-bit integer
MAX_OFFSET = 2 ** 62

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _parse_int(value: Any) -> int:
    """Leading-integer parse; 0 when missing or non-numeric"""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def normalize(page_param: Any = None, limit_param: Any = None) -> Tuple[int, int]:
    """
    Normalize raw paging input.

    Missing, non-numeric or zero values fall back to the defaults
    (page 1, the configured default page size). Otherwise page is clamped
    to >= 1 and limit to [1, the configured maximum page size].

    Returns:
        (page, limit)
    """
    settings = get_settings()
    page = _parse_int(page_param) or DEFAULT_PAGE
    limit = _parse_int(limit_param) or settings.default_page_size

    page = max(page, 1)
    limit = min(max(limit, 1), settings.max_page_size)
    return page, limit


def offset(page: int, limit: int) -> int:
    """Number of rows to skip for a normalized page"""
    return min((page - 1) * limit, MAX_OFFSET)


def total_pages(total: int, limit: int) -> int:
    """Page count; 0 when there is nothing to page through"""
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def build_pagination(total: int, page: int, limit: int) -> Dict[str, Any]:
    """Pagination block returned alongside every listing"""
    pages = total_pages(total, limit)
    return {
        "total_items": total,
        "total_pages": pages,
        "current_page": page,
        "page_size": limit,
        "has_next_page": page < pages,
        "has_previous_page": page > 1
    }
