"""Utility modules."""

from blockflow.utils.dimensions import (
    EPSILON,
    PAGE_SIZES,
    Frame,
    PageSize,
    compare,
    get_page_size,
    inches_to_points,
    page_frame,
)

__all__ = [
    "EPSILON",
    "PAGE_SIZES",
    "Frame",
    "PageSize",
    "compare",
    "get_page_size",
    "inches_to_points",
    "page_frame",
]
