"""Page specifications, frames and dimension utilities."""

import math
from dataclasses import dataclass as _dataclass


@_dataclass(frozen=True)
class PageSize:
    """Named page size in inches."""

    width: float   # inches
    height: float  # inches
    label: str     # display label for CLI/help


@_dataclass(frozen=True)
class Frame:
    """
    Rectangle a block is laid out into, in points.

    Layout space is y-down: ``y`` is the distance of the frame's top edge
    from the top edge of the page.
    """

    x: float
    y: float
    width: float
    height: float

    def inset(self, margin: float) -> "Frame":
        """
        Return the frame shrunk by a margin on all sides.

        Args:
            margin: Margin in points.

        Returns:
            New Frame. Width and height never go below zero.
        """
        return Frame(
            x=self.x + margin,
            y=self.y + margin,
            width=max(0.0, self.width - (margin * 2)),
            height=max(0.0, self.height - (margin * 2)),
        )


# Registry of standard page sizes
PAGE_SIZES = {
    "letter": PageSize(8.5, 11.0, "Letter (8.5×11)"),
    "legal": PageSize(8.5, 14.0, "Legal (8.5×14)"),
    "half": PageSize(8.5, 5.5, "Half Sheet (8.5×5.5)"),
    "a4": PageSize(8.27, 11.69, "A4 (210×297mm)"),
    "a5": PageSize(5.83, 8.27, "A5 (148×210mm)"),
}

# Relative tolerance for floating point layout comparisons
EPSILON = 1e-6


def get_page_size(name: str) -> PageSize:
    """
    Get page size by name.

    Args:
        name: Page size name (e.g., "letter", "half", "a4").

    Returns:
        PageSize object. Defaults to letter if name not found.
    """
    return PAGE_SIZES.get(name.lower(), PAGE_SIZES["letter"])


def page_frame(page: PageSize, margin: float = 0.0) -> Frame:
    """
    Get the frame covering a page, minus a margin.

    Args:
        page: Page size (inches).
        margin: Margin in inches.

    Returns:
        Frame in points.
    """
    full = Frame(0.0, 0.0, inches_to_points(page.width), inches_to_points(page.height))
    return full.inset(inches_to_points(margin))


def compare(value1: float, value2: float, epsilon: float = EPSILON) -> int:
    """
    Compare two floats with a relative error tolerance.

    Args:
        value1: First value.
        value2: Second value.
        epsilon: Relative tolerance (scaled by the larger magnitude).

    Returns:
        -1 if value1 is smaller, 0 if equal within tolerance, 1 if greater.
    """
    if math.isclose(value1, value2, rel_tol=epsilon, abs_tol=epsilon):
        return 0
    return -1 if value1 < value2 else 1


def inches_to_points(inches: float) -> float:
    """
    Convert inches to points (72 points per inch).

    Args:
        inches: Measurement in inches.

    Returns:
        Measurement in points.
    """
    return inches * 72

