"""Line alignment: how a run sits vertically inside its row."""

from dataclasses import dataclass
from typing import Union

from blockflow.composition.length import Length
from blockflow.types import LINE_MODES, LineMode, ScriptMode

# Baseline rise of super-/sub-scripts, relative to the font size
SCRIPT_RISE = 0.33

SUPERSCRIPT = Length.relative(SCRIPT_RISE)
SUBSCRIPT = Length.relative(-SCRIPT_RISE)


@dataclass(frozen=True)
class Offset:
    """
    Baseline alignment with an arbitrary shift in points.

    Positive shifts raise the run (superscript), negative ones lower it
    (subscript).
    """

    shift: float


# Canonical form stored on runs
LineAlignment = Union[LineMode, Offset]

# What callers may pass to show_text / show_graphic
LineAlignmentLike = Union[LineMode, ScriptMode, Length, Offset]


def resolve_line_alignment(value: LineAlignmentLike, font_size: float) -> LineAlignment:
    """
    Resolve a caller-supplied line alignment into its canonical form.

    Args:
        value: Named mode, "super"/"sub", a Length or an Offset.
        font_size: Base value for relative lengths.

    Returns:
        A named mode or an Offset.

    Raises:
        TypeError: If value is neither a name, a Length nor an Offset.
        ValueError: If value is an unknown name.
    """
    if isinstance(value, Offset):
        return value
    if isinstance(value, str):
        if value == "super":
            value = SUPERSCRIPT
        elif value == "sub":
            value = SUBSCRIPT
        elif value in LINE_MODES:
            return value
        else:
            raise ValueError(
                f"Unknown line alignment {value!r}. "
                f"Expected one of {', '.join(LINE_MODES)}, super, sub."
            )
    if isinstance(value, Length):
        return Offset(value.resolve(font_size))
    raise TypeError(
        f"Line alignment must be a mode name or a Length, not {type(value).__name__}"
    )


def split_alignment(alignment: LineAlignment) -> tuple[LineMode, float]:
    """Split a canonical alignment into its mode and baseline shift."""
    if isinstance(alignment, Offset):
        return "baseline", alignment.shift
    return alignment, 0.0


def is_baseline_family(alignment: LineAlignment) -> bool:
    """Whether the alignment takes part in the row's shared baseline."""
    return isinstance(alignment, Offset) or alignment == "baseline"


def vertical_offset(
    alignment: LineAlignment,
    row_height: float,
    row_baseline: float,
    run_height: float,
    run_baseline: float,
) -> float:
    """
    Calculate a run's vertical displacement from the row top.

    Values follow the y-up convention: negative moves the run down.

    Args:
        alignment: Canonical line alignment of the run.
        row_height: Final row height.
        row_baseline: Final row baseline (distance from the row top).
        run_height: Run height.
        run_baseline: Run baseline (distance from the run top).

    Returns:
        Vertical offset in points.

    Raises:
        NotImplementedError: If the alignment mode is unknown.
    """
    mode, rise = split_alignment(alignment)
    if mode == "top":
        return 0.0
    elif mode == "middle":
        return -(row_height - run_height) / 2
    elif mode == "baseline":
        return -(row_baseline - run_baseline - rise)
    elif mode == "bottom":
        return -(row_height - run_height)
    raise NotImplementedError(f"Line alignment {mode!r} unknown")
