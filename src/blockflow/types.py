"""Type aliases used across the blockflow package."""

from typing import Literal, Tuple

# Color types
RGBColor = Tuple[float, float, float]  # RGB color in 0-1 range

# Measurements
Inch = float

# Block alignment
XAlignment = Literal["left", "right", "center", "justify"]
YAlignment = Literal["top", "middle", "bottom"]

# Per-run vertical placement inside a row
LineMode = Literal["top", "middle", "baseline", "bottom"]
ScriptMode = Literal["super", "sub"]

# Length measurement mode
UnitMode = Literal["absolute", "relative"]

# Run content
RunKind = Literal["text", "graphic"]

X_ALIGNMENTS: tuple[XAlignment, ...] = ("left", "right", "center", "justify")
Y_ALIGNMENTS: tuple[YAlignment, ...] = ("top", "middle", "bottom")
LINE_MODES: tuple[LineMode, ...] = ("top", "middle", "baseline", "bottom")
