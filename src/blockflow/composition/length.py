"""Distance measures that are either absolute or relative to a base value."""

from dataclasses import dataclass

from blockflow.types import UnitMode


@dataclass(frozen=True)
class Length:
    """
    Distance measure.

    Attributes:
        value: Absolute measure in points, or a ratio when relative.
        mode: "absolute" or "relative" (ratio resolved against a base value
              such as a font size or a line height).
    """

    value: float
    mode: UnitMode = "absolute"

    @classmethod
    def absolute(cls, value: float) -> "Length":
        """Create an absolute length."""
        return cls(value, "absolute")

    @classmethod
    def relative(cls, value: float) -> "Length":
        """Create a length relative to a base value."""
        return cls(value, "relative")

    def resolve(self, base: float) -> float:
        """
        Get the resolved distance value.

        Args:
            base: Value used to resolve relative lengths.

        Returns:
            The absolute distance.

        Raises:
            ValueError: If the unit mode is unknown.
        """
        if self.mode == "absolute":
            return self.value
        if self.mode == "relative":
            return base * self.value
        raise ValueError(f"Unit mode {self.mode!r} not supported")

    def __str__(self) -> str:
        return f"{self.value} ({self.mode})"
