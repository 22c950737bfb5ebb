"""Basic geometry types: sizes, offsets, edge insets and box constraints."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

INFINITY = math.inf


def _clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``; an inverted or NaN range is an error."""
    if math.isnan(low) or math.isnan(high) or low > high:
        raise ValueError(f"invalid clamp range: min={low!r}, max={high!r}")
    if value < low:
        return low
    if value > high:
        return high
    return value


def _fmax(a: float, b: float) -> float:
    """Maximum of two floats that ignores a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a >= b else b


@dataclass(frozen=True)
class Offset:
    """A position relative to some origin."""

    x: float
    y: float

    @classmethod
    def zero(cls) -> Offset:
        return cls(0.0, 0.0)

    def __add__(self, other: Offset) -> Offset:
        if not isinstance(other, Offset):
            return NotImplemented
        return Offset(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Size:
    """A width and a height."""

    width: float
    height: float

    @classmethod
    def zero(cls) -> Size:
        return cls(0.0, 0.0)

    def max(self, other: Size) -> Size:
        """Component-wise maximum of two sizes."""
        return Size(_fmax(self.width, other.width), _fmax(self.height, other.height))

    def inflate(self, insets: EdgeInsets) -> Size:
        """Grow the size by the given insets on every side."""
        return Size(
            self.width + insets.left + insets.right,
            self.height + insets.top + insets.bottom,
        )

    def center(self) -> Offset:
        return Offset(self.width / 2.0, self.height / 2.0)

    def maximize_width(self) -> Size:
        return replace(self, width=INFINITY)

    def maximize_height(self) -> Size:
        return replace(self, height=INFINITY)

    def scale_width(self, factor: float) -> Size:
        return replace(self, width=self.width * factor)

    def scale_height(self, factor: float) -> Size:
        return replace(self, height=self.height * factor)


@dataclass(frozen=True)
class EdgeInsets:
    """Space to keep free on each side of a box.

    Acts both as a constrainer (deflating incoming constraints) and as a
    sizer (inflating the child's size) for padding layouts.
    """

    left: float
    right: float
    top: float
    bottom: float

    @classmethod
    def all(cls, val: float) -> EdgeInsets:
        return cls(val, val, val, val)

    @classmethod
    def horizontal(cls, val: float) -> EdgeInsets:
        return cls(val, val, 0.0, 0.0)

    @classmethod
    def vertical(cls, val: float) -> EdgeInsets:
        return cls(0.0, 0.0, val, val)

    @classmethod
    def symmetric(cls, horizontal: float, vertical: float) -> EdgeInsets:
        return cls(horizontal, horizontal, vertical, vertical)

    @classmethod
    def specific(cls, left: float, right: float, top: float, bottom: float) -> EdgeInsets:
        return cls(left, right, top, bottom)

    def offset(self) -> Offset:
        """Offset of the inner box from the outer box's origin."""
        return Offset(self.left, self.top)

    def total_size(self) -> Size:
        """Size taken up by the insets alone (used when there is no child)."""
        # The height deliberately sums top and right, matching the reference layout.
        return Size(self.left + self.right, self.top + self.right)

    def constrain(self, input_constraint: BoxConstraints) -> BoxConstraints:
        return input_constraint.deflate(self)

    def size(self, input_constraint: BoxConstraints, child_size: Size) -> Size:
        return child_size.inflate(self)


@dataclass(frozen=True)
class BoxConstraints:
    """Minimum and maximum width and height a box may take."""

    min_width: float = 0.0
    max_width: float = INFINITY
    min_height: float = 0.0
    max_height: float = INFINITY

    @classmethod
    def at_least_width(cls, width: float) -> BoxConstraints:
        return cls(min_width=width)

    @classmethod
    def at_least_height(cls, height: float) -> BoxConstraints:
        return cls(min_height=height)

    @classmethod
    def tight_for(cls, size: Size) -> BoxConstraints:
        return cls(size.width, size.width, size.height, size.height)

    @classmethod
    def fill(cls) -> BoxConstraints:
        return cls(INFINITY, INFINITY, INFINITY, INFINITY)

    @classmethod
    def tight(cls, width: float, height: float) -> BoxConstraints:
        return cls(width, width, height, height)

    @classmethod
    def tight_width(cls, width: float) -> BoxConstraints:
        return cls(width, width, 0.0, INFINITY)

    @classmethod
    def tight_height(cls, height: float) -> BoxConstraints:
        return cls(0.0, INFINITY, height, height)

    def tighten(self) -> BoxConstraints:
        return replace(self, min_width=self.max_width, min_height=self.max_height)

    def deflate(self, insets: EdgeInsets) -> BoxConstraints:
        width = insets.left + insets.right
        height = insets.top + insets.bottom
        min_width = _fmax(self.min_width - width, 0.0)
        min_height = _fmax(self.min_height - height, 0.0)
        max_width = _fmax(self.max_width - width, min_width)
        max_height = _fmax(self.max_height - height, min_height)
        return BoxConstraints(min_width, max_width, min_height, max_height)

    def maximal_bounded_or(self, unbounded_size: Size) -> Size:
        width = self.max_width if self.width_is_bounded() else unbounded_size.width
        height = self.max_height if self.height_is_bounded() else unbounded_size.height
        return self.constrain(Size(width, height))

    def maximal_bounded(self) -> Size:
        width = self.max_width if self.width_is_bounded() else self.min_width
        height = self.max_height if self.height_is_bounded() else self.min_height
        return Size(width, height)

    def loosen(self) -> BoxConstraints:
        return self.loosen_width().loosen_height()

    def loosen_width(self) -> BoxConstraints:
        return replace(self, min_width=0.0)

    def loosen_height(self) -> BoxConstraints:
        return replace(self, min_height=0.0)

    def enforce(self, other: BoxConstraints) -> BoxConstraints:
        """Restrict these constraints so they fit inside ``other``."""
        return BoxConstraints(
            _clamp(self.min_width, other.min_width, other.max_width),
            _clamp(self.max_width, other.min_width, other.max_width),
            _clamp(self.min_height, other.min_height, other.max_height),
            _clamp(self.max_height, other.min_height, other.max_height),
        )

    def constrain(self, size: Size) -> Size:
        """The size closest to ``size`` that satisfies these constraints."""
        return Size(
            _clamp(size.width, self.min_width, self.max_width),
            _clamp(size.height, self.min_height, self.max_height),
        )

    def with_unbounded_height(self) -> BoxConstraints:
        return replace(self, min_height=0.0, max_height=INFINITY)

    def with_tight_height(self, height: float) -> BoxConstraints:
        return replace(self, min_height=height, max_height=height)

    def with_loose_height(self, height: float) -> BoxConstraints:
        return replace(self, min_height=0.0, max_height=height)

    def with_unbounded_width(self) -> BoxConstraints:
        return replace(self, min_width=0.0, max_width=INFINITY)

    def with_tight_width(self, width: float) -> BoxConstraints:
        return replace(self, min_width=width, max_width=width)

    def with_loose_width(self, width: float) -> BoxConstraints:
        return replace(self, min_width=0.0, max_width=width)

    def width_is_bounded(self) -> bool:
        return math.isfinite(self.max_width)

    def height_is_bounded(self) -> bool:
        return math.isfinite(self.max_height)