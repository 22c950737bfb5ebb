"""Single-child layouts, alignment, padding, sizing and aspect-ratio boxes."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Union

from .geometry import BoxConstraints, EdgeInsets, Offset, Size
from .layouter import Layout, LayoutableChild, LayoutableChildren, LayoutError

__all__ = [
    "Maximal",
    "Transparent",
    "SizedBox",
    "Paxel",
    "Fraction",
    "Dimension",
    "AbsolutePosition",
    "SingleChildLayouter",
    "LoosenConstrainer",
    "BoundedFractionalMaximalSizer",
    "Alignment",
    "align",
    "padding",
    "FractionalSize",
    "PassthroughSizer",
    "fractionally_sized_box",
    "AspectRatio",
    "aspect_ratio_box",
    "ClosureLayout",
]


def _fmin(a: float, b: float) -> float:
    """Minimum of two floats that ignores a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a <= b else b


def _div(a: float, b: float) -> float:
    """Float division with IEEE semantics for a zero divisor."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _only_child(children: LayoutableChildren, name: str) -> LayoutableChild | None:
    """The single child of a node that may have at most one, or None."""
    if len(children) > 1:
        raise LayoutError(f"{name} can have zero or one child but has {len(children)}")
    last = None
    for child in children:
        last = child
    return last


def _no_children(children: LayoutableChildren, name: str) -> None:
    if len(children) != 0:
        raise LayoutError(f"{name} cannot have children but has {len(children)}")


@dataclass(frozen=True)
class Maximal(Layout):
    """A leaf that takes as much space as its constraints bound."""

    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        _no_children(children, "Maximal")
        return constraint.maximal_bounded(), 1


@dataclass(frozen=True)
class Transparent(Layout):
    """Passes constraints, queries and size straight through to its only child."""

    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        child = _only_child(children, "Transparent layout")
        if child is None:
            return constraint.constrain(Size.zero()), 1
        result = child.layout(constraint)
        child.pos(Offset.zero())
        child.z_index_offset(0)
        return result

    def query(self, query: Any, children: LayoutableChildren) -> Any | None:
        child = _only_child(children, "Transparent layout")
        return None if child is None else child.query(query)


@dataclass(frozen=True)
class SizedBox(Layout):
    """Imposes extra constraints on its child."""

    constraint: BoxConstraints = field(default_factory=BoxConstraints)

    @classmethod
    def from_size(cls, size: Size) -> SizedBox:
        return cls(BoxConstraints.tight_for(size))

    @classmethod
    def constrained(cls, constraint: BoxConstraints) -> SizedBox:
        return cls(constraint)

    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        child = _only_child(children, "SizedBox")
        enforced = self.constraint.enforce(constraint)
        if child is None:
            return enforced.constrain(Size.zero()), 1
        result = child.layout(enforced)
        child.pos(Offset.zero())
        child.z_index_offset(0)
        return result


@dataclass(frozen=True)
class Paxel:
    """An absolute length."""

    value: float


@dataclass(frozen=True)
class Fraction:
    """A length relative to the enclosing size."""

    value: float


Dimension = Union[Paxel, Fraction]


def _resolve(dimension: Dimension, extent: float) -> float:
    if isinstance(dimension, Fraction):
        return extent * dimension.value
    return dimension.value


@dataclass(frozen=True)
class AbsolutePosition:
    """A position given per axis in absolute or fractional units."""

    x: Dimension = field(default_factory=lambda: Paxel(0.0))
    y: Dimension = field(default_factory=lambda: Paxel(0.0))

    @classmethod
    def zero(cls) -> AbsolutePosition:
        return cls(Paxel(0.0), Paxel(0.0))

    @classmethod
    def from_offset(cls, offset: Offset) -> AbsolutePosition:
        return cls(Paxel(offset.x), Paxel(offset.y))

    def position(self, outer_size: Size, inner_size: Size | None = None) -> Offset:
        """Offset within ``outer_size``; the inner size plays no part."""
        return Offset(_resolve(self.x, outer_size.width), _resolve(self.y, outer_size.height))


def _empty_size(empty_sizer: Any, constraint: BoxConstraints) -> Size:
    if empty_sizer is None:
        return constraint.maximal_bounded()
    if isinstance(empty_sizer, Size):
        return empty_sizer
    return empty_sizer.size(constraint)


@dataclass(frozen=True)
class SingleChildLayouter(Layout):
    """A layout for at most one child, built from interchangeable parts.

    ``constrainer`` derives the child's constraints, ``sizer`` the own size from
    the child's size, and ``positioner`` the child's position. Without a child
    the size comes from ``empty_sizer``: a fixed :class:`Size`, an object with a
    ``size(constraint)`` method, or None for the maximal bounded size.
    """

    positioner: Any
    constrainer: Any
    sizer: Any
    empty_sizer: Any = None

    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        child = _only_child(children, "SingleChildLayouter")
        if child is None:
            return constraint.constrain(_empty_size(self.empty_sizer, constraint)), 1
        child_size, num_z_index = child.layout(self.constrainer.constrain(constraint))
        our_size = constraint.constrain(self.sizer.size(constraint, child_size))
        child.pos(self.positioner.position(our_size, child_size))
        child.z_index_offset(0)
        return our_size, num_z_index


@dataclass(frozen=True)
class LoosenConstrainer:
    """Drops the minimum width and height."""

    def constrain(self, input_constraint: BoxConstraints) -> BoxConstraints:
        return input_constraint.loosen()


@dataclass(frozen=True)
class BoundedFractionalMaximalSizer:
    """Fills a bounded axis unless a factor of the child's size is given."""

    width_factor: float | None = None
    height_factor: float | None = None

    def size(self, constraint: BoxConstraints, child_size: Size) -> Size:
        target = child_size
        if not constraint.width_is_bounded() or self.width_factor is not None:
            target = target.scale_width(1.0 if self.width_factor is None else self.width_factor)
        else:
            target = target.maximize_width()
        if not constraint.height_is_bounded() or self.height_factor is not None:
            return target.scale_height(1.0 if self.height_factor is None else self.height_factor)
        return target.maximize_height()


@dataclass(frozen=True)
class Alignment:
    """Alignment in [-1, 1] per axis; x grows rightwards, y grows upwards."""

    x: float
    y: float

    @classmethod
    def top_left(cls) -> Alignment:
        return cls(-1.0, 1.0)

    @classmethod
    def top_center(cls) -> Alignment:
        return cls(0.0, 1.0)

    @classmethod
    def top_right(cls) -> Alignment:
        return cls(1.0, 1.0)

    @classmethod
    def center_left(cls) -> Alignment:
        return cls(-1.0, 0.0)

    @classmethod
    def center(cls) -> Alignment:
        return cls(0.0, 0.0)

    @classmethod
    def center_right(cls) -> Alignment:
        return cls(1.0, 0.0)

    @classmethod
    def bottom_left(cls) -> Alignment:
        return cls(-1.0, -1.0)

    @classmethod
    def bottom_center(cls) -> Alignment:
        return cls(0.0, -1.0)

    @classmethod
    def bottom_right(cls) -> Alignment:
        return cls(1.0, -1.0)

    def position(self, outer_size: Size, inner_size: Size) -> Offset:
        unit_x = (outer_size.width - inner_size.width) / 2.0
        unit_y = (outer_size.height - inner_size.height) / 2.0
        return Offset(unit_x + self.x * unit_x, unit_y - self.y * unit_y)


def align(
    alignment: Alignment,
    factor_width: float | None = None,
    factor_height: float | None = None,
) -> SingleChildLayouter:
    """A layout that aligns its child within the available space."""
    return SingleChildLayouter(
        positioner=alignment,
        constrainer=LoosenConstrainer(),
        sizer=BoundedFractionalMaximalSizer(factor_width, factor_height),
        empty_sizer=None,
    )


def padding(insets: EdgeInsets) -> SingleChildLayouter:
    """A layout that keeps ``insets`` free around its child."""
    return SingleChildLayouter(
        positioner=AbsolutePosition.from_offset(insets.offset()),
        constrainer=insets,
        sizer=insets,
        empty_sizer=insets.total_size(),
    )


@dataclass(frozen=True)
class FractionalSize:
    """Fractions of the maximal width and height to make tight."""

    x: float | None = None
    y: float | None = None

    def constrain(self, input_constraint: BoxConstraints) -> BoxConstraints:
        constraint = input_constraint
        if self.x is not None:
            constraint = constraint.with_tight_width(constraint.max_width * self.x)
        if self.y is not None:
            constraint = constraint.with_tight_height(constraint.max_height * self.y)
        return constraint

    def size(self, input_constraint: BoxConstraints) -> Size:
        return self.constrain(input_constraint).constrain(Size.zero())


@dataclass(frozen=True)
class PassthroughSizer:
    """Takes the child's size, constrained."""

    def size(self, input_constraint: BoxConstraints, child_size: Size) -> Size:
        return input_constraint.constrain(child_size)


def fractionally_sized_box(
    size: FractionalSize, alignment: Alignment | None = None
) -> SingleChildLayouter:
    """A layout sizing its child to a fraction of the available space."""
    return SingleChildLayouter(
        positioner=Alignment.center() if alignment is None else alignment,
        constrainer=size,
        sizer=PassthroughSizer(),
        empty_sizer=size,
    )


@dataclass(frozen=True)
class AspectRatio:
    """A width to height ratio."""

    ratio: float

    def width_for(self, height: float) -> float:
        return height * self.ratio

    def height_for(self, width: float) -> float:
        return _div(width, self.ratio)

    def target_size(self, input_constraint: BoxConstraints) -> Size:
        """The largest size of this ratio that the constraint allows."""
        if not (input_constraint.width_is_bounded() or input_constraint.height_is_bounded()):
            raise LayoutError("an aspect ratio needs a bounded width or height")
        if input_constraint.width_is_bounded():
            width = input_constraint.max_width
        else:
            width = _fmin(self.width_for(input_constraint.max_height), input_constraint.max_width)
        height = _fmin(self.height_for(width), input_constraint.max_height)
        return Size(self.width_for(height), height)

    def constrain(self, input_constraint: BoxConstraints) -> BoxConstraints:
        size = self.target_size(input_constraint)
        return BoxConstraints.tight_for(input_constraint.constrain(size))

    def size(self, input_constraint: BoxConstraints) -> Size:
        return self.target_size(input_constraint)


def aspect_ratio_box(ratio: AspectRatio) -> SingleChildLayouter:
    """A layout that gives its child a fixed aspect ratio."""
    return SingleChildLayouter(
        positioner=AbsolutePosition.zero(),
        constrainer=ratio,
        sizer=PassthroughSizer(),
        empty_sizer=ratio,
    )


@dataclass(eq=False)
class ClosureLayout(Layout):
    """A leaf whose size is computed by a function of the constraint.

    Functions cannot be compared, so a closure layout never equals any layout,
    itself included; a layouter therefore always treats it as changed.
    """

    closure: Callable[[BoxConstraints], Size]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Layout):
            return False
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "ClosureLayout { ... }"

    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        _no_children(children, "ClosureLayout")
        return self.closure(constraint), 1