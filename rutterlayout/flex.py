"""Flex layouts: columns and rows with optionally flexible children."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any

from .geometry import BoxConstraints, Offset, Size, _clamp, _fmax
from .layouter import Layout, LayoutableChild, LayoutableChildren, LayoutError

__all__ = [
    "FlexFit",
    "Flex",
    "Flexible",
    "CrossAxisAlignment",
    "MainAxisAlignment",
    "MainAxisSize",
    "Column",
    "Row",
]


def _div(a: float, b: float) -> float:
    """Float division with IEEE semantics for a zero divisor."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


class FlexFit(enum.Enum):
    """Whether a flexible child must fill its share of the space."""

    TIGHT = "tight"
    LOOSE = "loose"


@dataclass(frozen=True)
class Flex:
    """A flex factor and how the child fits into its share."""

    flex: float
    fit: FlexFit


class _FlexibleQuery:
    """Query asking a node for its flex information."""


_FLEXIBLE_QUERY = _FlexibleQuery()


@dataclass(frozen=True)
class Flexible(Layout):
    """Marks a child of a row or column as taking a share of the free space."""

    flex: Flex

    @staticmethod
    def get(child: LayoutableChild) -> Flex | None:
        """The flex information of ``child``, if it is marked flexible."""
        result = child.query(_FLEXIBLE_QUERY)
        return result if isinstance(result, Flex) else None

    def _child(self, children: LayoutableChildren) -> LayoutableChild | None:
        if len(children) > 1:
            raise LayoutError(
                f"Flexible marker can have zero or one child but has {len(children)}"
            )
        last = None
        for child in children:
            last = child
        return last

    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        child = self._child(children)
        if child is None:
            return constraint.constrain(Size.zero()), 0
        result = child.layout(constraint)
        child.pos(Offset.zero())
        child.z_index_offset(0)
        return result

    def query(self, query: Any, children: LayoutableChildren) -> Any | None:
        if isinstance(query, _FlexibleQuery):
            return self.flex
        child = self._child(children)
        return None if child is None else child.query(query)


class CrossAxisAlignment(enum.Enum):
    """Placement of children across the main axis."""

    START = "start"
    END = "end"
    CENTER = "center"

    def spacing_for(self, max_size: float, size: float) -> float:
        """Offset of a child of ``size`` within ``max_size``."""
        if self is CrossAxisAlignment.START:
            return 0.0
        free = _fmax(max_size - size, 0.0)
        if self is CrossAxisAlignment.END:
            return free
        return free / 2.0


class MainAxisAlignment(enum.Enum):
    """Distribution of free space along the main axis."""

    START = "start"
    END = "end"
    CENTER = "center"
    SPACE_AROUND = "space_around"
    SPACE_BETWEEN = "space_between"
    SPACE_EVENLY = "space_evenly"

    def spacing_for(self, total_spacing: float, num_children: int) -> tuple[float, float]:
        """Space before the first child and between consecutive children."""
        count = float(num_children)
        if self is MainAxisAlignment.START:
            return 0.0, 0.0
        if self is MainAxisAlignment.END:
            return total_spacing, 0.0
        if self is MainAxisAlignment.CENTER:
            return total_spacing / 2.0, 0.0
        if self is MainAxisAlignment.SPACE_AROUND:
            unit = _div(total_spacing, count)
            return unit / 2.0, unit
        if self is MainAxisAlignment.SPACE_BETWEEN:
            if count > 1.0:
                return 0.0, total_spacing / (count - 1.0)
            return 0.0, 0.0
        unit = total_spacing / (count + 1.0)
        return unit, unit


class MainAxisSize(enum.Enum):
    """Whether a row or column takes all available main-axis space."""

    MIN = "min"
    MAX = "max"


@dataclass(frozen=True)
class Column(Layout):
    """Lays children out vertically, top to bottom."""

    cross_axis_alignment: CrossAxisAlignment = CrossAxisAlignment.CENTER
    main_axis_alignment: MainAxisAlignment = MainAxisAlignment.CENTER
    main_axis_size: MainAxisSize = MainAxisSize.MAX

    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        orig_constraint = constraint
        constraint = constraint.loosen_width()
        non_flex_constraint = constraint.with_unbounded_height()

        max_width = 0.0
        bounded_height = 0.0
        total_flex = 0.0
        any_tight = False
        max_num_z_index = 0

        for child in children:
            flex = Flexible.get(child)
            if flex is not None:
                total_flex += flex.flex
                any_tight = any_tight or flex.fit is FlexFit.TIGHT
            else:
                size, child_z_index = child.layout(non_flex_constraint)
                max_width = _fmax(max_width, size.width)
                bounded_height += size.height
                max_num_z_index = max(max_num_z_index, child_z_index)
            child.z_index_offset(0)

        if not (
            constraint.height_is_bounded()
            or (not any_tight and self.main_axis_size is MainAxisSize.MIN)
        ):
            raise LayoutError(
                "a column with unbounded height needs MainAxisSize.MIN and no tight flex children"
            )

        unit_flex = (
            (constraint.max_height - bounded_height) / total_flex if total_flex != 0.0 else 0.0
        )
        if self.main_axis_size is MainAxisSize.MIN:
            total_spacing = (
                min(_fmax(constraint.min_height, bounded_height), constraint.min_height)
                - bounded_height
            )
        else:
            total_spacing = constraint.max_height - bounded_height
        unit_flex = _fmax(unit_flex, 0.0)
        total_spacing = _fmax(total_spacing, 0.0)

        actual_flex_height = 0.0
        for child in children:
            flex = Flexible.get(child)
            if flex is None:
                continue
            flex_space = flex.flex * unit_flex
            if flex.fit is FlexFit.TIGHT:
                child_constraint = constraint.with_tight_height(flex_space)
            else:
                child_constraint = constraint.with_loose_height(flex_space)
            size, child_z_index = child.layout(child_constraint)
            actual_flex_height += size.height
            max_width = _fmax(max_width, size.width)
            max_num_z_index = max(max_num_z_index, child_z_index)

        max_width = _clamp(max_width, orig_constraint.min_width, orig_constraint.max_width)
        total_spacing = _fmax(total_spacing - actual_flex_height, 0.0)
        total_height = bounded_height + actual_flex_height

        space_before, space_between = self.main_axis_alignment.spacing_for(
            total_spacing, len(children)
        )

        current_height = space_before
        for child in children:
            size = child.size()
            child.pos(
                Offset(
                    self.cross_axis_alignment.spacing_for(max_width, size.width),
                    current_height,
                )
            )
            current_height += space_between + size.height

        return (
            constraint.constrain(Size(max_width, total_height + total_spacing)),
            max_num_z_index,
        )


@dataclass(frozen=True)
class Row(Layout):
    """Lays children out horizontally, left to right."""

    cross_axis_alignment: CrossAxisAlignment = CrossAxisAlignment.CENTER
    main_axis_alignment: MainAxisAlignment = MainAxisAlignment.CENTER
    main_axis_size: MainAxisSize = MainAxisSize.MAX

    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        orig_constraint = constraint
        constraint = constraint.loosen_height()
        non_flex_constraint = constraint.with_unbounded_width()

        max_height = 0.0
        bounded_width = 0.0
        total_flex = 0.0
        any_tight = False
        max_num_z_index = 0

        for child in children:
            flex = Flexible.get(child)
            if flex is not None:
                total_flex += flex.flex
                any_tight = any_tight or flex.fit is FlexFit.TIGHT
            else:
                size, child_z_index = child.layout(non_flex_constraint)
                max_height = _fmax(max_height, size.height)
                bounded_width += size.width
                max_num_z_index = max(max_num_z_index, child_z_index)
            child.z_index_offset(0)

        if not (
            constraint.width_is_bounded()
            or (not any_tight and self.main_axis_size is MainAxisSize.MIN)
        ):
            raise LayoutError(
                "a row with unbounded width needs MainAxisSize.MIN and no tight flex children"
            )

        unit_flex = (
            (constraint.max_width - bounded_width) / total_flex if total_flex != 0.0 else 0.0
        )
        if self.main_axis_size is MainAxisSize.MIN:
            # The upper bound is the maximal height, as in the reference layout.
            total_spacing = (
                _clamp(bounded_width, constraint.min_width, constraint.max_height)
                - bounded_width
            )
        else:
            total_spacing = constraint.max_width - bounded_width
        unit_flex = _fmax(unit_flex, 0.0)
        total_spacing = _fmax(total_spacing, 0.0)

        actual_flex_width = 0.0
        for child in children:
            flex = Flexible.get(child)
            if flex is None:
                continue
            flex_space = flex.flex * unit_flex
            if flex.fit is FlexFit.TIGHT:
                child_constraint = constraint.with_tight_width(flex_space)
            else:
                child_constraint = constraint.with_loose_width(flex_space)
            size, child_z_index = child.layout(child_constraint)
            actual_flex_width += size.width
            max_height = _fmax(max_height, size.height)
            max_num_z_index = max(max_num_z_index, child_z_index)

        max_height = _clamp(max_height, orig_constraint.min_height, orig_constraint.max_height)
        total_spacing = _fmax(total_spacing - actual_flex_width, 0.0)
        total_width = bounded_width + actual_flex_width

        space_before, space_between = self.main_axis_alignment.spacing_for(
            total_spacing, len(children)
        )

        current_width = space_before
        for child in children:
            size = child.size()
            child.pos(
                Offset(
                    current_width,
                    self.cross_axis_alignment.spacing_for(max_height, size.height),
                )
            )
            current_width += space_between + size.width

        return (
            constraint.constrain(Size(total_width + total_spacing, max_height)),
            max_num_z_index,
        )