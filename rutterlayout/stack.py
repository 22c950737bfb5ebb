"""Stacking layouts: children painted on top of each other."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from .basic import AbsolutePosition, Alignment
from .geometry import BoxConstraints, Offset, Size
from .layouter import Layout, LayoutableChild, LayoutableChildren, LayoutError

__all__ = ["Positioned", "StackFit", "Stack"]


class _PositionedQuery:
    """Query asking a node whether it is a :class:`Positioned` marker."""


_POSITIONED_QUERY = _PositionedQuery()


@dataclass(frozen=True)
class Positioned(Layout):
    """Marks a stack child to be placed at an absolute position."""

    position: AbsolutePosition = field(default_factory=AbsolutePosition)
    z_top: bool = False

    @classmethod
    def on_top(cls, position: AbsolutePosition) -> Positioned:
        """A marker whose child is drawn above all other children of the stack."""
        return cls(position, True)

    @staticmethod
    def get(child: LayoutableChild) -> Positioned | None:
        """The Positioned marker of ``child``, if it has one."""
        result = child.query(_POSITIONED_QUERY)
        return result if isinstance(result, Positioned) else None

    def _child(self, children: LayoutableChildren) -> LayoutableChild | None:
        if len(children) > 1:
            raise LayoutError(f"Positioned can have zero or one child but has {len(children)}")
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
        if isinstance(query, _PositionedQuery):
            return self
        child = self._child(children)
        return None if child is None else child.query(query)


class StackFit(enum.Enum):
    """How a stack passes its constraints to non-positioned children."""

    TIGHT = "tight"
    LOOSE = "loose"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class Stack(Layout):
    """Lays children on top of each other, later ones above earlier ones."""

    fit: StackFit = StackFit.LOOSE
    alignment: Alignment = field(default_factory=Alignment.center)

    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        if self.fit is StackFit.TIGHT:
            non_positioned_constraint = constraint.tighten()
        elif self.fit is StackFit.LOOSE:
            non_positioned_constraint = constraint.loosen()
        else:
            non_positioned_constraint = constraint

        max_size = Size.zero()
        z_top: tuple[LayoutableChild, Positioned] | None = None
        for child in children:
            marker = Positioned.get(child)
            if marker is None:
                size, num_z_index = child.layout(non_positioned_constraint)
                max_size = max_size.max(size)
                child.z_index_offset(num_z_index)
            elif marker.z_top:
                if z_top is not None:
                    raise LayoutError(
                        "can only have a single z_top per stack, but got at least two: "
                        f"{z_top[0]!r}, {child!r}"
                    )
                z_top = (child, marker)

        if self.fit is StackFit.TIGHT:
            our_size = non_positioned_constraint.constrain(max_size)
        else:
            our_size = constraint.constrain(max_size)
        positioned_constraint = BoxConstraints.tight_for(our_size).loosen()

        z_index_offset = 0
        for child in children:
            marker = Positioned.get(child)
            if marker is None:
                child.pos(self.alignment.position(our_size, child.size()))
                num_z_index = child.z_index_offset()
            elif not marker.z_top:
                _, num_z_index = child.layout(positioned_constraint)
                child.pos(marker.position.position(our_size))
            else:
                num_z_index = 0
            child.z_index_offset(z_index_offset)
            z_index_offset += num_z_index

        if z_top is not None:
            child, marker = z_top
            _, num_z_index = child.layout(positioned_constraint)
            child.pos(marker.position.position(our_size))
            child.z_index_offset(z_index_offset)
            z_index_offset += num_z_index

        return our_size, z_index_offset