"""Layout tree storage, incremental layout and tree traversal."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .geometry import BoxConstraints, Offset, Size

__all__ = [
    "LayoutError",
    "Layout",
    "LayoutIterDirection",
    "LayoutItem",
    "LayoutableChildren",
    "LayoutableChild",
    "Layouter",
]

T = TypeVar("T", bound="Layout")


class LayoutError(Exception):
    """Raised when the layout tree is used inconsistently."""


class Layout(ABC):
    """A layout algorithm attached to a node of the layout tree.

    Two layouts that compare equal are treated as interchangeable, so a node
    whose layout is replaced by an equal one does not have to be laid out again.
    """

    @abstractmethod
    def layout(self, constraint: BoxConstraints, children: LayoutableChildren) -> tuple[Size, int]:
        """Lay out the children and return the own size and the number of z indices used."""

    def query(self, query: Any, children: LayoutableChildren) -> Any | None:
        """Answer a query about this node; the default knows nothing."""
        return None


class LayoutIterDirection(enum.Enum):
    """How a tree walk arrived at a node."""

    DOWN = "down"
    UP = "up"
    RIGHT = "right"


@dataclass(frozen=True)
class LayoutItem(Generic[T]):
    """The result of layout for one node."""

    size: Size
    pos: Offset
    idx: int
    z_index_offset: int
    obj: T


@dataclass
class _Node:
    obj: Layout
    child: int | None = None
    num_children: int = 0
    next_sibling: int | None = None
    parent: int | None = None
    any_dirty_children: bool = False
    input_constraint: BoxConstraints | None = None
    size: Size | None = None
    num_z_index: int | None = None
    z_index_offset: int | None = None
    pos: Offset | None = None
    abs_pos: Offset | None = None
    dirty_abs_pos: bool = True
    any_dirty_child_abs_pos: bool = True


class LayoutableChildren:
    """The children of a node, as seen by that node's layout."""

    def __init__(self, layouter: Layouter, parent_idx: int) -> None:
        parent = layouter._node(parent_idx)
        self._layouter = layouter
        self._first = parent.child
        self._len = parent.num_children

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[LayoutableChild]:
        pos = self._first
        while pos is not None:
            yield LayoutableChild(self._layouter, pos)
            pos = self._layouter._node(pos).next_sibling

    def __repr__(self) -> str:
        return f"LayoutableChildren(first={self._first!r}, len={self._len})"


class LayoutableChild:
    """Handle through which a layout sizes and places one of its children."""

    def __init__(self, layouter: Layouter, idx: int) -> None:
        self._layouter = layouter
        self.idx = idx

    @property
    def _node(self) -> _Node:
        return self._layouter._node(self.idx)

    def layout(self, constraint: BoxConstraints) -> tuple[Size, int]:
        """Lay out the child, reusing the previous result when nothing changed."""
        node = self._node
        if (
            not node.any_dirty_children
            and node.input_constraint == constraint
            and node.size is not None
            and node.num_z_index is not None
        ):
            return node.size, node.num_z_index

        size, num_z_index = node.obj.layout(
            constraint, LayoutableChildren(self._layouter, self.idx)
        )
        node.input_constraint = constraint
        node.any_dirty_children = False
        node.size = size
        node.num_z_index = num_z_index
        return size, num_z_index

    def pos(self, pos: Offset) -> None:
        """Place the child at ``pos`` relative to its parent."""
        node = self._node
        old_pos = node.pos
        node.pos = pos
        if old_pos != pos:
            node.dirty_abs_pos = True
            parent = node.parent
            while parent is not None:
                parent_node = self._layouter._node(parent)
                parent_node.any_dirty_child_abs_pos = True
                parent = parent_node.parent

    def z_index_offset(self, value: int | None = None) -> int:
        """Set the child's z index offset if ``value`` is given; return the current one."""
        node = self._node
        if value is not None:
            node.z_index_offset = value
            return value
        if node.z_index_offset is None:
            raise LayoutError(f"node {self.idx} has no z index offset yet")
        return node.z_index_offset

    def size(self) -> Size:
        """The size determined by the last call to :meth:`layout`."""
        size = self._node.size
        if size is None:
            raise LayoutError(f"node {self.idx} has not been laid out yet")
        return size

    def query(self, query: Any) -> Any | None:
        """Forward a query to the child's layout."""
        return self._node.obj.query(query, LayoutableChildren(self._layouter, self.idx))

    def __repr__(self) -> str:
        return f"LayoutableChild(idx={self.idx!r}, obj={self._node.obj!r})"


class Layouter(Generic[T]):
    """Holds a tree of layout nodes and lays it out incrementally."""

    def __init__(self) -> None:
        self._nodes: list[_Node | None] = []
        self._free: list[int] = []

    def _node(self, idx: int) -> _Node:
        if 0 <= idx < len(self._nodes):
            node = self._nodes[idx]
            if node is not None:
                return node
        raise LayoutError(f"no node with index {idx}")

    def add_node(self, layoutable: T) -> int:
        """Add a detached node and return its index."""
        node = _Node(layoutable)
        if self._free:
            idx = self._free.pop()
            self._nodes[idx] = node
        else:
            idx = len(self._nodes)
            self._nodes.append(node)
        return idx

    def set_node(self, idx: int, layoutable: T) -> None:
        """Replace a node's layout, marking it dirty unless the new one is equal."""
        node = self._node(idx)
        dirty = not (node.obj == layoutable)
        node.obj = layoutable
        if dirty:
            self._propagate_dirty(idx)

    def _propagate_dirty(self, idx: int) -> None:
        current: int | None = idx
        while current is not None:
            node = self._node(current)
            if node.any_dirty_children:
                break
            node.any_dirty_children = True
            current = node.parent

    def set_children(self, parent_idx: int, children: Iterable[int]) -> None:
        """Make ``children`` the ordered children of ``parent_idx``."""
        parent = self._node(parent_idx)
        length = 0
        any_child_dirty = False
        last: _Node | None = None

        for child_idx in children:
            child = self._node(child_idx)
            if last is None:
                parent.child = child_idx
            else:
                last.next_sibling = child_idx
            length += 1
            any_child_dirty = any_child_dirty or child.any_dirty_children
            if child.parent is not None and child.parent != parent_idx:
                raise LayoutError(
                    f"node {child_idx} already has parent {child.parent}, not {parent_idx}"
                )
            child.parent = parent_idx
            last = child

        if last is None:
            parent.child = None
        else:
            last.next_sibling = None

        dirty = parent.num_children != length or any_child_dirty
        parent.num_children = length
        if dirty:
            self._propagate_dirty(parent_idx)

    def remove(self, idx: int) -> None:
        """Remove a node from storage."""
        self._node(idx)
        self._nodes[idx] = None
        self._free.append(idx)

    def do_layout(self, constraints: BoxConstraints, root_pos: Offset, idx: int) -> None:
        """Lay out the subtree at ``idx`` and place it at ``root_pos``."""
        child = LayoutableChild(self, idx)
        child.layout(constraints)
        child.pos(Offset.zero())
        child.z_index_offset(1)
        self._propagate_abs_pos(idx, root_pos, True)

    def _propagate_abs_pos(self, root: int, offset: Offset, dirty: bool) -> None:
        node = self._node(root)
        if node.dirty_abs_pos or dirty:
            if node.pos is None:
                raise LayoutError(f"node {root} has not been positioned")
            new_abs_pos = node.pos + offset
            if new_abs_pos != node.abs_pos:
                node.abs_pos = new_abs_pos
                dirty = True
            else:
                dirty = False
            my_offset = new_abs_pos
        else:
            dirty = False
            if node.abs_pos is None:
                raise LayoutError(f"node {root} has no absolute position")
            my_offset = node.abs_pos

        if dirty or node.any_dirty_child_abs_pos:
            child = node.child
            while child is not None:
                self._propagate_abs_pos(child, my_offset, dirty)
                child = self._node(child).next_sibling

        node.any_dirty_child_abs_pos = False
        node.dirty_abs_pos = False

    def _item(self, idx: int) -> LayoutItem[T]:
        node = self._node(idx)
        if node.size is None or node.abs_pos is None or node.z_index_offset is None:
            raise LayoutError(f"node {idx} has not been laid out")
        return LayoutItem(node.size, node.abs_pos, idx, node.z_index_offset, node.obj)

    def iter(self, idx: int) -> Iterator[tuple[LayoutItem[T], LayoutIterDirection]]:
        """Walk the tree from ``idx``, yielding each visit with how it was reached."""
        next_pos: int | None = idx
        direction = LayoutIterDirection.DOWN
        while next_pos is not None:
            current = next_pos
            led_here = direction
            node = self._node(current)
            if led_here in (LayoutIterDirection.DOWN, LayoutIterDirection.RIGHT) and (
                node.child is not None
            ):
                next_pos = node.child
                direction = LayoutIterDirection.DOWN
            elif node.next_sibling is not None:
                next_pos = node.next_sibling
                direction = LayoutIterDirection.RIGHT
            else:
                next_pos = node.parent
                direction = LayoutIterDirection.UP
            yield self._item(current), led_here

    def get_layout(self, idx: int) -> tuple[Offset, Size, T]:
        """Absolute position, size and layout object of a laid-out node."""
        node = self._node(idx)
        if node.abs_pos is None or node.size is None:
            raise LayoutError(f"node {idx} has not been laid out")
        return node.abs_pos, node.size, node.obj