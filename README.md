# rutterlayout

A small box-constraint layout engine. A parent hands each child a
`BoxConstraints`. The child picks a `Size` inside those constraints, and the
parent places the child at an `Offset`. Nodes live in a `Layouter`. The
layouter keeps the tree, caches the results and lays out again only what has
changed.

The package has no dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building a tree

```python
from rutterlayout.geometry import BoxConstraints, Offset, Size
from rutterlayout.layouter import Layouter
from rutterlayout.basic import SizedBox
from rutterlayout.flex import (
    Column, CrossAxisAlignment, Flex, FlexFit, Flexible,
    MainAxisAlignment, MainAxisSize,
)

layouter = Layouter()

column = layouter.add_node(Column(
    cross_axis_alignment=CrossAxisAlignment.CENTER,
    main_axis_alignment=MainAxisAlignment.START,
    main_axis_size=MainAxisSize.MAX,
))
header = layouter.add_node(SizedBox.from_size(Size(40.0, 20.0)))
body = layouter.add_node(SizedBox.constrained(BoxConstraints(10.0, 40.0, 10.0, 25.0)))
flex = layouter.add_node(Flexible(Flex(1.0, FlexFit.TIGHT)))

layouter.set_children(flex, [body])
layouter.set_children(column, [header, flex])

layouter.do_layout(BoxConstraints.tight_for(Size(100.0, 100.0)), Offset.zero(), column)

offset, size, obj = layouter.get_layout(body)
```

`Layouter` methods:

- `add_node(layout)` returns the index of a new, detached node.
- `set_children(parent, indices)` makes the given nodes the ordered children of
  `parent`.
- `remove(idx)` frees the slot of a node.
- `get_layout(idx)` returns the absolute position, the size and the layout
  object of a node.
- `iter(idx)` walks the tree depth first, starting at `idx`. It yields pairs of
  a `LayoutItem` and a `LayoutIterDirection`, which is `DOWN`, `RIGHT` or `UP`
  and tells how the walk reached that node. A `LayoutItem` holds the size,
  absolute position, index, z index offset and layout object.

`set_node(idx, layout)` replaces the layout of a node. If the new layout is not
equal to the old one, the layouter marks the path to the root as dirty.
`set_children` does the same when the number of children changes or a child is
dirty. The next `do_layout` runs layout again only for dirty nodes and for nodes
whose incoming constraints changed. Every other node reuses its cached result.
Absolute positions are updated only where a relative position changed.

## Geometry

`rutterlayout.geometry` holds immutable dataclasses:

- `Offset`, which supports `+`.
- `Size`.
- `EdgeInsets`, with the constructors `all`, `horizontal`, `vertical`,
  `symmetric` and `specific`.
- `BoxConstraints`. By default it is `0 ≤ width, height ≤ inf`. Helpers such as
  `tight`, `tight_for`, `loosen`, `tighten`, `deflate`, `enforce`, `constrain`
  and the `with_*` variants return new constraints or sizes.

Clamping against an inverted range raises `ValueError`.

## Layouts

- `rutterlayout.basic` provides:
  - `Maximal`, `Transparent`, `SizedBox` and `ClosureLayout`.
  - The single-child layouts built by `align`, `padding`,
    `fractionally_sized_box` and `aspect_ratio_box`. Each of these builds a
    `SingleChildLayouter`.
  - Positions given by `Alignment` or by `AbsolutePosition`, which is made of
    `Paxel` and `Fraction` dimensions.

  A `ClosureLayout` never compares equal to another layout, so it is always
  treated as changed.
- `rutterlayout.stack` provides `Stack` with a `StackFit` (`TIGHT`, `LOOSE` or
  `PASSTHROUGH`) and `Positioned` children. At most one of those children may be
  created with `Positioned.on_top`, which draws it above the rest.
- `rutterlayout.flex` provides `Column` and `Row`. Their `Flexible` children
  share out the remaining main-axis space by their `Flex` factor. Placement is
  set by `CrossAxisAlignment`, `MainAxisAlignment` and `MainAxisSize`.

To write a layout of your own, subclass `Layout` and implement
`layout(constraint, children)`. It returns the chosen size and the number of z
indices used.

Inside `layout`:

- Lay a child out with `child.layout(...)`.
- Place it with `child.pos(...)`.
- Set its z index offset with `child.z_index_offset(...)`.

You may also override `query(query, children)` to answer questions from a
parent layout.

Misuse of the tree raises `LayoutError`. Examples are giving a single-child
layout two children, attaching a node to a second parent, and using an
unbounded column or row with tight flex children.

## What it does not do

This package only computes sizes and positions. It does not:

- draw anything or handle input;
- provide widgets;
- measure text.