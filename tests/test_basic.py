import math

import pytest

from rutterlayout.basic import (
    AbsolutePosition,
    Alignment,
    AspectRatio,
    BoundedFractionalMaximalSizer,
    ClosureLayout,
    Fraction,
    FractionalSize,
    LoosenConstrainer,
    Maximal,
    PassthroughSizer,
    Paxel,
    SizedBox,
    Transparent,
    align,
    aspect_ratio_box,
    fractionally_sized_box,
    padding,
)
from rutterlayout.geometry import BoxConstraints, EdgeInsets, Offset, Size
from rutterlayout.layouter import Layout, LayoutableChild, Layouter, LayoutError

LOOSE = BoxConstraints(0.0, 100.0, 0.0, 100.0)


def run(root_layout, child_layouts, constraint, root_pos=None):
    layouter = Layouter()
    root = layouter.add_node(root_layout)
    kids = [layouter.add_node(c) for c in child_layouts]
    layouter.set_children(root, kids)
    layouter.do_layout(constraint, root_pos or Offset.zero(), root)
    return layouter, root, kids


class _Answering(Layout):
    def layout(self, constraint, children):
        return Size.zero(), 1

    def query(self, query, children):
        return ("answer", query)


def test_maximal_bounded_takes_max():
    layouter, root, _ = run(Maximal(), [], BoxConstraints(0.0, 50.0, 0.0, 30.0))
    assert layouter.get_layout(root)[1] == Size(50.0, 30.0)


def test_maximal_unbounded_takes_min():
    layouter, root, _ = run(Maximal(), [], BoxConstraints(5.0, math.inf, 7.0, math.inf))
    assert layouter.get_layout(root)[1] == Size(5.0, 7.0)


def test_maximal_with_child_raises():
    with pytest.raises(LayoutError):
        run(Maximal(), [Maximal()], LOOSE)


def test_transparent_passes_through():
    layouter, root, (kid,) = run(
        Transparent(), [SizedBox.from_size(Size(40.0, 20.0))], LOOSE, Offset(3.0, 4.0)
    )
    pos, size, _ = layouter.get_layout(kid)
    assert pos == Offset(3.0, 4.0)
    assert size == Size(40.0, 20.0)
    assert layouter.get_layout(root)[1] == size


def test_transparent_empty_constrains_zero():
    layouter, root, _ = run(Transparent(), [], BoxConstraints(10.0, 100.0, 5.0, 100.0))
    assert layouter.get_layout(root)[1] == Size(10.0, 5.0)


def test_transparent_two_children_raises():
    with pytest.raises(LayoutError):
        run(Transparent(), [Maximal(), Maximal()], LOOSE)


def test_transparent_forwards_query():
    layouter, root, _ = run(Transparent(), [_Answering()], LOOSE)
    assert LayoutableChild(layouter, root).query("q") == ("answer", "q")


def test_transparent_query_without_child_is_none():
    layouter, root, _ = run(Transparent(), [], LOOSE)
    assert LayoutableChild(layouter, root).query("q") is None


def test_sized_box_empty_uses_min():
    box = SizedBox.constrained(BoxConstraints(10.0, 40.0, 10.0, 25.0))
    layouter, root, _ = run(box, [], LOOSE)
    assert layouter.get_layout(root)[1] == Size(10.0, 10.0)


def test_sized_box_child_gets_enforced_constraint():
    box = SizedBox.constrained(BoxConstraints(10.0, 40.0, 10.0, 25.0))
    layouter, root, (kid,) = run(box, [Maximal()], LOOSE)
    assert layouter.get_layout(kid)[1] == Size(40.0, 25.0)
    assert layouter.get_layout(root)[1] == Size(40.0, 25.0)


def test_sized_box_yields_to_tight_parent():
    box = SizedBox.from_size(Size(40.0, 20.0))
    layouter, root, _ = run(box, [], BoxConstraints.tight(100.0, 100.0))
    assert layouter.get_layout(root)[1] == Size(100.0, 100.0)


def test_layouts_compare_by_value():
    assert SizedBox.from_size(Size(1.0, 2.0)) == SizedBox.from_size(Size(1.0, 2.0))
    assert SizedBox.from_size(Size(1.0, 2.0)) != SizedBox.from_size(Size(2.0, 2.0))
    assert Maximal() == Maximal()
    assert Maximal() != Transparent()


def test_absolute_position_dimensions():
    pos = AbsolutePosition(Paxel(7.0), Fraction(0.5))
    assert pos.position(Size(100.0, 100.0)) == Offset(7.0, 50.0)


def test_absolute_position_from_offset_round_trip():
    pos = AbsolutePosition.from_offset(Offset(3.0, 4.0))
    assert pos.position(Size(80.0, 90.0), Size(1.0, 1.0)) == Offset(3.0, 4.0)
    assert AbsolutePosition() == AbsolutePosition.zero()


def test_alignment_top_left_is_origin():
    assert Alignment.top_left().position(Size(100.0, 100.0), Size(40.0, 20.0)) == Offset(0.0, 0.0)


def test_alignment_center_is_midpoint_of_corners():
    outer, inner = Size(100.0, 80.0), Size(40.0, 20.0)
    tl = Alignment.top_left().position(outer, inner)
    br = Alignment.bottom_right().position(outer, inner)
    c = Alignment.center().position(outer, inner)
    assert c == Offset((tl.x + br.x) / 2.0, (tl.y + br.y) / 2.0)
    assert Alignment.center() == Alignment(0.0, 0.0)


def test_alignment_bottom_right_places_inner_at_far_corner():
    outer, inner = Size(100.0, 80.0), Size(40.0, 20.0)
    br = Alignment.bottom_right().position(outer, inner)
    assert br + Offset(inner.width, inner.height) == Offset(outer.width, outer.height)


def test_align_fills_bounded_space():
    layouter, root, (kid,) = run(
        align(Alignment.top_left()), [SizedBox.from_size(Size(40.0, 20.0))],
        BoxConstraints.tight(100.0, 100.0), Offset(2.0, 3.0),
    )
    assert layouter.get_layout(root)[1] == Size(100.0, 100.0)
    assert layouter.get_layout(kid) [0] == Offset(2.0, 3.0)
    assert layouter.get_layout(kid)[1] == Size(40.0, 20.0)


def test_align_with_factors_shrinks_to_child():
    layouter, root, (kid,) = run(
        align(Alignment.center(), 1.0, 1.0), [SizedBox.from_size(Size(40.0, 20.0))], LOOSE
    )
    assert layouter.get_layout(root)[1] == Size(40.0, 20.0)
    assert layouter.get_layout(kid)[0] == Offset.zero()


def test_padding_places_and_inflates():
    insets = EdgeInsets.all(10.0)
    layouter, root, (kid,) = run(padding(insets), [SizedBox.from_size(Size(40.0, 20.0))], LOOSE)
    assert layouter.get_layout(kid)[0] == Offset(10.0, 10.0)
    assert layouter.get_layout(root)[1] == Size(40.0, 20.0).inflate(insets)


def test_padding_without_child_uses_insets_size():
    insets = EdgeInsets.specific(1.0, 2.0, 3.0, 4.0)
    layouter, root, _ = run(padding(insets), [], LOOSE)
    assert layouter.get_layout(root)[1] == insets.total_size()


def test_loosen_constrainer():
    result = LoosenConstrainer().constrain(BoxConstraints.tight(30.0, 40.0))
    assert result == BoxConstraints(0.0, 30.0, 0.0, 40.0)


def test_bounded_fractional_sizer():
    child = Size(40.0, 20.0)
    assert BoundedFractionalMaximalSizer().size(LOOSE, child) == Size(math.inf, math.inf)
    assert BoundedFractionalMaximalSizer().size(BoxConstraints(), child) == child
    assert BoundedFractionalMaximalSizer(2.0, None).size(BoxConstraints(), child) == (
        child.scale_width(2.0)
    )


def test_fractional_size_tightens():
    result = FractionalSize(1.0, None).constrain(LOOSE)
    assert result.min_width == result.max_width == 100.0
    assert result.max_height == 100.0
    assert FractionalSize().constrain(LOOSE) == LOOSE


def test_fractionally_sized_box_empty():
    layouter, root, _ = run(fractionally_sized_box(FractionalSize(1.0, 1.0)), [], LOOSE)
    assert layouter.get_layout(root)[1] == Size(100.0, 100.0)


def test_passthrough_sizer():
    assert PassthroughSizer().size(LOOSE, Size(400.0, 20.0)) == Size(100.0, 20.0)


def test_aspect_ratio_target_keeps_ratio():
    ratio = AspectRatio(2.0)
    size = ratio.target_size(BoxConstraints(0.0, 100.0, 0.0, math.inf))
    assert size.width == 100.0
    assert size.width / size.height == 2.0
    assert ratio.height_for(ratio.width_for(5.0)) == 5.0


def test_aspect_ratio_unbounded_raises():
    with pytest.raises(LayoutError):
        AspectRatio(1.0).target_size(BoxConstraints())


def test_aspect_ratio_box_child_is_tight():
    layouter, root, (kid,) = run(
        aspect_ratio_box(AspectRatio(2.0)), [Maximal()], BoxConstraints(0.0, 100.0, 0.0, math.inf)
    )
    kid_size = layouter.get_layout(kid)[1]
    assert kid_size.width / kid_size.height == 2.0
    assert layouter.get_layout(root)[1] == kid_size


def test_closure_layout_uses_closure():
    layout = ClosureLayout(lambda c: Size(c.max_width, 3.0))
    layouter, root, _ = run(layout, [], LOOSE)
    assert layouter.get_layout(root)[1] == Size(100.0, 3.0)
    assert (layout == layout) is False


def test_closure_layout_rejects_children():
    with pytest.raises(LayoutError):
        run(ClosureLayout(lambda c: Size.zero()), [Maximal()], LOOSE)