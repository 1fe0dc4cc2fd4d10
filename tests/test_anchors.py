import pytest

from color_path.anchors import AnchorSet
from color_path.errors import AnchorNotFound, MinimumAnchors


def make_set(**kw):
    return AnchorSet([(0, 0.8, 0.5), (120, 0.5, 0.3), (240, 1.0, 0.7)], **kw)


def test_needs_two_anchors():
    with pytest.raises(MinimumAnchors):
        AnchorSet([(0, 1, 0.5)])


def test_colors_are_normalized():
    s = AnchorSet([(-20, 1.5, -0.2), (400, 0.5, 0.5)])
    assert s.colors == [(340.0, 1.0, 0.0), (40.0, 0.5, 0.5)]


def test_add_by_color_appends_and_bumps_revision():
    s = make_set()
    rev = s.revision
    p = s.add(color=(60, 0.2, 0.9))
    assert s[-1] is p
    assert len(s) == 4
    assert s.revision > rev


def test_add_by_position_reverse_derives_color():
    s = make_set()
    p = s.add(position=(0.5, 1.0, 0.25))
    assert p.color == pytest.approx((90.0, 1.0, 0.25))


def test_add_by_position_clamps_to_disc():
    s = make_set()
    p = s.add(position=(2.0, 0.5, 1.3), clamp=True)
    assert p.color == pytest.approx((0.0, 1.0, 1.0))
    assert p.position == pytest.approx((1.0, 0.5, 1.0))


def test_add_inverted_position():
    s = make_set(inverted_lightness=True)
    p = s.add(position=(0.5, 0.5, 0.2))
    assert p.color[2] == pytest.approx(0.8)
    assert p.z == pytest.approx(0.2)


def test_insert_at():
    s = make_set()
    p = s.add(color=(30, 0.5, 0.5), insert_at=1)
    assert s[1] is p


def test_add_requires_color_or_position():
    with pytest.raises(ValueError):
        make_set().add()


def test_remove_by_identity_handle_and_index():
    s = AnchorSet([(0, 1, 0.5), (90, 1, 0.5), (180, 1, 0.5), (270, 1, 0.5)])
    a, b = s[0], s[1]
    s.remove(point=a)
    assert a not in s.points
    s.remove(point=b.handle)
    assert b not in s.points
    with pytest.raises(MinimumAnchors):
        s.remove(index=0)
    assert len(s) == 2


def test_remove_unknown():
    s = make_set()
    other = AnchorSet([(0, 1, 0.5), (10, 1, 0.5)])
    with pytest.raises(AnchorNotFound):
        s.remove(point=other[0])
    with pytest.raises(AnchorNotFound):
        s.remove(index=7)
    with pytest.raises(AnchorNotFound):
        s.remove()


def test_minimum_guard_keeps_two():
    s = make_set()
    s.remove(index=-1)
    with pytest.raises(MinimumAnchors):
        s.remove(index=0)
    with pytest.raises(MinimumAnchors):
        s.remove(index=0)
    assert len(s) == 2


def test_update_preserves_identity():
    s = make_set()
    p = s[1]
    q = s.update(point=p, color=(10, 0.1, 0.2))
    assert q is p is s[1]
    assert p.color == (10.0, 0.1, 0.2)
    s.update(point=p.handle, position=(1.0, 0.5, 0.4))
    assert p.color == pytest.approx((0.0, 1.0, 0.4))


def test_update_unknown():
    s = make_set()
    with pytest.raises(AnchorNotFound):
        s.update(point=999, color=(0, 0, 0))


def test_position_follows_color():
    s = make_set()
    p = s[0]
    before = p.position
    s.update(point=p, color=(180, 0.8, 0.5))
    assert p.position != before
    assert p.position == pytest.approx((0.1, 0.5, 0.5))


def test_nearest_anchor():
    s = AnchorSet([(180, 0.8, 0.5), (0, 0.8, 0.5)])
    # anchors at (0.1, 0.5) and (0.9, 0.5)
    assert s[0].position[:2] == pytest.approx((0.1, 0.5))
    assert s.nearest((0.12, 0.5), max_distance=0.05) is s[0]
    assert s.nearest((0.5, 0.5), max_distance=0.05) is None
    assert s.nearest((0.88, 0.5, 0.0), max_distance=0.05) is s[1]


def test_nearest_ignores_height():
    s = AnchorSet([(0, 0.8, 0.0), (180, 0.8, 1.0)])
    assert s.nearest((0.9, 0.5, 1.0), max_distance=0.01) is s[0]


def test_nearest_prefers_closest():
    s = AnchorSet([(0, 0.8, 0.5), (0, 0.7, 0.5)])
    # x = 0.9 and 0.85
    assert s.nearest((0.86, 0.5), max_distance=0.1) is s[1]


def test_shift_hue():
    s = make_set()
    original = s.colors
    s.shift_hue(360)
    assert s.colors == pytest.approx(original)
    s.shift_hue(-10)
    assert s[0].color[0] == pytest.approx(350.0)
    s.shift_hue(10)
    assert s.colors == pytest.approx(original)
    assert [c[1:] for c in s.colors] == [c[1:] for c in original]


def test_inversion_round_trip_is_exact():
    s = make_set()
    before = [p.position for p in s]
    s.set_inverted_lightness(True)
    assert [p.z for p in s] == pytest.approx([1 - c[2] for c in s.colors])
    s.set_inverted_lightness(False)
    assert [p.position for p in s] == before
