import pytest

from mandelthing.errors import DegenerateViewport, DegenerateZoomSelection
from mandelthing.viewport import (
    DEFAULT_VIEWPORT,
    Viewport,
    ViewportController,
    ZoomBox,
    ZoomSelection,
    apply_zoom,
    reset_viewport,
    to_imag,
    to_pixel_x,
    to_pixel_y,
    to_real,
)


W, H = 640, 480


def test_default_viewport():
    vp = reset_viewport()
    assert (vp.top_left_real, vp.top_left_imag) == (-2.5, 1.5)
    assert (vp.bottom_right_real, vp.bottom_right_imag) == (1.5, -1.5)


def test_reset_is_pure():
    assert reset_viewport() == reset_viewport()


def test_mapping_boundaries():
    vp = reset_viewport()
    assert to_real(0, W, vp) == vp.top_left_real
    assert to_real(W, W, vp) == vp.bottom_right_real
    assert to_imag(0, H, vp) == vp.top_left_imag
    assert to_imag(H, H, vp) == vp.bottom_right_imag


def test_image_center_and_origin():
    vp = reset_viewport()
    assert (to_real(320, W, vp), to_imag(240, H, vp)) == (-0.5, 0.0)
    assert (to_real(400, W, vp), to_imag(240, H, vp)) == (0.0, 0.0)


def test_pixel_round_trip():
    vp = Viewport(-0.8, 0.3, -0.6, 0.15)
    for x in (0, 1, 123, 639):
        assert to_pixel_x(to_real(x, W, vp), W, vp) == pytest.approx(x)
    for y in (0, 7, 240, 479):
        assert to_pixel_y(to_imag(y, H, vp), H, vp) == pytest.approx(y)


def test_degenerate_viewport():
    assert Viewport(0.0, 1.0, 0.0, -1.0).is_degenerate()
    assert Viewport(-1.0, 1.0, 1.0, 1.0).is_degenerate()
    assert not DEFAULT_VIEWPORT.is_degenerate()
    with pytest.raises(DegenerateViewport):
        Viewport(0.0, 0.0, 0.0, 0.0).validate()


def test_apply_zoom_uses_far_corner():
    selection = ZoomSelection(left=160, top=120, width=320, height=240)
    vp = apply_zoom(reset_viewport(), selection, W, H)
    assert vp == Viewport(-1.5, 0.75, 0.5, -0.75)


def test_apply_zoom_rejects_empty_selection():
    with pytest.raises(DegenerateZoomSelection):
        apply_zoom(reset_viewport(), ZoomSelection(10, 10, 0, 5), W, H)
    with pytest.raises(DegenerateZoomSelection):
        apply_zoom(reset_viewport(), ZoomSelection(10, 10, 5, 0), W, H)


def test_zoom_box_drag_any_direction():
    box = ZoomBox(W, H)
    box.begin_selection((100, 50))
    assert box.update_selection((60, 80)) == ZoomSelection(60, 50, 40, 30)
    assert box.update_selection((130, 90)) == ZoomSelection(100, 50, 30, 40)
    assert box.end_selection() == ZoomSelection(100, 50, 30, 40)
    assert not box.active


def test_zoom_box_click_without_drag():
    box = ZoomBox(W, H)
    box.begin_selection((100, 50))
    assert box.end_selection() is None
    assert box.current is None


def test_zoom_box_flat_drag_is_discarded():
    box = ZoomBox(W, H)
    box.begin_selection((100, 50))
    box.update_selection((200, 50))
    assert box.end_selection() is None


def test_zoom_box_clamps_to_image():
    box = ZoomBox(W, H)
    box.begin_selection((600, 10))
    assert box.update_selection((1000, -5)) == ZoomSelection(600, 0, 40, 10)


def test_zoom_box_anchor_stays_inside_image():
    box = ZoomBox(W, H)
    box.begin_selection((W + 50, H + 50))
    assert box.anchor == (W - 1, H - 1)


def test_drag_past_corner_reaches_viewport_edge():
    box = ZoomBox(W, H)
    box.begin_selection((320, 0))
    box.update_selection((5000, 5000))
    selection = box.end_selection()
    assert selection == ZoomSelection(320, 0, 320, 480)

    vp = apply_zoom(reset_viewport(), selection, W, H)
    assert (vp.top_left_real, vp.top_left_imag) == (-0.5, 1.5)
    assert (vp.bottom_right_real, vp.bottom_right_imag) == (1.5, -1.5)


def test_update_without_begin():
    assert ZoomBox(W, H).update_selection((5, 5)) is None


def test_controller_zoom_then_reset():
    ctl = ViewportController(W, H)
    ctl.begin_selection((160, 120))
    ctl.update_selection((480, 360))
    assert ctl.end_selection() == ZoomSelection(160, 120, 320, 240)
    assert ctl.visible_box == ZoomSelection(160, 120, 320, 240)

    assert ctl.apply_pending_selection() is True
    assert ctl.viewport == Viewport(-1.5, 0.75, 0.5, -0.75)
    assert ctl.pending_selection is None
    assert ctl.visible_box is None

    # consumed exactly once
    assert ctl.apply_pending_selection() is False
    assert ctl.viewport == Viewport(-1.5, 0.75, 0.5, -0.75)

    assert ctl.reset() == reset_viewport()
    assert ctl.reset() == reset_viewport()


def test_controller_click_does_not_zoom():
    ctl = ViewportController(W, H)
    ctl.begin_selection((160, 120))
    ctl.end_selection()

    assert ctl.pending_selection is None
    assert ctl.apply_pending_selection() is False
    assert ctl.viewport == reset_viewport()


def test_new_click_clears_pending_box():
    ctl = ViewportController(W, H)
    ctl.begin_selection((10, 10))
    ctl.update_selection((50, 50))
    ctl.end_selection()

    ctl.begin_selection((300, 300))
    ctl.end_selection()

    assert ctl.apply_pending_selection() is False
    assert ctl.viewport == reset_viewport()
