import pytest

from pychip8.video import SCREEN_HEIGHT, SCREEN_WIDTH, FrameBuffer


def test_new_framebuffer_is_blank_and_dirty() -> None:
    framebuffer = FrameBuffer()

    assert (framebuffer.width, framebuffer.height) == (SCREEN_WIDTH, SCREEN_HEIGHT) == (64, 32)
    assert framebuffer.lit_count() == 0
    assert framebuffer.dirty


def test_draw_sets_pixels_msb_first() -> None:
    framebuffer = FrameBuffer()

    collision = framebuffer.draw_sprite(2, 3, [0b1000_0001])

    assert not collision
    assert framebuffer.get_pixel(2, 3)
    assert framebuffer.get_pixel(9, 3)
    assert not framebuffer.get_pixel(3, 3)
    assert framebuffer.lit_count() == 2


def test_redraw_erases_and_reports_collision() -> None:
    framebuffer = FrameBuffer()
    framebuffer.draw_sprite(0, 0, [0xFF, 0xFF])

    assert framebuffer.draw_sprite(0, 0, [0xFF, 0xFF])
    assert framebuffer.lit_count() == 0


def test_overlap_without_lit_pixels_is_not_collision() -> None:
    framebuffer = FrameBuffer()
    framebuffer.draw_sprite(0, 0, [0xF0])

    assert not framebuffer.draw_sprite(0, 0, [0x0F])
    assert framebuffer.lit_count() == 8


def test_origin_wraps_around_screen() -> None:
    framebuffer = FrameBuffer()

    framebuffer.draw_sprite(64 + 1, 32 + 2, [0x80])

    assert framebuffer.get_pixel(1, 2)


def test_pixels_past_edge_are_clipped() -> None:
    framebuffer = FrameBuffer()

    framebuffer.draw_sprite(60, 30, [0xFF, 0xFF, 0xFF, 0xFF])

    assert framebuffer.lit_count() == 4 * 2
    assert not framebuffer.get_pixel(0, 30)
    assert not framebuffer.get_pixel(60, 0)


def test_wrap_mode_wraps_pixels() -> None:
    framebuffer = FrameBuffer(wrap=True)

    framebuffer.draw_sprite(60, 31, [0xFF, 0xFF])

    assert framebuffer.lit_count() == 16
    assert framebuffer.get_pixel(3, 31)
    assert framebuffer.get_pixel(0, 0)


def test_clear_and_mark_clean() -> None:
    framebuffer = FrameBuffer()
    framebuffer.draw_sprite(0, 0, [0xFF])
    framebuffer.mark_clean()
    assert not framebuffer.dirty

    framebuffer.clear()

    assert framebuffer.dirty
    assert framebuffer.lit_count() == 0


def test_get_pixel_rejects_outside_coordinates() -> None:
    with pytest.raises(IndexError):
        FrameBuffer().get_pixel(64, 0)


def test_rows_render_as_text() -> None:
    framebuffer = FrameBuffer(8, 2)
    framebuffer.draw_sprite(0, 1, [0b1010_0000])

    assert framebuffer.rows() == ["........", "#.#....."]
