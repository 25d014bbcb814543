"""Tests for dashboard canvas backends."""
import pytest
from dashboard_canvas import DashboardCanvas, PILCanvas, TextCanvas


def test_text_canvas_creation():
    """Test creating text canvas."""
    canvas = TextCanvas(width=40, height=5)

    assert isinstance(canvas, DashboardCanvas)
    assert canvas.width == 40
    assert canvas.height == 5
    assert canvas.to_text() == "\n" * 4


def test_text_canvas_draw_text():
    canvas = TextCanvas(width=20, height=3)

    canvas.draw_text(2, 1, "Hello", 255, 128, 64)

    assert canvas.get_row(1) == "  Hello"
    assert canvas.get_row_color(1) == (255, 128, 64)
    assert canvas.get_row_color(0) is None


def test_text_canvas_clips_at_bounds():
    """Test that text canvas respects bounds."""
    canvas = TextCanvas(width=5, height=2)

    canvas.draw_text(3, 0, "abcdef", 255, 255, 255)
    canvas.draw_text(0, 7, "ignored", 255, 255, 255)

    assert canvas.get_row(0) == "   ab"
    assert canvas.get_row(1) == ""


def test_text_canvas_clear_and_fill():
    canvas = TextCanvas(width=10, height=2)
    canvas.fill(10, 20, 30)
    canvas.draw_text(0, 0, "text", 1, 2, 3)

    assert canvas.background == (10, 20, 30)

    canvas.clear()

    assert canvas.get_row(0) == ""
    assert canvas.background == (0, 0, 0)


def test_pil_canvas_size_and_fill():
    canvas = PILCanvas(width=10, height=4, cell_width=7, cell_height=13)

    assert canvas.pixel_size == (70, 52)

    canvas.fill(100, 150, 200)

    assert canvas.get_image().getpixel((0, 0)) == (100, 150, 200)
    assert canvas.get_image().getpixel((69, 51)) == (100, 150, 200)


def test_pil_canvas_draw_text_changes_pixels():
    canvas = PILCanvas(width=10, height=2)
    canvas.draw_text(0, 0, "HELLO", 255, 255, 255)

    image = canvas.get_image()
    assert image.getbbox() is not None


def test_pil_canvas_save_scaled(tmp_path):
    canvas = PILCanvas(width=4, height=2, cell_width=5, cell_height=10, scale=3)
    canvas.fill(0, 255, 0)
    output = tmp_path / "dashboard.png"

    canvas.save(str(output))

    from PIL import Image
    with Image.open(output) as saved:
        assert saved.size == (60, 60)
