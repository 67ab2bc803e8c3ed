"""
Unit tests for CompositorService.render.

Checks pixels on the canvas: clearing, the mirrored layer, the natural
layer on top of it and the fading gradient strip.
"""

import numpy as np
import pytest
from PIL import Image

from mirror_flip.models.parameters import Direction
from mirror_flip.services.compositor_service import CompositorService

from conftest import CLEAR, half_filled


def alpha_of(surface):
    return np.asarray(surface)[..., 3]


class TestRenderBasics:
    """Clearing, idempotence and degenerate inputs."""

    def test_no_image_only_clears(self, compositor, surface):
        surface.paste((9, 9, 9, 255), (0, 0, 400, 400))
        compositor.render(surface, None, Direction.BELOW, 61, 0.47, 1.0)
        assert surface.getextrema()[3] == (0, 0)

    def test_render_is_idempotent(self, compositor, surface, wide_image):
        compositor.render(surface, wide_image, Direction.RIGHT, 30, 0.6, 1.4)
        first = surface.tobytes()
        compositor.render(surface, wide_image, Direction.RIGHT, 30, 0.6, 1.4)
        assert surface.tobytes() == first

    def test_previous_frame_does_not_leak(self, compositor, surface, wide_image):
        compositor.render(surface, wide_image, Direction.BELOW, 20, 0.5, 1.0)
        expected = surface.tobytes()
        compositor.render(surface, wide_image, Direction.LEFT, 90, 1.0, 3.0)
        compositor.render(surface, wide_image, Direction.BELOW, 20, 0.5, 1.0)
        assert surface.tobytes() == expected

    def test_accepts_direction_label(self, compositor, surface, wide_image):
        compositor.render(surface, wide_image, "Above", 20, 0.5, 1.0)
        labelled = surface.tobytes()
        compositor.render(surface, wide_image, Direction.ABOVE, 20, 0.5, 1.0)
        assert surface.tobytes() == labelled

    def test_non_rgba_source(self, compositor, surface):
        compositor.render(surface, Image.new("RGB", (50, 50), (0, 255, 0)), Direction.BELOW, 0, 0.5, 1.0)
        assert surface.getpixel((200, 200)) == (0, 255, 0, 255)


class TestImageLayers:
    """The mirrored copy and the natural copy share the centered draw rect."""

    def test_image_fills_only_draw_rect(self, compositor, surface, wide_image):
        compositor.render(surface, wide_image, Direction.BELOW, 0, 0.5, 1.0)
        alpha = alpha_of(surface)
        # draw rect spans rows 100..300
        assert alpha[:100].max() == 0
        assert alpha[300:].max() == 0
        assert alpha[100:300].min() == 255

    def test_zoom_out_shrinks_draw_rect(self, compositor, surface, wide_image):
        compositor.render(surface, wide_image, Direction.BELOW, 0, 0.5, 0.5)
        alpha = alpha_of(surface)
        assert alpha[:, :100].max() == 0
        assert alpha[:, 300:].max() == 0
        assert alpha[150:250, 100:300].min() == 255

    def test_mirror_only_flips_horizontally(self):
        compositor = CompositorService(draw_original=False)
        surface = compositor.create_surface(100)
        compositor.render(surface, half_filled((100, 100), "left"), Direction.RIGHT, 0, 0.5, 1.0)
        assert surface.getpixel((75, 50))[3] == 255
        assert surface.getpixel((25, 50))[3] == 0

    def test_mirror_only_flips_vertically(self):
        compositor = CompositorService(draw_original=False)
        surface = compositor.create_surface(100)
        compositor.render(surface, half_filled((100, 100), "top"), Direction.ABOVE, 0, 0.5, 1.0)
        assert surface.getpixel((50, 75))[3] == 255
        assert surface.getpixel((50, 25))[3] == 0

    def test_original_drawn_over_mirror(self):
        compositor = CompositorService()
        surface = compositor.create_surface(100)
        compositor.render(surface, half_filled((100, 100), "left"), Direction.LEFT, 0, 0.5, 1.0)
        # mirror covers the right half, original the left half
        assert surface.getpixel((25, 50)) == (255, 0, 0, 255)
        assert surface.getpixel((75, 50)) == (255, 0, 0, 255)

    def test_vertical_flip_keeps_columns(self):
        compositor = CompositorService()
        surface = compositor.create_surface(100)
        compositor.render(surface, half_filled((100, 100), "left"), Direction.BELOW, 0, 0.5, 1.0)
        assert surface.getpixel((25, 50)) == (255, 0, 0, 255)
        assert surface.getpixel((75, 50)) == CLEAR


class TestGradient:
    """The gradient strip along the mirror's edge."""

    def test_end_to_end_below(self, compositor, surface, clear_wide_image):
        compositor.render(surface, clear_wide_image, Direction.BELOW, 20, 0.5, 1.0)
        alpha = alpha_of(surface).astype(int)

        assert alpha[:280].max() == 0
        assert alpha[300:].max() == 0
        column = alpha[280:300, 200]
        assert np.all(np.diff(column) >= 0)
        assert column[0] < column[-1]
        assert column[0] <= 4
        assert column[-1] == pytest.approx(0.5 * 255, abs=4)
        # full canvas width
        assert np.all(alpha[299, :] == alpha[299, 0])
        assert surface.getpixel((200, 299))[:3] == (255, 255, 255)

    def test_right_extends_from_right_edge(self, compositor, surface, clear_wide_image):
        compositor.render(surface, clear_wide_image, Direction.RIGHT, 20, 0.5, 1.0)
        alpha = alpha_of(surface).astype(int)
        assert alpha[:, :380].max() == 0
        row = alpha[200, 380:400]
        assert np.all(np.diff(row) >= 0)
        assert row[-1] == pytest.approx(0.5 * 255, abs=4)

    def test_above_fades_downward(self, compositor, surface, clear_wide_image):
        compositor.render(surface, clear_wide_image, Direction.ABOVE, 20, 1.0, 1.0)
        alpha = alpha_of(surface).astype(int)
        column = alpha[100:120, 10]
        assert np.all(np.diff(column) <= 0)
        assert column[0] >= 245
        assert alpha[:100].max() == 0
        assert alpha[120:].max() == 0

    def test_left_fades_rightward(self, compositor, surface, clear_wide_image):
        compositor.render(surface, clear_wide_image, Direction.LEFT, 20, 1.0, 1.0)
        alpha = alpha_of(surface).astype(int)
        row = alpha[50, 0:20]
        assert np.all(np.diff(row) <= 0)
        assert alpha[:, 20:].max() == 0

    @pytest.mark.parametrize("direction", list(Direction))
    def test_zero_offset_paints_nothing(self, compositor, surface, clear_wide_image, direction):
        compositor.render(surface, clear_wide_image, direction, 0, 1.0, 1.0)
        assert surface.getextrema()[3] == (0, 0)

    def test_zero_opacity_leaves_frame_unchanged(self, compositor, surface, wide_image):
        compositor.render(surface, wide_image, Direction.BELOW, 0, 0.5, 1.0)
        without_gradient = surface.tobytes()
        compositor.render(surface, wide_image, Direction.BELOW, 40, 0.0, 1.0)
        assert surface.tobytes() == without_gradient

    def test_gradient_outside_canvas_is_clipped(self, compositor, surface, clear_wide_image):
        # at 3x the mirror's bottom edge lies far below the canvas
        compositor.render(surface, clear_wide_image, Direction.BELOW, 100, 1.0, 3.0)
        assert surface.getextrema()[3] == (0, 0)
