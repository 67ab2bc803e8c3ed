"""
Pytest configuration and shared fixtures for Mirror Flip tests.

Fixtures build small in-memory images so no test touches a display
or the customtkinter UI modules.
"""

import io

import pytest
from PIL import Image

from mirror_flip.config import AppConfig
from mirror_flip.services.compositor_service import CompositorService

RED = (255, 0, 0, 255)
CLEAR = (0, 0, 0, 0)


def png_bytes(image):
    """Encode a PIL image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def half_filled(size, half, color=RED):
    """
    RGBA image with one half filled with `color`, the other half transparent.

    Args:
        size: (width, height)
        half: "left" or "top"
    """
    width, height = size
    image = Image.new("RGBA", size, CLEAR)
    if half == "left":
        image.paste(color, (0, 0, width // 2, height))
    else:
        image.paste(color, (0, 0, width, height // 2))
    return image


@pytest.fixture
def config():
    """Default configuration (400 px canvas)."""
    return AppConfig()


@pytest.fixture
def compositor():
    return CompositorService()


@pytest.fixture
def surface(compositor, config):
    """Blank canvas matching the default configuration."""
    return compositor.create_surface(config.canvas_size)


@pytest.fixture
def wide_image():
    """Opaque 200x100 image, the end-to-end sample size."""
    return Image.new("RGBA", (200, 100), (30, 120, 200, 255))


@pytest.fixture
def clear_wide_image():
    """Fully transparent 200x100 image: only the gradient shows up on the canvas."""
    return Image.new("RGBA", (200, 100), CLEAR)


class DeferredScheduler:
    """Collects scheduled callbacks until `run_all` is called, like an idle queue."""

    def __init__(self):
        self.queue = []

    def __call__(self, callback):
        self.queue.append(callback)

    def run_all(self):
        while self.queue:
            self.queue.pop(0)()


@pytest.fixture
def deferred():
    return DeferredScheduler()
