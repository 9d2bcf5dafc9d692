"""
Pytest configuration and fixtures for Image Transform tests
"""

import numpy as np
import pytest
from PIL import Image

from services.image_engine import ImageEngine

RED = (255, 0, 0)
BLUE = (0, 0, 255)


@pytest.fixture
def rgb_image():
    """Factory for a solid RGB array with an optional square patch"""

    def _make(width, height, color=RED, patch_color=None, patch=(0, 0, 0, 0)):
        image = np.zeros((height, width, 3), dtype=np.uint8)
        image[:, :] = color
        if patch_color is not None:
            x, y, w, h = patch
            image[y : y + h, x : x + w] = patch_color
        return image

    return _make


@pytest.fixture
def write_image():
    """Factory writing a NumPy array to disk with Pillow"""

    def _write(path, pixels, format="PNG", dpi=None):
        path.parent.mkdir(parents=True, exist_ok=True)
        save_kwargs = {"format": format}
        if dpi is not None:
            save_kwargs["dpi"] = dpi
        Image.fromarray(pixels).save(path, **save_kwargs)
        return path

    return _write


@pytest.fixture
def bmp_dir(tmp_path, rgb_image, write_image):
    """Working directory with one red-background bitmap"""
    pixels = rgb_image(8, 6, color=RED, patch_color=BLUE, patch=(2, 2, 3, 2))
    write_image(tmp_path / "a.bmp", pixels, format="BMP", dpi=(96, 96))
    return tmp_path


@pytest.fixture
def png_tree(tmp_path, rgb_image, write_image):
    """Nested working directory with one 16x16 and one 32x32 PNG"""
    write_image(tmp_path / "x" / "img.png", rgb_image(16, 16, color=RED, patch_color=BLUE, patch=(0, 0, 8, 8)), dpi=(72, 72))
    write_image(tmp_path / "y" / "img.png", rgb_image(32, 32, color=BLUE))
    return tmp_path


@pytest.fixture
def engine(tmp_path):
    """Create ImageEngine working on the test's temporary directory"""
    return ImageEngine(working_path=tmp_path)


@pytest.fixture
def recorder():
    """Listener that records every event it receives"""

    class Recorder:
        def __init__(self):
            self.events = []

        def __call__(self, event):
            self.events.append(event)

    return Recorder()
