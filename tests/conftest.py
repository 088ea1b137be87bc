import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def write_image(tmp_path):
    """Save an image built from nested pixel lists (rows of RGB / RGBA) and return its path."""
    def _write(pixels, name='source.png'):
        path = tmp_path / name
        Image.fromarray(np.array(pixels, dtype=np.uint8)).save(path)
        return str(path)
    return _write


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
