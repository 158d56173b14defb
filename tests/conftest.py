import io

import pytest
from PIL import Image


@pytest.fixture
def red_png():
    """A real 5x5 red image as produced by Pillow."""
    buffer = io.BytesIO()
    Image.new('RGB', (5, 5), 'red').save(buffer, format='PNG')

    return buffer.getvalue()


@pytest.fixture
def red_png_path(tmp_path, red_png):
    path = tmp_path / 'red.png'
    path.write_bytes(red_png)

    return path
