import io

import pytest
from PIL import Image

from potatocat.meme import CompositingMemeGenerator


def solid_image(width, height, color=(255, 200, 100, 255)):
    """A solid-colour RGBA test image."""
    return Image.new("RGBA", (width, height), color)


def png_bytes(width=8, height=8, color=(255, 0, 0, 255)):
    buffer = io.BytesIO()
    solid_image(width, height, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def potato_image():
    return solid_image(200, 200, (255, 200, 100, 255))


@pytest.fixture
def cat_image():
    return solid_image(640, 480, (100, 100, 100, 255))


@pytest.fixture(scope="module")
def generator():
    return CompositingMemeGenerator()
