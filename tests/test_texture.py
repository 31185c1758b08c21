import numpy as np
import pytest
from PIL import Image

from sodarender.texture import Texture2D


def test_new_texture_has_size_and_rgba_storage():
    texture = Texture2D(2, 3)
    assert (texture.width, texture.height) == (2, 3)
    assert texture.channels == 4
    assert texture.pixels.shape == (3, 2, 4)
    assert texture.path == ""


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-2, 2)])
def test_invalid_size_rejected(width, height):
    with pytest.raises(ValueError):
        Texture2D(width, height)


def test_set_data_whole_texture():
    texture = Texture2D(1, 1)
    texture.set_data(b"\xff\xff\xff\xff")
    assert texture.pixels.tolist() == [[[255, 255, 255, 255]]]


def test_set_data_from_array_round_trip():
    texture = Texture2D(2, 2)
    data = np.arange(16, dtype=np.uint8).reshape(2, 2, 4)
    texture.set_data(data)
    np.testing.assert_array_equal(texture.pixels, data)


@pytest.mark.parametrize("size", [0, 3, 5, 8])
def test_set_data_wrong_size(size):
    texture = Texture2D(1, 1)
    with pytest.raises(ValueError):
        texture.set_data(bytes(size))


def test_pixels_is_a_copy():
    texture = Texture2D(1, 1)
    pixels = texture.pixels
    pixels[0, 0, 0] = 7
    assert texture.pixels[0, 0, 0] == 0


def test_equality_follows_texture_id():
    first = Texture2D(1, 1)
    second = Texture2D(1, 1)
    assert first == first
    assert first != second
    assert first.texture_id != second.texture_id
    assert len({first, second, first}) == 2


def test_bind_and_unbind_slots():
    texture = Texture2D(1, 1)
    texture.bind(3)
    texture.bind()
    assert texture.bound_slots == frozenset({0, 3})
    texture.unbind(3)
    assert texture.bound_slots == frozenset({0})


def test_from_file_rgba_is_flipped(tmp_path):
    red = (255, 0, 0, 255)
    blue = (0, 0, 255, 255)
    image = Image.new("RGBA", (2, 2))
    image.putdata([red, red, blue, blue])
    path = tmp_path / "grid.png"
    image.save(path)

    texture = Texture2D.from_file(path)
    assert (texture.width, texture.height) == (2, 2)
    assert texture.channels == 4
    assert texture.path == str(path)
    assert texture.pixels[0].tolist() == [list(blue), list(blue)]
    assert texture.pixels[1].tolist() == [list(red), list(red)]


def test_from_file_rgb(tmp_path):
    image = Image.new("RGB", (3, 1), (10, 20, 30))
    path = tmp_path / "strip.png"
    image.save(path)

    texture = Texture2D.from_file(path)
    assert texture.channels == 3
    assert texture.pixels.shape == (1, 3, 3)
    assert texture.pixels[0, 2].tolist() == [10, 20, 30]


def test_from_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        Texture2D.from_file(tmp_path / "missing.png")