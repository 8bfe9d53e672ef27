import base64
import io

import pytest
from PIL import Image

from civicfeed.services.classifier import parse_data_url
from civicfeed.services.collage import build_collage, composite_image, grid_shape


def png_data_url(size=(40, 20), color=(200, 30, 30)):
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode()


def open_data_url(data_url):
    mime, raw = parse_data_url(data_url)
    return mime, Image.open(io.BytesIO(raw))


@pytest.mark.parametrize("count,shape", [
    (0, (0, 0)),
    (1, (1, 1)),
    (2, (2, 1)),
    (3, (2, 2)),
    (4, (2, 2)),
    (5, (3, 2)),
    (9, (3, 3)),
])
def test_grid_shape(count, shape):
    assert grid_shape(count) == shape


def test_three_images_make_two_by_two_grid():
    urls = [png_data_url(), png_data_url((10, 80)), png_data_url((300, 300))]
    mime, img = open_data_url(build_collage(urls, tile_size=256))
    assert mime == "image/jpeg"
    assert img.size == (512, 512)


def test_collage_caps_image_count():
    urls = [png_data_url() for _ in range(12)]
    _, img = open_data_url(build_collage(urls, tile_size=32, max_images=9))
    assert img.size == (96, 96)


def test_undecodable_tiles_are_skipped():
    urls = [png_data_url(), "data:image/png;base64,bm90IGFuIGltYWdl", "not a data url"]
    _, img = open_data_url(build_collage(urls, tile_size=64))
    assert img.size == (64, 64)


def test_nothing_decodable_returns_none():
    assert build_collage(["garbage", "data:image/png;base64,AAAA"]) is None
    assert build_collage([]) is None


def test_composite_single_image_passes_through():
    url = png_data_url()
    assert composite_image(url, []) == url
    assert composite_image(None, [url]) == url
    assert composite_image(None, []) is None


def test_composite_merges_primary_and_extra_images():
    combined = composite_image(png_data_url(), [png_data_url()], tile_size=32)
    _, img = open_data_url(combined)
    assert img.size == (64, 32)


@pytest.fixture
def small_pixel_limit(monkeypatch):
    # images over twice this many pixels trip Pillow's decompression bomb guard
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)


def bomb_data_url():
    buf = io.BytesIO()
    Image.new("1", (100, 100)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode()


def test_oversized_tile_is_skipped(small_pixel_limit):
    _, img = open_data_url(build_collage([png_data_url((20, 20)), bomb_data_url()], tile_size=16))
    assert img.size == (16, 16)


def test_only_oversized_tiles_returns_none(small_pixel_limit):
    assert build_collage([bomb_data_url(), bomb_data_url()]) is None


def test_extreme_aspect_ratio_fills_one_tile():
    _, img = open_data_url(build_collage([png_data_url((1, 4000))], tile_size=32))
    assert img.size == (32, 32)
