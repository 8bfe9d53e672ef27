"""Tile several report photos into one JPEG so the classifier sees them together."""
import base64
import io
import logging
import math
from typing import Iterable, Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from civicfeed.services.classifier import parse_data_url

logger = logging.getLogger("civicfeed.collage")


def grid_shape(count: int) -> tuple[int, int]:
    """(cols, rows) for ``count`` tiles: ceil(sqrt(n)) columns."""
    if count <= 0:
        return 0, 0
    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    return cols, rows


def _cover(img: Image.Image, tile: int) -> Image.Image:
    # center-crop to a square, then resize
    return ImageOps.fit(img, (tile, tile))


def _decode(data_url: str) -> Optional[Image.Image]:
    parsed = parse_data_url(data_url)
    if not parsed:
        return None
    try:
        img = Image.open(io.BytesIO(parsed[1]))
        img.load()
        return img.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.warning(f"Skipping undecodable collage tile: {e}")
        return None


def build_collage(data_urls: Iterable[str], tile_size: int = 256, max_images: int = 9,
                  quality: int = 90) -> Optional[str]:
    """Return a JPEG data URL of the photos laid out in a grid, or None if none decode."""
    images = [img for img in (_decode(u) for u in list(data_urls)[:max_images]) if img is not None]
    if not images:
        return None

    cols, rows = grid_shape(len(images))
    canvas = Image.new("RGB", (cols * tile_size, rows * tile_size), (255, 255, 255))
    for idx, img in enumerate(images):
        x = (idx % cols) * tile_size
        y = (idx // cols) * tile_size
        canvas.paste(_cover(img, tile_size), (x, y))

    buf = io.BytesIO()
    canvas.save(buf, format="JPEG", quality=quality)
    return "data:image/jpeg;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def composite_image(image_base64: Optional[str], images: list[str],
                    tile_size: int = 256, max_images: int = 9) -> Optional[str]:
    """Single image passes through; several are flattened into a collage."""
    if images:
        if len(images) == 1 and not image_base64:
            return images[0]
        urls = ([image_base64] if image_base64 else []) + list(images)
        return build_collage(urls, tile_size=tile_size, max_images=max_images)
    return image_base64 or None
