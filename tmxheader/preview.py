"""
Layer preview - draws a map's decoded tile layers into a PNG.

Each tile id gets a stable colour; layers are drawn in order so later
layers cover earlier ones, and empty cells (gid 0) stay transparent. The
image is meant for checking a conversion at a glance, not for rendering
the actual tileset graphics.
"""

from pathlib import Path
from typing import Tuple, Union

from PIL import Image

from .constants import DEFAULT_PREVIEW_SCALE, EMPTY_TILE
from .errors import TemplateWriteError
from .logging_config import get_logger
from .map_model import MapModel

logger = get_logger('preview')


def gid_color(gid: int) -> Tuple[int, int, int, int]:
    """Stable RGBA colour for a tile id (Knuth multiplicative hash)."""
    mixed = (gid * 2654435761) & 0xFFFFFF
    return ((mixed >> 16) & 0xFF, (mixed >> 8) & 0xFF, mixed & 0xFF, 255)


def render_preview(model: MapModel, scale: int = DEFAULT_PREVIEW_SCALE) -> Image.Image:
    """
    Draw all tile layers of ``model``.

    Args:
        model: Parsed map
        scale: Pixels per tile along each axis

    Returns:
        RGBA image of (width * scale, height * scale) pixels
    """
    if scale < 1:
        raise ValueError(f"scale must be at least 1, got {scale}")

    width, height = model.width, model.height
    image = Image.new('RGBA', (max(width, 1) * scale, max(height, 1) * scale), (0, 0, 0, 0))
    if width == 0 or height == 0:
        return image

    cells = width * height
    for layer in model.layers:
        if layer.num_data != cells:
            logger.warning(f"Layer '{layer.name}' has {layer.num_data} tiles for a "
                           f"{width}x{height} map; drawing what fits")
        for position, gid in enumerate(layer.tiles[:cells]):
            if gid == EMPTY_TILE:
                continue
            x = (position % width) * scale
            y = (position // width) * scale
            image.paste(gid_color(gid), (x, y, x + scale, y + scale))

    return image


def save_preview(model: MapModel, filepath: Union[str, Path], scale: int = DEFAULT_PREVIEW_SCALE) -> Path:
    """Render and save the preview PNG, returning its path."""
    return write_preview(render_preview(model, scale), filepath)


def write_preview(image: Image.Image, filepath: Union[str, Path]) -> Path:
    """Save an already rendered preview as PNG."""
    filepath = Path(filepath)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        image.save(str(filepath), "PNG")
    except OSError as e:
        raise TemplateWriteError(f"cannot write preview: {e}", str(filepath)) from e
    logger.info(f"Wrote preview {filepath}")
    return filepath
