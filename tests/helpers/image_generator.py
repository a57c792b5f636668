"""Synthetic image generation utilities for testing focus-crop.

This module generates test images with known characteristics (colored
halves, bright markers at known positions, transparency) so tests can check
which part of the source ended up in a crop.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image


RED = (255, 0, 0)
BLUE = (0, 0, 255)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


@dataclass
class ImageConfig:
    """Configuration for generating a test image."""
    width: int = 600
    height: int = 400
    format: str = "JPEG"


def _save(pixels: np.ndarray, output_path: Path, config: ImageConfig) -> Path:
    # (h, w, 3) arrays load as RGB, (h, w, 4) as RGBA
    image = Image.fromarray(pixels.astype(np.uint8))
    if config.format == "JPEG":
        image.save(output_path, format="JPEG", quality=95)
    else:
        image.save(output_path, format=config.format)
    return output_path


def create_split_image(
    output_path: Path,
    config: ImageConfig = None,
    left_color: Tuple[int, int, int] = RED,
    right_color: Tuple[int, int, int] = BLUE
) -> Path:
    """
    Generate an image whose left half and right half are different colors.

    Example:
        >>> create_split_image(Path("split.jpg"), ImageConfig(600, 400))
        >>> # columns 0-299 are red, 300-599 are blue
    """
    config = config or ImageConfig()
    pixels = np.zeros((config.height, config.width, 3), dtype=np.uint8)
    pixels[:, : config.width // 2] = left_color
    pixels[:, config.width // 2:] = right_color
    return _save(pixels, output_path, config)


def create_stacked_image(
    output_path: Path,
    config: ImageConfig = None,
    top_color: Tuple[int, int, int] = RED,
    bottom_color: Tuple[int, int, int] = BLUE
) -> Path:
    """Generate an image whose top half and bottom half are different colors."""
    config = config or ImageConfig()
    pixels = np.zeros((config.height, config.width, 3), dtype=np.uint8)
    pixels[: config.height // 2, :] = top_color
    pixels[config.height // 2:, :] = bottom_color
    return _save(pixels, output_path, config)


def create_image_with_marker(
    output_path: Path,
    marker_center: Tuple[float, float],
    marker_size: int = 40,
    config: ImageConfig = None
) -> Path:
    """
    Generate a black image with a white square marker.

    Args:
        output_path: Where to save the generated image
        marker_center: Marker center as fractions (0-1) of width and height
        marker_size: Marker edge length in pixels
        config: Image configuration
    """
    config = config or ImageConfig()
    pixels = np.zeros((config.height, config.width, 3), dtype=np.uint8)
    cx = int(marker_center[0] * config.width)
    cy = int(marker_center[1] * config.height)
    half = marker_size // 2
    pixels[max(0, cy - half): cy + half, max(0, cx - half): cx + half] = WHITE
    return _save(pixels, output_path, config)


def create_transparent_image(output_path: Path, config: ImageConfig = None) -> Path:
    """Generate a PNG that is opaque red on the left and fully transparent on the right."""
    config = config or ImageConfig(format="PNG")
    pixels = np.zeros((config.height, config.width, 4), dtype=np.uint8)
    pixels[:, : config.width // 2] = (255, 0, 0, 255)
    return _save(pixels, output_path, config)


def create_palette_image(output_path: Path, color=RED, config: ImageConfig = None) -> Path:
    """Generate a single-color PNG saved in palette ('P') mode."""
    config = config or ImageConfig(200, 100, "PNG")
    image = Image.new("RGB", (config.width, config.height), color)
    image.convert("P", palette=Image.Palette.ADAPTIVE).save(output_path, format="PNG")
    return output_path
