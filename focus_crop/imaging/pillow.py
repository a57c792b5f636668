"""
Pillow-based implementation of the imaging collaborators.
"""
from pathlib import Path
from typing import Union

from PIL import Image, ImageFilter

from focus_crop.config import ResampleOptions
from focus_crop.core.focus import CropOffset
from focus_crop.core.sizes import ImageDimensions, TargetSize
from focus_crop.imaging.backend import ImageBackend

# quality 0..3 -> filters with growing support, like box/hamming/lanczos2/lanczos3
RESAMPLING_FILTERS = {
    0: Image.Resampling.BOX,
    1: Image.Resampling.HAMMING,
    2: Image.Resampling.BICUBIC,
    3: Image.Resampling.LANCZOS,
}

UNSHARP_RADIUS = 1.0

FORMATS = {
    'image/jpeg': 'JPEG',
    'image/png': 'PNG',
}

# Camera JPEGs often open as MPO (JPEG with extra preview frames)
DECODABLE_FORMATS = {
    'image/jpeg': ('JPEG', 'MPO'),
    'image/png': ('PNG',),
}


class PillowBackend(ImageBackend):
    """
    ImageBackend using Pillow for all pixel work.

    Stateless, so instances can be sent to worker processes.

    Examples:
        >>> backend = PillowBackend()
        >>> image, dims = backend.decode_with_dimensions("cat.jpg", "image/jpeg")
        >>> print(f"{dims.width}x{dims.height}")
        1600x900
    """

    def decode(self, path: Union[str, Path], mimetype: str) -> Image.Image:
        expected = FORMATS.get(mimetype)
        if expected is None:
            raise ValueError(f"Cannot decode {mimetype}")

        with Image.open(path) as img:
            img.load()
            if img.format not in DECODABLE_FORMATS[mimetype]:
                raise ValueError(f"{path} is {img.format}, expected {expected}")
            # Detach from the file so the handle outlives the context
            return img.copy()

    def dimensions(self, image: Image.Image) -> ImageDimensions:
        width, height = image.size
        if width <= 0 or height <= 0:
            raise ValueError(f"Image has no area: {width}x{height}")
        return ImageDimensions(width, height)

    def resample(self, image: Image.Image, dimensions: ImageDimensions,
                 options: ResampleOptions) -> Image.Image:
        if not options.alpha and image.mode != 'RGB':
            image = _flatten(image)
        elif options.alpha and image.mode not in ('RGB', 'RGBA'):
            # A fresh palette canvas would not carry the source palette
            image = image.convert('RGBA')

        resized = image.resize(
            (dimensions.width, dimensions.height),
            RESAMPLING_FILTERS[int(options.quality)],
        )

        if options.unsharp_amount > 0:
            resized = resized.filter(ImageFilter.UnsharpMask(
                radius=UNSHARP_RADIUS,
                percent=int(options.unsharp_amount),
                threshold=int(options.unsharp_threshold),
            ))
        return resized

    def crop(self, image: Image.Image, offset: CropOffset, target: TargetSize) -> Image.Image:
        left = int(round(offset.left))
        top = int(round(offset.top))
        return image.crop((left, top, left + target.width, top + target.height))

    def encode(self, image: Image.Image, mimetype: str, output_path: Union[str, Path]) -> None:
        if mimetype == 'image/jpeg':
            if image.mode != 'RGB':
                image = _flatten(image)
            image.save(output_path, format='JPEG', quality=100, progressive=True)
        elif mimetype == 'image/png':
            image.save(output_path, format='PNG')
        else:
            raise ValueError(f"Cannot encode {mimetype}")


def _flatten(image: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any transparency onto black"""
    if image.mode in ('RGBA', 'LA') or (image.mode == 'P' and 'transparency' in image.info):
        rgba = image.convert('RGBA')
        background = Image.new('RGBA', rgba.size, (0, 0, 0, 255))
        return Image.alpha_composite(background, rgba).convert('RGB')
    return image.convert('RGB')
