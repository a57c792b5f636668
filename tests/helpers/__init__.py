"""Helper modules for focus-crop tests."""

from . import image_generator
from . import image_analyzer

__all__ = ['image_generator', 'image_analyzer']
