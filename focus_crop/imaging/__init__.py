"""
Imaging package.

Provides abstraction layer for pixel operations, allowing multiple
implementations (Pillow, mocks, etc.).
"""
from focus_crop.imaging.backend import ImageBackend, SUPPORTED_MIMETYPES
from focus_crop.imaging.pillow import PillowBackend

__all__ = ['ImageBackend', 'PillowBackend', 'SUPPORTED_MIMETYPES']
