"""
Abstract interface for the imaging collaborators.

The geometry in focus_crop.core never touches pixels. Decoding, resampling,
cropping and encoding are delegated to an ImageBackend, which allows:

1. Testing the orchestrator without real image files (using mocks)
2. Swapping the pixel library without touching the geometry
3. Dependency injection for better testability

Image handles are opaque to everything except the backend that produced
them.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Union

from focus_crop.config import ResampleOptions
from focus_crop.core.focus import CropOffset
from focus_crop.core.sizes import ImageDimensions, TargetSize

SUPPORTED_MIMETYPES = ('image/jpeg', 'image/png')


class ImageBackend(ABC):
    """
    Abstract base class for decode/resample/crop/encode collaborators.

    Implementations raise whatever their library raises; the orchestrator
    wraps those failures in CollaboratorError.
    """

    @abstractmethod
    def decode(self, path: Union[str, Path], mimetype: str) -> Any:
        """
        Decode an image file.

        Args:
            path: Path to a JPEG or PNG file
            mimetype: 'image/jpeg' or 'image/png'

        Returns:
            Opaque image handle
        """
        pass

    @abstractmethod
    def dimensions(self, image: Any) -> ImageDimensions:
        """
        Get the pixel size of an image handle.

        Raises:
            ValueError: If the image has zero area
        """
        pass

    @abstractmethod
    def resample(self, image: Any, dimensions: ImageDimensions, options: ResampleOptions) -> Any:
        """
        Resample an image to exactly the given dimensions.

        Args:
            image: Decoded image handle
            dimensions: Requested output size
            options: Filter quality, alpha handling and unsharp settings

        Returns:
            New image handle of the requested size
        """
        pass

    @abstractmethod
    def crop(self, image: Any, offset: CropOffset, target: TargetSize) -> Any:
        """
        Cut the target-sized window out of the buffer at the given offset.

        Returns:
            New image handle of exactly the target size
        """
        pass

    @abstractmethod
    def encode(self, image: Any, mimetype: str, output_path: Union[str, Path]) -> None:
        """
        Encode an image and write it to output_path.

        JPEG is written at quality 100, progressive. PNG is lossless.
        """
        pass

    def decode_with_dimensions(self, path: Union[str, Path], mimetype: str):
        """
        Decode an image and read its size in one call.

        Not abstract - provides default implementation using other methods.

        Returns:
            Tuple of (image handle, ImageDimensions)
        """
        image = self.decode(path, mimetype)
        return image, self.dimensions(image)
